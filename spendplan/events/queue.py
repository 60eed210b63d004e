""" Operations on the spending queue.

A queue is a list of `SpendingEvent`s in priority order. Every
operation here returns a new list (the input is never mutated) whose
priorities match list positions, so `queue[i].priority == i`.
Operations that can't be applied return the input queue itself, which
lets callers detect a no-op with `is`.
"""

import logging
from spendplan.events.event import (
    CLONE_SUFFIX, generate_event_id, renumber)
from spendplan.events.chain import (
    chain_graph, chain_head, chain_from_head, chain_members)

logger = logging.getLogger(__name__)

def _index_of(queue, event_id):
    for index, event in enumerate(queue):
        if event.id == event_id:
            return index
    return None

def add_event(queue, event):
    """ Appends `event` to the end of `queue` as a free-floating event.

    Args:
        queue (list[SpendingEvent]): The current queue.
        event (SpendingEvent): The event to add. Its `priority` and
            `locked_to` attributes are overwritten.

    Returns:
        list[SpendingEvent]: The new queue.
    """
    return renumber(list(queue) + [event._replace(locked_to=None)])

def remove_event(queue, event_id):
    """ Removes the event with id `event_id` from `queue`.

    Any event locked to the removed event becomes free-floating. Events
    further down the chain stay locked to their own predecessors.

    Returns:
        list[SpendingEvent]: The new queue.
    """
    remaining = []
    for event in queue:
        if event.id == event_id:
            continue
        if event.locked_to == event_id:
            event = event._replace(locked_to=None)
        remaining.append(event)
    return renumber(remaining)

def clone_event(queue, event_id, new_id=None):
    """ Inserts a copy of `event_id` after the chain containing it.

    The copy gets a new id and a `" (copy)"` suffix on its name. It is
    always free-floating, even if the original is chained. A
    free-floating original is copied to the very next position; a
    chained one is copied past the last member of its chain, so the
    chain stays unbroken.

    Args:
        queue (list[SpendingEvent]): The current queue.
        event_id (str): The id of the event to copy.
        new_id (str): The id to give the copy. Optional; a new id is
            generated if not provided.

    Returns:
        list[SpendingEvent]: The new queue, or `queue` itself if
        `event_id` isn't found.
    """
    index = _index_of(queue, event_id)
    if index is None:
        return queue
    if new_id is None:
        new_id = generate_event_id()
    source = queue[index]
    clone = source._replace(
        id=new_id, name=source.name + CLONE_SUFFIX, locked_to=None)
    members = chain_members(queue, event_id)
    last = max(
        [index] + [_index_of(queue, member.id) for member in members])
    result = list(queue)
    result.insert(last + 1, clone)
    return renumber(result)

def update_event(queue, event_id, **changes):
    """ Replaces attributes of the event with id `event_id`.

    `id` and `priority` can't be changed this way; use the other queue
    operations to move events around.

    Returns:
        list[SpendingEvent]: The new queue, or `queue` itself if
        `event_id` isn't found.

    Raises:
        ValueError: `changes` includes `id` or `priority`.
    """
    if 'id' in changes or 'priority' in changes:
        raise ValueError('update_event: cannot change id or priority.')
    index = _index_of(queue, event_id)
    if index is None:
        return queue
    result = list(queue)
    result[index] = result[index]._replace(**changes)
    return renumber(result)

def reorder_events(queue, from_index, to_index):
    """ Moves the event at `from_index` so that it lands at `to_index`.

    This mirrors a drag-and-drop of one queue entry onto another:

    * An event locked to another event can't be moved on its own.
    * A chain head moves together with all of its dependents, which
      keep their relative order.
    * Dropping onto any member of a chain (its head or a dependent)
      places the moved events immediately before that chain's head,
      so a chain is never split.
    * Otherwise, moving forward places the moved events after the
      target and moving backward places them before it.

    Returns:
        list[SpendingEvent]: The new queue, or `queue` itself if the
        move is a no-op or isn't allowed.
    """
    size = len(queue)
    if not (0 <= from_index < size and 0 <= to_index < size):
        return queue
    if from_index == to_index:
        return queue

    graph = chain_graph(queue)
    moved = queue[from_index]
    if graph.in_degree(moved.id) > 0:
        logger.debug(
            'Cannot move %s on its own: it is locked to %s.',
            moved.id, moved.locked_to)
        return queue

    unit_ids = {event.id for event in chain_from_head(queue, moved.id, graph)}
    target = queue[to_index]
    if target.id in unit_ids:
        return queue

    # Move the unit in its existing queue order:
    unit = [event for event in queue if event.id in unit_ids]
    remaining = [event for event in queue if event.id not in unit_ids]

    target_chain = chain_from_head(
        queue, chain_head(queue, target.id, graph).id, graph)
    if len(target_chain) > 1:
        insert_at = _index_of(remaining, target_chain[0].id)
    elif from_index < to_index:
        insert_at = _index_of(remaining, target.id) + 1
    else:
        insert_at = _index_of(remaining, target.id)

    result = remaining[:insert_at] + unit + remaining[insert_at:]
    if [event.id for event in result] == [event.id for event in queue]:
        return queue
    return renumber(result)
