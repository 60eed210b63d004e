""" Provides methods for inspecting and editing chains of events.

An event may be locked to another event in the same queue (via its
`locked_to` attribute), in which case it must not be purchased before
that event. Following these links from event to event produces a chain;
the event at the start of a chain (which is not locked to anything) is
its head. Chains form a forest: a head may have several dependents.

Links are resolved against a `networkx.DiGraph` built from the queue.
Links to events that aren't in the queue are ignored, as are links that
would close a cycle, so the affected events behave as if they were
free-floating.
"""

import logging
from collections import namedtuple
import networkx
from spendplan.events.event import sort_by_priority, renumber

logger = logging.getLogger(__name__)

ChainGroup = namedtuple('ChainGroup', ['events', 'is_chain'])
ChainGroup.__doc__ = (
    "A chain head and its dependents (in priority order), or a single "
    "free-floating event. `is_chain` is True for groups of two or more.")

def chain_graph(queue):
    """ Builds a directed graph of the chain links in `queue`.

    Each event id is a node (with the event stored under the `event`
    attribute). Each valid link adds an edge from the predecessor to
    the event locked to it.

    Args:
        queue (Iterable[SpendingEvent]): A queue of events.

    Returns:
        networkx.DiGraph: A forest of chains.
    """
    graph = networkx.DiGraph()
    events = sort_by_priority(queue)
    for event in events:
        graph.add_node(event.id, event=event)
    for event in events:
        predecessor = event.locked_to
        if predecessor is None:
            continue
        if predecessor not in graph:
            logger.debug(
                'Event %s is locked to missing event %s; '
                'treating it as free-floating.', event.id, predecessor)
            continue
        # A link back into one's own descendants would close a cycle:
        if predecessor == event.id or networkx.has_path(
                graph, event.id, predecessor):
            logger.debug(
                'Ignoring link from %s to %s, which would form a cycle.',
                event.id, predecessor)
            continue
        graph.add_edge(predecessor, event.id)
    return graph

def _event(graph, event_id):
    return graph.nodes[event_id]['event']

def _predecessor_id(graph, event_id):
    """ Returns the id of the event `event_id` is locked to, if any. """
    for predecessor in graph.predecessors(event_id):
        return predecessor
    return None

def _head_id(graph, event_id):
    current = event_id
    parent = _predecessor_id(graph, current)
    while parent is not None:
        current = parent
        parent = _predecessor_id(graph, current)
    return current

def _ordered(graph, event_ids):
    """ Returns the events for `event_ids`, in priority order. """
    return sort_by_priority(_event(graph, event_id) for event_id in event_ids)

def is_chained(event):
    """ Returns True if `event` has a `locked_to` link.

    This doesn't check that the link is valid. Use `predecessor` to
    resolve a link against a queue.
    """
    return event.locked_to is not None

def predecessor(queue, event_id, graph=None):
    """ Returns the event that `event_id` is validly locked to.

    Returns:
        SpendingEvent: The immediate predecessor, or `None` if the event
        is free-floating, its link is dangling or it isn't in `queue`.
    """
    if graph is None:
        graph = chain_graph(queue)
    if event_id not in graph:
        return None
    parent = _predecessor_id(graph, event_id)
    if parent is None:
        return None
    return _event(graph, parent)

def is_chain_head(queue, event_id, graph=None):
    """ Returns True if `event_id` heads a chain of two or more events.

    A chain head is not locked to anything and has at least one
    dependent.
    """
    if graph is None:
        graph = chain_graph(queue)
    if event_id not in graph:
        return False
    return (
        graph.in_degree(event_id) == 0 and
        graph.out_degree(event_id) > 0)

def chain_head(queue, event_id, graph=None):
    """ Walks up the chain containing `event_id` to find its head.

    Returns:
        SpendingEvent: The head of the chain (the event itself if it is
        free-floating), or `None` if `event_id` isn't in `queue`.
    """
    if graph is None:
        graph = chain_graph(queue)
    if event_id not in graph:
        return None
    return _event(graph, _head_id(graph, event_id))

def chain_from_head(queue, head_id, graph=None):
    """ Returns `head_id` and all of its transitive dependents.

    Events are returned in priority order, starting with the head.
    An unknown `head_id` produces an empty list.
    """
    if graph is None:
        graph = chain_graph(queue)
    if head_id not in graph:
        return []
    dependents = _ordered(graph, networkx.descendants(graph, head_id))
    return [_event(graph, head_id)] + dependents

def chain_members(queue, event_id, graph=None):
    """ Returns every event in the chain containing `event_id`.

    Events are returned in priority order, starting with the head.
    """
    if graph is None:
        graph = chain_graph(queue)
    if event_id not in graph:
        return []
    return chain_from_head(queue, _head_id(graph, event_id), graph=graph)

def can_chain(queue, event_id):
    """ Returns True if `event_id` has an event before it to chain to. """
    ids = [event.id for event in sort_by_priority(queue)]
    return event_id in ids and ids.index(event_id) > 0

def group_into_chains(queue):
    """ Groups `queue` into chains and free-floating events.

    Each chain head starts a group holding itself and its dependents.
    Free-floating events without dependents form their own groups.

    Returns:
        list[ChainGroup]: Groups in the priority order of their heads.
    """
    graph = chain_graph(queue)
    groups = []
    for event in sort_by_priority(queue):
        if graph.in_degree(event.id) > 0:
            # Included in its head's group.
            continue
        events = tuple(chain_from_head(queue, event.id, graph=graph))
        groups.append(ChainGroup(events, len(events) > 1))
    return groups

def toggle_chain(queue, event_id):
    """ Links `event_id` to the event before it, or unlinks it.

    In priority order, a free-floating event is locked to the event
    immediately before it. An event that is already locked to something
    (even a missing event) is made free-floating.

    Returns:
        list[SpendingEvent]: A new queue in priority order, with
        priorities renumbered. `None` if the toggle isn't applicable
        because `event_id` isn't in `queue` or is the first event.
    """
    events = sort_by_priority(queue)
    ids = [event.id for event in events]
    if event_id not in ids:
        logger.debug('Cannot toggle chain for unknown event %s.', event_id)
        return None
    index = ids.index(event_id)
    if index == 0:
        logger.debug('Cannot chain %s: it is the first event.', event_id)
        return None

    event = events[index]
    if event.locked_to is None:
        locked_to = events[index - 1].id
    else:
        locked_to = None
    events[index] = event._replace(locked_to=locked_to)
    return renumber(events)
