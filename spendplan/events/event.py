""" Defines the `SpendingEvent` record held in the spending queue. """

import uuid
from collections import namedtuple

SPENDING_EVENT_FIELDS = [
    'id', 'name', 'currency_id', 'amount',
    'duration_days', 'priority', 'locked_to']
SpendingEvent = namedtuple(
    'SpendingEvent', SPENDING_EVENT_FIELDS, defaults=(None, 0, None))
SpendingEvent.__doc__ = """ A planned purchase in a single currency.

Attributes:
    id (str): Unique identifier within a queue.
    name (str): User-facing name, e.g. "Unlock Damage Mastery".
    currency_id (str): The currency the purchase is paid in.
    amount (Number): The cost. Must be positive.
    duration_days (int): How long the purchase takes to complete (e.g.
        for labs). Optional.
    priority (int): Position in the queue. Lower values are purchased
        first. Queue operations keep priorities dense and zero-based.
    locked_to (str): The id of the event this one is chained to (its
        immediate predecessor), or `None` if the event is free-floating.
"""

EVENT_ID_PREFIX = 'event-'
CLONE_SUFFIX = ' (copy)'

def generate_event_id():
    """ Generates a new unique event id, e.g. `'event-1f3a...'`. """
    return EVENT_ID_PREFIX + uuid.uuid4().hex

def sort_by_priority(queue):
    """ Returns a new list of the events in `queue`, by priority.

    The sort is stable, so events sharing a priority keep their
    relative order.
    """
    return sorted(queue, key=lambda event: event.priority)

def renumber(queue):
    """ Returns a copy of `queue` with `priority` equal to position. """
    return [
        event if event.priority == index else event._replace(priority=index)
        for index, event in enumerate(queue)]
