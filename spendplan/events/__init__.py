""" Provides the spending queue and the chains that order it. """

from spendplan.events.event import (
    SpendingEvent, SPENDING_EVENT_FIELDS, generate_event_id,
    sort_by_priority, renumber)
from spendplan.events.chain import (
    ChainGroup, chain_graph, is_chained, predecessor, is_chain_head,
    chain_head, chain_from_head, chain_members, can_chain,
    group_into_chains, toggle_chain)
from spendplan.events.queue import (
    add_event, remove_event, clone_event, update_event, reorder_events)
