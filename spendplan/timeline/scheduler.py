""" Schedules spending events against projected currency balances.

Events are purchased in priority order, each in the earliest week whose
ending balance (including that week's income) covers its cost. Buying
an event reduces the balance of every later week, so a purchase is
never allowed to leave a balance negative.

Two rules keep the order of purchases consistent with the queue:

* An event locked to another event is never purchased before it.
* An event is never purchased before a higher-priority event in the
  same currency. Events in different currencies don't wait for each
  other unless they're chained.
"""

import logging
from collections import namedtuple
from spendplan.events.chain import chain_graph
from spendplan.events.event import sort_by_priority
from spendplan.projection import (
    project_all_balances, project_all_incomes, find_affordable_week)
from spendplan.timeline.dates import to_date, add_days, week_start_date
from spendplan.utility.precision import HighPrecisionHandler

logger = logging.getLogger(__name__)

TIMELINE_EVENT_FIELDS = [
    'event', 'trigger_week', 'trigger_date', 'end_date', 'balance_at_trigger']
TimelineEvent = namedtuple('TimelineEvent', TIMELINE_EVENT_FIELDS)
TimelineEvent.__doc__ = """ A spending event placed on the timeline.

Attributes:
    event (SpendingEvent): The scheduled event.
    trigger_week (int): The week (0 = the current week) in which the
        event is purchased.
    trigger_date (date): The date on which `trigger_week` begins.
    end_date (date): `trigger_date` plus the event's `duration_days`,
        or `None` for events without a duration.
    balance_at_trigger (Number): The funds available when the event is
        purchased, i.e. the ending balance of `trigger_week` before the
        event's cost is deducted.
"""

class TimelineData(object):
    """ The result of scheduling a queue of spending events.

    Attributes:
        events (list[TimelineEvent]): Scheduled events, in the order in
            which they were scheduled (i.e. priority order).
        unaffordable_events (list[SpendingEvent]): Events that couldn't
            be afforded within the timeline, in priority order.
        balances_by_week (dict[str, list[Number]]): For each currency,
            `weeks + 1` balances. Index 0 is the starting balance and
            index `w + 1` is the balance at the end of week `w`, after
            all purchases.
        income_by_week (dict[str, list[Number]]): For each currency,
            the (full, unprorated) income earned in each week.
        expenditure_by_week (dict[str, list[Number]]): For each
            currency, the total spent in each week.
        start_date (date): The date on which week 0 begins.
        weeks (int): The number of weeks in the timeline.
        week0_proration_factor (float): The portion of week 0's income
            that was counted.
    """

    def __init__(
            self, events, unaffordable_events, balances_by_week,
            income_by_week, expenditure_by_week, start_date, weeks,
            week0_proration_factor=1):
        self.events = events
        self.unaffordable_events = unaffordable_events
        self.balances_by_week = balances_by_week
        self.income_by_week = income_by_week
        self.expenditure_by_week = expenditure_by_week
        self.start_date = start_date
        self.weeks = weeks
        self.week0_proration_factor = week0_proration_factor

    def timeline_event(self, event_id):
        """ The `TimelineEvent` for `event_id`, or `None` if unscheduled. """
        for timeline_event in self.events:
            if timeline_event.event.id == event_id:
                return timeline_event
        return None

    def trigger_week(self, event_id):
        """ The week `event_id` is purchased in, or `None`. """
        timeline_event = self.timeline_event(event_id)
        if timeline_event is None:
            return None
        return timeline_event.trigger_week

    def is_scheduled(self, event_id):
        """ Returns True if `event_id` was placed on the timeline. """
        return self.timeline_event(event_id) is not None

class TimelineScheduler(HighPrecisionHandler):
    """ Places spending events on a week-by-week timeline.

    Each call to `schedule` projects fresh balances and keeps no state
    between calls, so one scheduler may be reused (or shared) freely.

    Arguments:
        high_precision (Callable[[float], HighPrecisionType]): A
            callable object, such as a method or class, which takes a
            single numeric argument and returns a value in a
            high-precision type (e.g. Decimal). Optional.
    """

    def schedule(
            self, incomes, events, weeks, start_date=None,
            week0_proration_factor=1):
        """ Finds the week in which each event in `events` is purchased.

        Args:
            incomes (Iterable[CurrencyIncome]): Income configuration for
                each currency. Every event's currency must be present.
            events (Iterable[SpendingEvent]): The spending queue. Events
                are processed in priority order regardless of the order
                in which they're given.
            weeks (int): The number of weeks to simulate.
            start_date (date, str): The date on which week 0 begins.
                Optional. Defaults to today.
            week0_proration_factor (float): The portion of week 0's
                income still to be received (0 < factor <= 1).
                Optional. Defaults to 1.

        Returns:
            TimelineData: Scheduled and unaffordable events, along with
            per-currency balances, incomes and expenditures by week.

        Raises:
            ValueError: `weeks` is negative, the proration factor is
                outside (0, 1], or an event's currency has no income
                configuration.
        """
        if weeks < 0:
            raise ValueError('schedule: weeks must be non-negative.')
        if not 0 < week0_proration_factor <= 1:
            raise ValueError(
                'schedule: week0_proration_factor must be in (0, 1].')
        start_date = to_date(start_date)
        incomes = list(incomes)
        queue = sort_by_priority(events)

        known = {income.currency_id for income in incomes}
        for event in queue:
            if event.currency_id not in known:
                raise ValueError(
                    'schedule: no income configured for currency ' +
                    str(event.currency_id) + ' (event ' + str(event.id) + ').')

        balances = project_all_balances(
            incomes, weeks, week0_proration_factor,
            high_precision=self.high_precision)
        income_by_week = project_all_incomes(
            incomes, weeks, high_precision=self.high_precision)
        zero = self.precision_convert(0)
        expenditure = {
            income.currency_id: [zero] * weeks for income in incomes}

        graph = chain_graph(queue)
        # The week each scheduled event was purchased in:
        trigger_weeks = {}
        # The latest purchase week for each currency:
        currency_weeks = {}
        scheduled = []
        unaffordable = []

        for event in queue:
            min_week = self._min_week(
                event, graph, trigger_weeks, currency_weeks)
            amount = self.precision_convert(event.amount)
            series = balances[event.currency_id]
            week = self._find_week(series, amount, min_week)
            if week is None:
                logger.info(
                    'Event %s (%s) is unaffordable within %d weeks.',
                    event.id, event.name, weeks)
                unaffordable.append(event)
                continue

            balance_at_trigger = series[week + 1]
            for index in range(week + 1, len(series)):
                series[index] -= amount
            expenditure[event.currency_id][week] += amount

            trigger_date = week_start_date(week, start_date)
            end_date = None
            if event.duration_days:
                end_date = add_days(trigger_date, event.duration_days)
            scheduled.append(TimelineEvent(
                event, week, trigger_date, end_date, balance_at_trigger))
            trigger_weeks[event.id] = week
            currency_weeks[event.currency_id] = week
            logger.debug(
                'Scheduled %s in week %d (minimum week %d).',
                event.id, week, min_week)

        return TimelineData(
            scheduled, unaffordable, balances, income_by_week, expenditure,
            start_date, weeks, self.precision_convert(week0_proration_factor))

    @staticmethod
    def _min_week(event, graph, trigger_weeks, currency_weeks):
        """ The earliest week `event` may be purchased in. """
        min_week = currency_weeks.get(event.currency_id, 0)
        # Dangling and cycle-forming links have no edge in `graph`:
        for parent in graph.predecessors(event.id):
            if parent in trigger_weeks:
                min_week = max(min_week, trigger_weeks[parent])
        return min_week

    @staticmethod
    def _find_week(series, amount, min_week):
        """ The first week from `min_week` whose ending balance is enough.

        Returns `None` if there's no such week in the timeline.
        """
        # Week `n` ends with balance `series[n + 1]`:
        index = find_affordable_week(series, amount, min_week + 1)
        if index is None:
            return None
        return index - 1

def schedule(
        incomes, events, weeks, start_date=None, week0_proration_factor=1,
        *, high_precision=None):
    """ Schedules `events` against `incomes`.

    A convenience wrapper around `TimelineScheduler.schedule`; see that
    method for details.
    """
    scheduler = TimelineScheduler(high_precision=high_precision)
    return scheduler.schedule(
        incomes, events, weeks, start_date, week0_proration_factor)
