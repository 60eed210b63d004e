""" This module provides the `Planner` class for managing a spending plan.

A `Planner` holds the income configuration for each currency and the
spending queue, applies defaults from `Settings`, and builds timelines
on request.
"""

import logging
from spendplan.currency import default_income, check_income
from spendplan.events import (
    SpendingEvent, generate_event_id, add_event, remove_event,
    clone_event, update_event, reorder_events, toggle_chain,
    group_into_chains, renumber)
from spendplan.income import derived_income
from spendplan.settings import Settings
from spendplan.timeline.dates import to_date, current_week_proration_factor
from spendplan.timeline.scheduler import TimelineScheduler
from spendplan.utility.precision import HighPrecisionHandler

logger = logging.getLogger(__name__)

class Planner(HighPrecisionHandler):
    """ A convenience class for building timelines based on settings.

    `Planner` owns a spending queue and a `CurrencyIncome` for each
    tracked currency. Queue operations replace `queue` with a new list
    (the queue functions never mutate their input), so a reference to
    an old queue remains a valid snapshot.

    Any currency listed in `settings.currencies` without an explicit
    income starts with a zero balance, zero income and the growth rate
    given by `settings.growth_rate_default`.

    Args:
        settings (Settings): Provides defaults. Optional. If not
            provided, a default `Settings` object is used.
        incomes (Iterable[CurrencyIncome]): Initial income
            configuration. Optional.
        queue (Iterable[SpendingEvent]): Initial spending queue, in
            priority order. Optional.
        high_precision (Callable[[float], HighPrecisionType]): A
            callable object, such as a method or class, which takes a
            single numeric argument and returns a value in a
            high-precision type (e.g. Decimal). Optional.

    Attributes:
        settings (Settings): The source of default values.
        incomes (dict[str, CurrencyIncome]): Income configuration,
            keyed by currency id.
        queue (list[SpendingEvent]): The spending queue, in priority
            order.
    """

    def __init__(
            self, settings=None, incomes=None, queue=None,
            high_precision=None):
        super().__init__(high_precision=high_precision)
        if settings is None:
            self.settings = Settings()
        else:
            self.settings = settings
        self.incomes = {
            currency_id: default_income(
                currency_id, self.settings.growth_rate_default(currency_id))
            for currency_id in self.settings.currencies}
        if incomes is not None:
            for income in incomes:
                self.set_income(income)
        self.queue = []
        if queue is not None:
            self.queue = renumber(list(queue))

    def set_income(self, income):
        """ Sets the income configuration for `income.currency_id`.

        Raises:
            ValueError: `income` has a negative balance or income, or a
                growth rate outside the allowed range.
        """
        check_income(income)
        self.incomes[income.currency_id] = income

    def income(self, currency_id):
        """ The `CurrencyIncome` for `currency_id`.

        Raises:
            KeyError: `currency_id` isn't tracked by this planner.
        """
        return self.incomes[currency_id]

    def derive_income(
            self, currency_id, samples, lookback_period=None,
            reference_date=None):
        """ Replaces the income for `currency_id` with one derived from runs.

        The current balance is kept. The lookback period defaults to
        `settings.lookback_period`.

        Returns:
            CurrencyIncome: The new income configuration.
        """
        if lookback_period is None:
            lookback_period = self.settings.lookback_period
        current_balance = 0
        if currency_id in self.incomes:
            current_balance = self.incomes[currency_id].current_balance
        income = derived_income(
            currency_id, samples, current_balance, lookback_period,
            reference_date)
        self.set_income(income)
        return income

    def event(self, event_id):
        """ The event in the queue with id `event_id`, or `None`. """
        for event in self.queue:
            if event.id == event_id:
                return event
        return None

    def add_event(
            self, name, currency_id, amount, duration_days=None,
            event_id=None):
        """ Adds a new free-floating event to the end of the queue.

        Returns:
            SpendingEvent: The added event.

        Raises:
            ValueError: `currency_id` isn't tracked or `amount` isn't
                positive.
        """
        if currency_id not in self.incomes:
            raise ValueError(
                'Planner: unknown currency ' + str(currency_id) + '.')
        if amount <= 0:
            raise ValueError('Planner: amount must be positive.')
        if event_id is None:
            event_id = generate_event_id()
        self.queue = add_event(
            self.queue,
            SpendingEvent(event_id, name, currency_id, amount, duration_days))
        return self.queue[-1]

    def remove_event(self, event_id):
        """ Removes `event_id`, unlinking anything locked to it. """
        self.queue = remove_event(self.queue, event_id)

    def clone_event(self, event_id):
        """ Copies `event_id` into the slot after its chain.

        Returns:
            SpendingEvent: The copy, or `None` if `event_id` isn't in
            the queue.
        """
        queue = clone_event(self.queue, event_id)
        if queue is self.queue:
            return None
        known = {event.id for event in self.queue}
        self.queue = queue
        return next(event for event in queue if event.id not in known)

    def update_event(self, event_id, **changes):
        """ Changes attributes of `event_id`.

        Returns:
            bool: True if the event was found and updated.
        """
        queue = update_event(self.queue, event_id, **changes)
        changed = queue is not self.queue
        self.queue = queue
        return changed

    def reorder(self, from_index, to_index):
        """ Moves the event at `from_index` to `to_index`.

        Returns:
            bool: True if the queue changed.
        """
        queue = reorder_events(self.queue, from_index, to_index)
        changed = queue is not self.queue
        self.queue = queue
        return changed

    def toggle_chain(self, event_id):
        """ Links `event_id` to the event before it, or unlinks it.

        Returns:
            bool: True if the toggle was applied.
        """
        queue = toggle_chain(self.queue, event_id)
        if queue is None:
            return False
        self.queue = queue
        return True

    def chains(self):
        """ The queue grouped into chains; see `group_into_chains`. """
        return group_into_chains(self.queue)

    def proration_factor(self, today=None):
        """ The share of this week's income still to come.

        Returns 1 if `settings.prorate_current_week` is False.
        """
        if not self.settings.prorate_current_week:
            return 1
        return current_week_proration_factor(to_date(today))

    def timeline(self, weeks=None, start_date=None):
        """ Schedules the queue against the current incomes.

        Args:
            weeks (int): The number of weeks to simulate. Optional.
                Defaults to `settings.timeline_weeks`.
            start_date (date, str): The date on which week 0 begins.
                Optional. Defaults to today. The current week is
                prorated from this date if
                `settings.prorate_current_week` is True.

        Returns:
            TimelineData: The scheduled timeline.
        """
        if weeks is None:
            weeks = self.settings.timeline_weeks
        start_date = to_date(start_date)
        factor = self.proration_factor(start_date)
        logger.debug(
            'Building a %d-week timeline for %d events from %s.',
            weeks, len(self.queue), start_date)
        scheduler = TimelineScheduler(high_precision=self.high_precision)
        return scheduler.schedule(
            self.incomes.values(), self.queue, weeks, start_date, factor)
