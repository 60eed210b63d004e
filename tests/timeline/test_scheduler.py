""" Unit tests for the `TimelineScheduler` class. """

import unittest
import datetime
from decimal import Decimal
from spendplan.currency import CurrencyIncome, COINS, STONES, GEMS
from spendplan.events.event import SpendingEvent
from spendplan.projection import project_all_balances, project_all_incomes
from spendplan.timeline.scheduler import (
    TimelineScheduler, TimelineData, TimelineEvent, schedule)

START = datetime.date(2024, 1, 7)

def event(event_id, amount, currency_id=COINS, priority=0, **kwargs):
    """ Convenience method for building a `SpendingEvent`. """
    return SpendingEvent(
        event_id, event_id.title(), currency_id, amount,
        priority=priority, **kwargs)

class TestSchedulerBasic(unittest.TestCase):
    """ Tests scheduling single events. """

    def setUp(self):
        self.scheduler = TimelineScheduler()

    def test_immediately_affordable(self):
        """ Tests an event affordable in week 0. """
        incomes = [CurrencyIncome(COINS, 1000, 100, 0)]
        timeline = self.scheduler.schedule(
            incomes, [event('a', 500)], 4, START)
        self.assertIsInstance(timeline, TimelineData)
        self.assertEqual(len(timeline.events), 1)
        scheduled = timeline.events[0]
        self.assertIsInstance(scheduled, TimelineEvent)
        self.assertEqual(scheduled.trigger_week, 0)
        self.assertEqual(scheduled.balance_at_trigger, 1100)
        self.assertEqual(scheduled.trigger_date, START)
        self.assertEqual(
            timeline.balances_by_week[COINS], [1000, 600, 700, 800, 900])

    def test_saving_up(self):
        """ Tests an event that must be saved up for. """
        incomes = [CurrencyIncome(COINS, 100, 100, 0)]
        timeline = self.scheduler.schedule(
            incomes, [event('a', 500)], 5, START)
        self.assertEqual(timeline.trigger_week('a'), 3)
        self.assertEqual(
            timeline.timeline_event('a').trigger_date,
            datetime.date(2024, 1, 28))
        self.assertEqual(
            timeline.expenditure_by_week[COINS], [0, 0, 0, 500, 0])

    def test_unaffordable(self):
        """ Tests an event that can't be afforded within the timeline. """
        incomes = [CurrencyIncome(COINS, 100, 100, 0)]
        events = [
            event('big', 10000, priority=0),
            event('small', 50, priority=1)]
        timeline = self.scheduler.schedule(incomes, events, 4, START)
        self.assertEqual(timeline.unaffordable_events, [events[0]])
        self.assertFalse(timeline.is_scheduled('big'))
        self.assertIsNone(timeline.trigger_week('big'))
        # Later events are still scheduled, and aren't held back by
        # the unaffordable one:
        self.assertEqual(timeline.trigger_week('small'), 0)
        self.assertEqual(
            timeline.balances_by_week[COINS], [100, 150, 250, 350, 450])

    def test_end_date(self):
        """ Tests that durations produce an end date. """
        incomes = [CurrencyIncome(COINS, 1000, 0, 0)]
        events = [
            event('lab', 100, duration_days=10, priority=0),
            event('plain', 100, priority=1)]
        timeline = self.scheduler.schedule(incomes, events, 2, START)
        self.assertEqual(
            timeline.timeline_event('lab').end_date,
            datetime.date(2024, 1, 17))
        self.assertIsNone(timeline.timeline_event('plain').end_date)

    def test_proration(self):
        """ Tests that a prorated week 0 can delay a purchase. """
        incomes = [CurrencyIncome(COINS, 0, 100, 0)]
        timeline = self.scheduler.schedule(
            incomes, [event('a', 60)], 3, START, week0_proration_factor=0.5)
        self.assertEqual(timeline.trigger_week('a'), 1)
        self.assertEqual(timeline.week0_proration_factor, 0.5)
        # Income is reported unprorated:
        self.assertEqual(timeline.income_by_week[COINS], [100, 100, 100])

    def test_no_events(self):
        """ Tests scheduling an empty queue. """
        incomes = [CurrencyIncome(COINS, 10, 10, 0)]
        timeline = self.scheduler.schedule(incomes, [], 2, START)
        self.assertEqual(timeline.events, [])
        self.assertEqual(timeline.unaffordable_events, [])
        self.assertEqual(timeline.balances_by_week[COINS], [10, 20, 30])
        self.assertEqual(timeline.expenditure_by_week[COINS], [0, 0])

    def test_zero_weeks(self):
        """ Tests that nothing is affordable in an empty timeline. """
        incomes = [CurrencyIncome(COINS, 1000, 0, 0)]
        timeline = self.scheduler.schedule(incomes, [event('a', 1)], 0, START)
        self.assertEqual(timeline.events, [])
        self.assertEqual(len(timeline.unaffordable_events), 1)

    def test_start_date_string(self):
        """ Tests parsing a string start date. """
        incomes = [CurrencyIncome(COINS, 0, 0, 0)]
        timeline = self.scheduler.schedule(incomes, [], 1, '2024-01-07')
        self.assertEqual(timeline.start_date, START)

    def test_matches_projection(self):
        """ Tests that an empty queue leaves the projected series as is. """
        incomes = [
            CurrencyIncome(COINS, 100, 50, 5),
            CurrencyIncome(GEMS, 10, 3, -2)]
        timeline = self.scheduler.schedule(
            incomes, [], 6, START, week0_proration_factor=0.5)
        self.assertEqual(
            timeline.balances_by_week,
            project_all_balances(incomes, 6, 0.5))
        self.assertEqual(
            timeline.income_by_week, project_all_incomes(incomes, 6))

    def test_affordable_on_last_week(self):
        """ Tests an event only affordable with the final week's income. """
        incomes = [CurrencyIncome(COINS, 0, 100, 0)]
        timeline = self.scheduler.schedule(
            incomes, [event('a', 400)], 4, START)
        self.assertEqual(timeline.trigger_week('a'), 3)
        timeline = self.scheduler.schedule(
            incomes, [event('a', 401)], 4, START)
        self.assertFalse(timeline.is_scheduled('a'))

class TestSchedulerOrdering(unittest.TestCase):
    """ Tests how events constrain each other. """

    def setUp(self):
        self.scheduler = TimelineScheduler()

    def test_priority_order(self):
        """ Tests that a cheap event waits for a pricier one ahead of it. """
        incomes = [CurrencyIncome(COINS, 1510000, 234000, 0)]
        events = [
            event('first', 800000, priority=0),
            event('second', 960000, priority=1),
            event('third', 500000, priority=2)]
        timeline = self.scheduler.schedule(incomes, events, 12, START)
        self.assertEqual(timeline.trigger_week('first'), 0)
        self.assertEqual(timeline.trigger_week('second'), 1)
        self.assertEqual(timeline.trigger_week('third'), 3)

    def test_input_order_ignored(self):
        """ Tests that events are processed by priority, not list order. """
        incomes = [CurrencyIncome(COINS, 1510000, 234000, 0)]
        events = [
            event('third', 500000, priority=2),
            event('first', 800000, priority=0),
            event('second', 960000, priority=1)]
        timeline = self.scheduler.schedule(incomes, events, 12, START)
        self.assertEqual(
            [scheduled.event.id for scheduled in timeline.events],
            ['first', 'second', 'third'])
        self.assertEqual(timeline.trigger_week('third'), 3)

    def test_currencies_independent(self):
        """ Tests that unchained events in other currencies don't wait. """
        incomes = [
            CurrencyIncome(COINS, 0, 100, 0),
            CurrencyIncome(GEMS, 100, 0, 0)]
        events = [
            event('coins', 300, COINS, priority=0),
            event('gems', 50, GEMS, priority=1)]
        timeline = self.scheduler.schedule(incomes, events, 4, START)
        self.assertEqual(timeline.trigger_week('coins'), 2)
        self.assertEqual(timeline.trigger_week('gems'), 0)

    def test_chain_across_currencies(self):
        """ Tests that a chained event waits for its predecessor. """
        incomes = [
            CurrencyIncome(COINS, 0, 100, 0),
            CurrencyIncome(GEMS, 100, 0, 0)]
        events = [
            event('coins', 300, COINS, priority=0),
            event('gems', 50, GEMS, priority=1, locked_to='coins')]
        timeline = self.scheduler.schedule(incomes, events, 4, START)
        self.assertEqual(timeline.trigger_week('coins'), 2)
        self.assertEqual(timeline.trigger_week('gems'), 2)
        # The gems balance is only reduced from week 2 on:
        self.assertEqual(
            timeline.balances_by_week[GEMS], [100, 100, 100, 50, 50])

    def test_chain_unscheduled_predecessor(self):
        """ Tests that an unaffordable predecessor doesn't block. """
        incomes = [
            CurrencyIncome(COINS, 0, 100, 0),
            CurrencyIncome(GEMS, 100, 0, 0)]
        events = [
            event('coins', 10000, COINS, priority=0),
            event('gems', 50, GEMS, priority=1, locked_to='coins')]
        timeline = self.scheduler.schedule(incomes, events, 4, START)
        self.assertEqual(timeline.trigger_week('gems'), 0)

    def test_dangling_link(self):
        """ Tests that a link to a missing event is ignored. """
        incomes = [CurrencyIncome(GEMS, 100, 0, 0)]
        events = [event('gems', 50, GEMS, locked_to='removed')]
        timeline = self.scheduler.schedule(incomes, events, 2, START)
        self.assertEqual(timeline.trigger_week('gems'), 0)

    def test_invariants(self):
        """ Tests balance and expenditure invariants on a mixed queue. """
        incomes = [
            CurrencyIncome(COINS, 500, 200, 5),
            CurrencyIncome(STONES, 20, 15, 0),
            CurrencyIncome(GEMS, 0, 30, -10)]
        events = [
            event('c1', 700, COINS, priority=0),
            event('s1', 40, STONES, priority=1),
            event('c2', 300, COINS, priority=2, locked_to='s1'),
            event('g1', 100, GEMS, priority=3),
            event('s2', 200, STONES, priority=4),
            event('c3', 150, COINS, priority=5),
            event('g2', 1000, GEMS, priority=6)]
        timeline = self.scheduler.schedule(incomes, events, 12, START)

        for balances in timeline.balances_by_week.values():
            for balance in balances:
                self.assertGreaterEqual(balance, 0)

        for currency_id, expenditures in timeline.expenditure_by_week.items():
            for week, spent in enumerate(expenditures):
                expected = sum(
                    scheduled.event.amount for scheduled in timeline.events
                    if scheduled.trigger_week == week and
                    scheduled.event.currency_id == currency_id)
                self.assertEqual(spent, expected)

        # Same-currency events resolve in priority order:
        last_week = {}
        for scheduled in timeline.events:
            currency_id = scheduled.event.currency_id
            self.assertGreaterEqual(
                scheduled.trigger_week, last_week.get(currency_id, 0))
            last_week[currency_id] = scheduled.trigger_week

        # Chained events never precede their predecessor:
        if timeline.is_scheduled('c2') and timeline.is_scheduled('s1'):
            self.assertGreaterEqual(
                timeline.trigger_week('c2'), timeline.trigger_week('s1'))

        self.assertIn(events[6], timeline.unaffordable_events)

class TestSchedulerPrecision(unittest.TestCase):
    """ Tests scheduling with high-precision numbers. """

    def test_decimal(self):
        """ Tests that Decimal values flow through the schedule. """
        incomes = [CurrencyIncome(COINS, 100.5, 50.25, 5)]
        timeline = schedule(
            incomes, [event('a', 150.75)], 4, START,
            week0_proration_factor=0.5, high_precision=Decimal)
        for balance in timeline.balances_by_week[COINS]:
            self.assertIsInstance(balance, Decimal)
        scheduled = timeline.timeline_event('a')
        self.assertIsInstance(scheduled.balance_at_trigger, Decimal)
        self.assertEqual(
            timeline.expenditure_by_week[COINS][scheduled.trigger_week],
            Decimal('150.75'))

class TestSchedulerErrors(unittest.TestCase):
    """ Tests invalid scheduler input. """

    def setUp(self):
        self.scheduler = TimelineScheduler()
        self.incomes = [CurrencyIncome(COINS, 100, 10, 0)]

    def test_negative_weeks(self):
        """ Tests that a negative horizon is rejected. """
        with self.assertRaises(ValueError):
            self.scheduler.schedule(self.incomes, [], -1, START)

    def test_bad_proration(self):
        """ Tests that proration factors outside (0, 1] are rejected. """
        for factor in (0, -0.5, 1.5):
            with self.assertRaises(ValueError):
                self.scheduler.schedule(
                    self.incomes, [], 4, START, week0_proration_factor=factor)

    def test_unknown_currency(self):
        """ Tests that events need an income for their currency. """
        with self.assertRaises(ValueError):
            self.scheduler.schedule(
                self.incomes, [event('a', 10, GEMS)], 4, START)

if __name__ == '__main__':
    unittest.TextTestRunner().run(
        unittest.TestLoader().loadTestsFromName(__name__))
