""" A package for planning purchases against projected currency income. """

__all__ = [
    'currency', 'events', 'income', 'planner', 'projection', 'settings',
    'timeline', 'utility'
]

__version__ = '0.0.1'
__author__ = 'Christopher Scott'
__copyright__ = 'Copyright (C) 2019 Christopher Scott'
__license__ = 'All rights reserved'

from spendplan.currency import (
    CurrencyIncome, CURRENCY_INCOME_FIELDS, CURRENCY_ORDER,
    COINS, STONES, REROLL_SHARDS, GEMS, default_income, income_errors,
    is_valid_income, check_income, sanitize_income)
from spendplan.projection import (
    project_incomes, project_balances, project_all_incomes,
    project_all_balances, find_affordable_week)
from spendplan.events import (
    SpendingEvent, ChainGroup, add_event, remove_event, clone_event,
    update_event, reorder_events, toggle_chain, group_into_chains)
from spendplan.timeline import (
    TimelineEvent, TimelineData, TimelineScheduler, schedule, WeekRow,
    week_rows)
from spendplan.income import (
    RunSample, derived_weekly_income, derived_growth_rate, derived_income)
from spendplan.settings import Settings
from spendplan.planner import Planner
