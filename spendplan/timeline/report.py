""" Summarizes a `TimelineData` week by week for a single currency. """

from collections import namedtuple
from spendplan.timeline.dates import week_start_date

WeekRow = namedtuple(
    'WeekRow',
    ['week', 'date', 'opening_balance', 'income', 'expenditure',
     'closing_balance'])
WeekRow.__doc__ = (
    "One week of a currency's timeline. `income` is the income actually "
    "counted for the week (prorated in week 0), so "
    "`opening_balance + income - expenditure == closing_balance`.")

def effective_incomes(timeline, currency_id):
    """ Income counted in each week, with week 0 prorated. """
    incomes = list(timeline.income_by_week[currency_id])
    if incomes:
        incomes[0] = incomes[0] * timeline.week0_proration_factor
    return incomes

def prior_balances(timeline, currency_id):
    """ Each week's ending balance before that week's purchases.

    This is the closing balance with the week's expenditure added back,
    i.e. the funds that were available to spend in that week.
    """
    balances = timeline.balances_by_week[currency_id]
    expenditures = timeline.expenditure_by_week[currency_id]
    return [
        balances[week + 1] + expenditure
        for week, expenditure in enumerate(expenditures)]

def week_rows(timeline, currency_id):
    """ Builds one `WeekRow` per week of `timeline` for `currency_id`.

    Raises:
        KeyError: `currency_id` isn't in the timeline.
    """
    balances = timeline.balances_by_week[currency_id]
    expenditures = timeline.expenditure_by_week[currency_id]
    incomes = effective_incomes(timeline, currency_id)
    return [
        WeekRow(
            week, week_start_date(week, timeline.start_date),
            balances[week], incomes[week], expenditures[week],
            balances[week + 1])
        for week in range(timeline.weeks)]
