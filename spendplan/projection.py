""" Projects currency balances and income over a number of weeks.

Income grows by a fixed percentage each week (compounding), and each
week's income is added to the balance carried over from the week
before. The first week may be a partial week, in which case only a
fraction of its income is counted.

Balances are indexed by week boundary: index 0 is the starting balance
and index `w + 1` is the balance at the end of week `w`. Incomes are
indexed by week.
"""

from spendplan.utility.precision import HighPrecisionHandler

def _handler(high_precision):
    return HighPrecisionHandler(high_precision=high_precision)

def _check_weeks(weeks):
    if weeks < 0:
        raise ValueError('projection: weeks must be non-negative.')

def project_incomes(income, weeks, *, high_precision=None):
    """ Projects the income received in each of the next `weeks` weeks.

    Week 0's income is `income.weekly_income`; each later week earns
    `1 + growth_rate_percent / 100` times the week before it.

    Args:
        income (CurrencyIncome): Income configuration for a currency.
        weeks (int): The number of weeks to project.
        high_precision (Callable[[float], HighPrecisionType]): Converts
            inputs to a high-precision type (e.g. Decimal). Optional.

    Returns:
        list[Number]: `weeks` income amounts, one per week.

    Raises:
        ValueError: `weeks` is negative.
    """
    _check_weeks(weeks)
    convert = _handler(high_precision).precision_convert
    current = convert(income.weekly_income)
    growth = 1 + convert(income.growth_rate_percent) / 100
    incomes = []
    for _ in range(weeks):
        incomes.append(current)
        current *= growth
    return incomes

def project_balances(
        income, weeks, week0_proration_factor=1, *, high_precision=None):
    """ Projects the balance of a currency at each week boundary.

    Args:
        income (CurrencyIncome): Income configuration for a currency.
        weeks (int): The number of weeks to project.
        week0_proration_factor (float): The portion of week 0's income
            that is still to be received (0 < factor <= 1), e.g. when
            planning starts mid-week. Only week 0's income is scaled;
            later weeks earn their full (compounded) income. Optional.
            Defaults to 1.
        high_precision (Callable[[float], HighPrecisionType]): Converts
            inputs to a high-precision type (e.g. Decimal). Optional.

    Returns:
        list[Number]: `weeks + 1` balances. Index 0 is the current
        balance; index `w + 1` is the balance after week `w`'s income.

    Raises:
        ValueError: `weeks` is negative.
    """
    convert = _handler(high_precision).precision_convert
    incomes = project_incomes(income, weeks, high_precision=high_precision)
    balances = [convert(income.current_balance)]
    for week, week_income in enumerate(incomes):
        if week == 0:
            week_income *= convert(week0_proration_factor)
        balances.append(balances[-1] + week_income)
    return balances

def project_all_incomes(incomes, weeks, *, high_precision=None):
    """ Projects weekly income for each currency in `incomes`.

    Returns:
        dict[str, list[Number]]: `{currency_id: incomes}` pairs.
    """
    return {
        income.currency_id: project_incomes(
            income, weeks, high_precision=high_precision)
        for income in incomes}

def project_all_balances(
        incomes, weeks, week0_proration_factor=1, *, high_precision=None):
    """ Projects balances for each currency in `incomes`.

    Returns:
        dict[str, list[Number]]: `{currency_id: balances}` pairs.
    """
    return {
        income.currency_id: project_balances(
            income, weeks, week0_proration_factor,
            high_precision=high_precision)
        for income in incomes}

def find_affordable_week(balances, amount, start_week=0):
    """ Finds the first index at or after `start_week` covering `amount`.

    Returns:
        int: The index of the first balance `>= amount`, or `None` if
        no balance from `start_week` onward is large enough.
    """
    for week in range(max(start_week, 0), len(balances)):
        if balances[week] >= amount:
            return week
    return None
