""" Derives weekly income and growth rates from historical runs.

Each run is summarized as a `RunSample`: when it happened and how much
of a currency it earned. Recent samples give a weekly income rate and a
longer history gives a weekly growth trend, which together can seed a
`CurrencyIncome` configuration.
"""

import datetime
from collections import namedtuple, OrderedDict
import numpy
from dateutil.relativedelta import relativedelta
from spendplan.currency import CurrencyIncome

RunSample = namedtuple('RunSample', ['timestamp', 'value'])
RunSample.__doc__ = "The amount of a currency earned by a run at a time."

DerivedIncome = namedtuple(
    'DerivedIncome',
    ['weekly_income', 'has_sufficient_data', 'days_of_data', 'runs_analyzed'])
DerivedGrowthRate = namedtuple(
    'DerivedGrowthRate',
    ['growth_rate_percent', 'has_sufficient_data', 'weeks_of_data'])

# How much history is needed before derived values are trustworthy:
MIN_DAYS_FOR_INCOME = 3
MIN_WEEKS_FOR_GROWTH = 4

LOOKBACK_PERIODS = {
    '3mo': relativedelta(months=3),
    '6mo': relativedelta(months=6),
    'all': None,
}

def _day(timestamp):
    if isinstance(timestamp, datetime.datetime):
        return timestamp.date()
    return timestamp

def _moment(timestamp):
    """ Converts a plain date to midnight so it compares with datetimes. """
    if isinstance(timestamp, datetime.datetime):
        return timestamp
    return datetime.datetime.combine(timestamp, datetime.time())

def _iso_week(timestamp):
    year, week, _ = _day(timestamp).isocalendar()
    return (year, week)

def lookback_start(reference_date, period):
    """ The earliest timestamp included in the lookback `period`.

    Returns:
        datetime: The start of the window, or `None` for `'all'`.

    Raises:
        ValueError: `period` is not a supported lookback period.
    """
    if period not in LOOKBACK_PERIODS:
        raise ValueError('lookback_start: unknown period ' + str(period))
    delta = LOOKBACK_PERIODS[period]
    if delta is None:
        return None
    return reference_date - delta

def filter_by_lookback(samples, period, reference_date):
    """ Returns the samples no older than the lookback `period`. """
    start = lookback_start(_moment(reference_date), period)
    if start is None:
        return list(samples)
    return [
        sample for sample in samples if _moment(sample.timestamp) >= start]

def group_by_week(samples):
    """ Groups samples by ISO week, in chronological order.

    Returns:
        OrderedDict[tuple[int, int], list[RunSample]]: Samples keyed by
        `(iso_year, iso_week)`.
    """
    groups = {}
    for sample in samples:
        groups.setdefault(_iso_week(sample.timestamp), []).append(sample)
    return OrderedDict(sorted(groups.items()))

def derived_weekly_income(samples, reference_date):
    """ Estimates weekly income from the last 7 days of samples.

    The total earned over the last 7 days is averaged over the number of
    distinct days with samples and scaled up to a full week, so a few
    days of play still produce a weekly estimate.

    Args:
        samples (Iterable[RunSample]): Historical runs.
        reference_date (datetime): The moment to look back from.

    Returns:
        DerivedIncome: The estimate (rounded to a whole number), with
        `has_sufficient_data` set once there are at least 3 days of
        data.
    """
    start = _moment(reference_date) - relativedelta(days=7)
    recent = [
        sample for sample in samples if _moment(sample.timestamp) >= start]
    days = {_day(sample.timestamp) for sample in recent}
    if not days:
        return DerivedIncome(0, False, 0, len(recent))
    total = sum(sample.value for sample in recent)
    weekly_income = round(total / len(days) * 7)
    return DerivedIncome(
        weekly_income, len(days) >= MIN_DAYS_FOR_INCOME,
        len(days), len(recent))

def growth_rate_from_totals(weekly_totals):
    """ Weekly growth (percent) of the trend through `weekly_totals`.

    Fits a least-squares line through the totals and expresses its slope
    as a percentage of their mean, which is less sensitive to one-off
    spikes than averaging week-over-week changes.

    Returns:
        float: The growth rate, or 0 if there are fewer than two totals
        or their mean isn't positive.
    """
    if len(weekly_totals) < 2:
        return 0
    totals = numpy.asarray(weekly_totals, dtype=float)
    mean = totals.mean()
    if mean <= 0:
        return 0
    slope, _ = numpy.polyfit(numpy.arange(len(totals)), totals, 1)
    return float(slope / mean * 100)

def derived_growth_rate(samples, lookback_period, reference_date):
    """ Estimates weekly income growth over a lookback period.

    Args:
        samples (Iterable[RunSample]): Historical runs.
        lookback_period (str): `'3mo'`, `'6mo'` or `'all'`.
        reference_date (datetime): The moment to look back from.

    Returns:
        DerivedGrowthRate: The growth rate (rounded to one decimal
        place), with `has_sufficient_data` set once there are at least
        4 weeks of data.
    """
    recent = filter_by_lookback(samples, lookback_period, reference_date)
    weeks = group_by_week(recent)
    if len(weeks) < 2:
        return DerivedGrowthRate(0, False, len(weeks))
    totals = [
        sum(sample.value for sample in week_samples)
        for week_samples in weeks.values()]
    growth = round(growth_rate_from_totals(totals), 1)
    return DerivedGrowthRate(
        growth, len(weeks) >= MIN_WEEKS_FOR_GROWTH, len(weeks))

def derived_income(
        currency_id, samples, current_balance=0, lookback_period='3mo',
        reference_date=None):
    """ Builds a `CurrencyIncome` from historical runs.

    Args:
        currency_id (str): The currency the samples measure.
        samples (Iterable[RunSample]): Historical runs.
        current_balance (Number): The currency's current balance.
            Optional. Defaults to 0.
        lookback_period (str): Window for the growth rate. Optional.
            Defaults to `'3mo'`.
        reference_date (datetime): The moment to look back from.
            Optional. Defaults to now.

    Returns:
        CurrencyIncome: The derived income configuration.
    """
    if reference_date is None:
        reference_date = datetime.datetime.now()
    samples = list(samples)
    income = derived_weekly_income(samples, reference_date)
    growth = derived_growth_rate(samples, lookback_period, reference_date)
    return CurrencyIncome(
        currency_id, current_balance, income.weekly_income,
        growth.growth_rate_percent)
