""" Date arithmetic for week-based timelines.

Weeks are counted from a start date: week `n` begins `7 * n` days after
it. Calendar weeks (used to prorate the current week's income) run from
Sunday to Saturday.

Functions accept `datetime.date` or `datetime.datetime` values and
return values of the same type.
"""

import datetime
import math
from dateutil.parser import parse
from dateutil.relativedelta import relativedelta, SU

DAYS_PER_WEEK = 7

def to_date(value):
    """ Converts `value` to a date, parsing strings with dateutil.

    `datetime.date` and `datetime.datetime` values are returned as-is;
    `None` is converted to today's date.
    """
    if value is None:
        return datetime.date.today()
    if isinstance(value, str):
        return parse(value).date()
    return value

def add_days(date, days):
    """ Returns the date `days` days after `date`. """
    return date + relativedelta(days=days)

def add_weeks(date, weeks):
    """ Returns the date `weeks` weeks after `date`. """
    return date + relativedelta(weeks=weeks)

def days_between(start, end):
    """ Whole days from `start` to `end` (negative if `end` is earlier).

    Partial days round down.
    """
    return (end - start).days

def week_number(date, start_date):
    """ The index of the week containing `date`, counted from `start_date`.

    Partial weeks round down, so any date in the first seven days
    (including `start_date` itself) is in week 0.
    """
    return days_between(start_date, date) // DAYS_PER_WEEK

def week_start_date(week, start_date):
    """ The date on which week `week` begins. """
    return add_weeks(start_date, week)

def generate_week_dates(start_date, weeks):
    """ Returns the start dates of the first `weeks` weeks. """
    return [week_start_date(week, start_date) for week in range(weeks)]

def is_date_in_week(date, week_start):
    """ Returns True if `date` falls in the 7 days beginning `week_start`. """
    return 0 <= days_between(week_start, date) < DAYS_PER_WEEK

def duration_to_weeks(days):
    """ The number of weeks needed to cover `days` days (rounding up). """
    return math.ceil(days / DAYS_PER_WEEK)

def week_start(date):
    """ The start of the calendar week containing `date`.

    Calendar weeks begin on Sunday. For `datetime` values the time is
    reset to midnight.
    """
    if isinstance(date, datetime.datetime):
        return date + relativedelta(
            weekday=SU(-1), hour=0, minute=0, second=0, microsecond=0)
    return date + relativedelta(weekday=SU(-1))

def days_remaining_in_week(date):
    """ Days left in the calendar week of `date`, counting `date` itself.

    Sunday has 7 days remaining and Saturday has 1.
    """
    return DAYS_PER_WEEK - days_between(week_start(date), date)

def current_week_proration_factor(date):
    """ The fraction of the calendar week remaining on `date`.

    Use this as `week0_proration_factor` when planning mid-week.
    """
    return days_remaining_in_week(date) / DAYS_PER_WEEK
