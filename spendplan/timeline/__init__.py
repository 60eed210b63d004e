""" Places spending events on a week-by-week timeline. """

from spendplan.timeline.dates import (
    DAYS_PER_WEEK, to_date, add_days, add_weeks, days_between, week_number,
    week_start_date, generate_week_dates, is_date_in_week,
    duration_to_weeks, week_start, days_remaining_in_week,
    current_week_proration_factor)
from spendplan.timeline.scheduler import (
    TimelineEvent, TimelineData, TimelineScheduler, schedule)
from spendplan.timeline.report import (
    WeekRow, week_rows, prior_balances, effective_incomes)
