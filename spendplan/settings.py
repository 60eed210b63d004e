""" This module provides user-modifiable settings for the application.

It provides the `Settings` class, which supplies default values for the
planner: the timeline horizon, the currencies being tracked and the
default income growth for each of them.
"""

from spendplan.currency import COINS, CURRENCY_ORDER
from spendplan.utility.value_reader import (
    ValueReader, ValueReaderAttribute as Attr)

class Settings(ValueReader):
    """ Container for variables used to control application settings.

    All settings are exposed as attributes of `Settings` objects. For
    example, `Settings().timeline_weeks` returns the value of the
    `'timeline_weeks'` key in the settings file (or its default if the
    file doesn't provide one).

    By default nothing is read from file and every attribute takes its
    default value. Pass `filename` to read overrides from a JSON file.
    Relative paths are resolved from `spendplan/data`.

    This class takes all of the same args as `ValueReader`.

    Attributes:
        timeline_weeks (int): Default number of weeks to project.
            Defaults to 12.
        timeline_week_options (list[int]): Horizons offered to the user.
            Defaults to `[4, 8, 12, 26, 52]`.
        currencies (list[str]): Currency ids tracked by the planner, in
            display order. Defaults to coins, stones, reroll shards and
            gems.
        growth_rate_defaults (dict[str, float]): `{currency_id: rate}`
            pairs giving the default weekly growth rate (as a percent)
            for new income configurations. Currencies not listed
            default to 0. Defaults to 5% for coins.
        prorate_current_week (bool): Whether the current week's income
            is prorated by the days remaining in it. Defaults to True.
        lookback_period (str): Default window for deriving growth rates
            from historical runs ('3mo', '6mo' or 'all'). Defaults to
            '3mo'.
    """

    timeline_weeks = Attr(12)
    timeline_week_options = Attr([4, 8, 12, 26, 52])
    currencies = Attr(list(CURRENCY_ORDER))
    growth_rate_defaults = Attr({COINS: 5})
    prorate_current_week = Attr(True)
    lookback_period = Attr('3mo')

    def growth_rate_default(self, currency_id):
        """ The default weekly growth rate (percent) for `currency_id`. """
        return self.growth_rate_defaults.get(currency_id, 0)
