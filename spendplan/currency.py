""" Income configuration for each of the planner's currencies.

Provides the `CurrencyIncome` record consumed by the balance projector
and the timeline scheduler, along with the validation and clamping
helpers used to keep user input within the ranges the projector
expects.
"""

from collections import namedtuple

COINS = 'coins'
STONES = 'stones'
REROLL_SHARDS = 'reroll_shards'
GEMS = 'gems'

# Display order of the built-in currencies.
CURRENCY_ORDER = (COINS, STONES, REROLL_SHARDS, GEMS)

# Weekly growth rates are percentages. -100% means income stops
# entirely after the first week.
GROWTH_RATE_MIN = -100
GROWTH_RATE_MAX = 1000

CURRENCY_INCOME_FIELDS = [
    'currency_id', 'current_balance', 'weekly_income', 'growth_rate_percent']
CurrencyIncome = namedtuple(
    'CurrencyIncome', CURRENCY_INCOME_FIELDS, defaults=(0, 0, 0))
CurrencyIncome.__doc__ = (
    "A currency's current balance, weekly income and weekly growth "
    "rate (as a percent, e.g. 5 for 5%).")

def is_valid_currency_id(currency_id, currencies=CURRENCY_ORDER):
    """ Returns True if `currency_id` is one of `currencies`. """
    return currency_id in currencies

def default_income(currency_id, growth_rate_percent=0):
    """ Builds an empty `CurrencyIncome` for `currency_id`. """
    return CurrencyIncome(
        currency_id, current_balance=0, weekly_income=0,
        growth_rate_percent=growth_rate_percent)

def income_errors(income):
    """ Lists the problems with `income`, if any.

    Args:
        income (CurrencyIncome): The income configuration to check.

    Returns:
        list[str]: Human-readable error messages. Empty if `income` is
        valid.
    """
    errors = []
    if income.current_balance < 0:
        errors.append('Current balance cannot be negative')
    if income.weekly_income < 0:
        errors.append('Weekly income cannot be negative')
    if income.growth_rate_percent < GROWTH_RATE_MIN:
        errors.append('Growth rate cannot be less than -100%')
    if income.growth_rate_percent > GROWTH_RATE_MAX:
        errors.append('Growth rate cannot exceed 1000%')
    return errors

def is_valid_income(income):
    """ Returns True if `income` has no validation errors. """
    return not income_errors(income)

def check_income(income):
    """ Raises `ValueError` if `income` is invalid.

    Returns:
        CurrencyIncome: `income`, for convenient chaining.
    """
    errors = income_errors(income)
    if errors:
        raise ValueError(
            'CurrencyIncome (' + str(income.currency_id) + '): ' +
            '; '.join(errors))
    return income

def clamp_number(value, minimum, maximum):
    """ Restricts `value` to the closed interval [minimum, maximum]. """
    return max(minimum, min(value, maximum))

def ensure_non_negative(value):
    """ Returns `value`, or 0 if `value` is negative. """
    return max(0, value)

def clamp_growth_rate(growth_rate_percent):
    """ Restricts a growth rate to [-100%, 1000%]. """
    return clamp_number(growth_rate_percent, GROWTH_RATE_MIN, GROWTH_RATE_MAX)

def sanitize_income(income):
    """ Returns a copy of `income` clamped into its valid ranges. """
    return income._replace(
        current_balance=ensure_non_negative(income.current_balance),
        weekly_income=ensure_non_negative(income.weekly_income),
        growth_rate_percent=clamp_growth_rate(income.growth_rate_percent))
