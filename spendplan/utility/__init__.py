""" A package with various self-contained methods and classes.

These are used throughout the application and provide ways to read
configuration values from file and to optionally handle balances with
high-precision numerical types.
"""

# See spendplan.__init__.py for version, author, and licensing info.

__all__ = ['precision', 'value_reader']

from spendplan.utility import precision, value_reader
from spendplan.utility.precision import HighPrecisionHandler
from spendplan.utility.value_reader import (
    ValueReader, ValueReaderAttribute, HighPrecisionJSONEncoder,
    resolve_data_path)
