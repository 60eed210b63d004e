""" Provides a class for reading stored values from files. """

import os
import json
from spendplan.utility.precision import HighPrecisionHandler

INFINITY = float('inf')
DIR_PATH = os.path.dirname(__file__)
DATA_PATH = os.path.join(DIR_PATH, "../data/")

def resolve_data_path(filename):
    """ Returns an absolute path to `filename`.

    If `filename` is a relative path, it is resolved to an absolute
    path with a root in this package's `spendplan/data/` directory.
    If `filename` is an absolute path, it is returned unchanged.
    """
    if not os.path.isabs(filename):
        filename = os.path.join(DATA_PATH, filename)
    return filename

class ValueReaderAttribute(object):
    """ A descriptor for managed attributes of `ValueReader`.

    Attributes with this descriptor are get and set via the `values`
    dict (rather than `__dict__`).
    """

    def __init__(self, default=None):
        self.default = default
        self.name = None # set in __set_name__

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        # Fall back to the default only if the reader allows it:
        if (
                self.name not in obj.values and
                self.default is not None and
                obj.use_defaults):
            return self.default
        # Raises KeyError if missing and there's no default:
        return obj.values[self.name]

    def __set__(self, obj, value):
        obj.values[self.name] = value

    def __delete__(self, obj):
        del obj.values[self.name]

class HighPrecisionJSONEncoder(json.JSONEncoder):
    """ Extends JSONEncoder to support high-precision numeric types.

    High-precision values are written losslessly as strings. On read,
    `ValueReader` converts numeric strings back (see
    `numeric_convert`).

    Arguments:
        high_precision (Callable[[str], HighPrecisionType]): A callable
            which takes a single argument and returns a value in a
            high-precision type (e.g. Decimal). Optional.
    """

    def __init__(self, *args, high_precision=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.high_precision_type = None
        if high_precision is not None:
            # Infer the high-precision type being used:
            self.high_precision_type = type(high_precision(0))

    def default(self, o):
        """ Serializes high-precision numbers as `str`. """
        if (
                self.high_precision_type is not None and
                isinstance(o, self.high_precision_type)):
            return str(o)
        return super().default(o)

class ValueReader(HighPrecisionHandler):
    """ Reads values from JSON-encoded files.

    Values read from the JSON file are stored in a `values` dict.
    Subclasses can expose these values as attributes by providing
    `ValueReaderAttribute` instances as class variables with the same
    name as a key in the `values` dict. For example, setting the class
    variable `attr = ValueReaderAttribute()` will result in calls to
    `ValueReader(filename).attr` to return the value associated with the
    `"attr"` key in the JSON file named by `filename`.

    Relative paths in `filename` are resolved relative to
    `spendplan/data/`, not the current working directory.

    Arguments:
        filename (str): The filename of a JSON file to read.
            The file must be UTF-8 encoded. Optional.
        high_precision (Callable[[float], HighPrecisionType]): A
            callable object, such as a method or class, which takes a
            single `float` argument and returns a value in a
            high-precision type (e.g. Decimal). Optional.
        numeric_convert (bool): If True, any float-convertible str
            values will be converted to a numeric type on read.
            Optional. Defaults to True.
        use_defaults (bool): If True, any `ValueReaderAttribute` which
            doesn't have a value read in from file will return its
            default value. Optional. Defaults to True.
    """

    def __init__(
            self, filename=None, *, high_precision=None,
            numeric_convert=True, use_defaults=True):
        super().__init__(high_precision=high_precision)
        self.values = {}
        self.use_defaults = use_defaults
        if filename is not None:
            self.read(filename, numeric_convert=numeric_convert)

    def read(self, filename, *, numeric_convert=True):
        """ Reads in values from file `filename`.

        Any existing values in `self.values` are cleared.

        Raises:
            FileNotFoundError: No such file or directory.
            TypeError: The file does not hold a JSON object.
        """
        filename = resolve_data_path(filename)
        with open(filename, "rt", encoding="utf-8") as file:
            values = json.load(
                file,
                parse_float=self._parse_float,
                parse_constant=self._parse_constant)

        if not isinstance(values, dict):
            raise TypeError('JSON file must provide dict of key: value pairs')

        if numeric_convert:
            values = self._numeric_convert(values)
        self.values = values

    def _parse_float(self, val):
        """ Parses float values, in high precision if enabled. """
        if self.high_precision is not None:
            return self.high_precision(val)
        return float(val)

    def _parse_constant(self, val):
        """ Parses 'Infinity' and '-Infinity' from JSON files. """
        inf = self.precision_convert(INFINITY)
        if val == 'Infinity':
            return inf
        if val == '-Infinity':
            return -inf
        raise ValueError("'" + val + "' value not supported.")

    def _numeric_convert(self, vals):
        """ Converts str-encoded numbers in a JSON tree to numbers.

        Keys are left alone; they identify settings and currencies.
        """
        if isinstance(vals, dict):
            return {
                key: self._numeric_convert(val) for key, val in vals.items()}
        if isinstance(vals, list):
            return [self._numeric_convert(val) for val in vals]
        if not isinstance(vals, str):
            return vals
        try:
            float_val = float(vals)
        except ValueError:
            return vals
        # Prefer int representation if possible (NaN/inf fail this):
        if float_val % 1 == 0:
            return int(float_val)
        if self.high_precision is not None:
            return self.high_precision(vals)
        return float_val

    def write(self, filename, vals=None):
        """ Writes values to a UTF-8 encoded JSON file.

        Arguments:
            filename (str): The filename of the JSON file to write.
            vals (dict[str, Any]): Values to write. Optional; defaults
                to this object's `values`.
        """
        if vals is None:
            vals = self.values
        filename = resolve_data_path(filename)
        with open(filename, "w", encoding="utf-8") as file:
            json.dump(
                vals, file, cls=HighPrecisionJSONEncoder,
                high_precision=self.high_precision,
                allow_nan=True, indent=2, sort_keys=True)
