""" A module relating to precision of arithmetic operations.

Used throughout the application, without any dependency on any other
modules from this project.
"""

class HighPrecisionHandler(object):
    """ Supports both native and high-precision numerical types.

    Classes which do arithmetic on balances subclass this so that client
    code can opt in to a high-precision type (e.g. `Decimal`) by passing
    a conversion callable. By default values are used as provided.

    High-precision types are not always arithmetically compatible with
    native types. For example, `Decimal(1) * 1.05` raises an exception.
    Converting every input through `precision_convert` before doing any
    arithmetic avoids mixing the two.

    Examples:
        ```
        from decimal import Decimal
        handler = HighPrecisionHandler(high_precision=Decimal)
        handler.precision_convert(5)  # Returns Decimal(5)
        ```

    Arguments:
        high_precision (Callable[[float], HighPrecisionType]): A
            callable object, such as a method or class, which takes a
            single numeric argument and returns a value in a
            high-precision type. Optional.

    Attributes:
        high_precision (Callable[[float], HighPrecisionType]): As above.
    """

    def __init__(self, *, high_precision=None, **kwargs):
        super().__init__(**kwargs)
        self.high_precision = high_precision

    def precision_convert(self, value):
        """ Converts `value` to high-precision if possible.

        `None` is passed through unchanged, as are all values when no
        `high_precision` conversion method has been provided.

        Arguments:
            value (float): A value to be converted.

        Returns:
            Either `value` itself or a value in the type provided by
            `high_precision`'s return type.
        """
        if self.high_precision is None or value is None:
            return value
        # `Decimal(0.1)` is not `Decimal('0.1')`; go via str for floats.
        if isinstance(value, float):
            return self.high_precision(str(value))
        return self.high_precision(value)
