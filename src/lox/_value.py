"""Runtime values.

Lox values map directly onto Python objects:

    nil      None
    boolean  bool
    number   float
    string   str
    callable LoxCallable (functions, bound methods, natives, classes)
    instance LoxInstance

Numbers are always floats, so a bool is never mistaken for a number even
though Python treats `True == 1`. Strings and numbers compare by content,
everything else by identity.
"""

__all__ = ["is_truthy", "is_equal", "is_number", "is_string", "kind_of", "stringify"]

import decimal
import math

import lox


def is_truthy(value):
    """Everything is truthy except nil and false."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_number(value):
    return type(value) is float


def is_string(value):
    return type(value) is str


def is_equal(left, right):
    """Lox equality, defined across all kinds of value.

    Values of different kinds are never equal. This never fails.
    """
    if type(left) is not type(right):
        return False
    if left is None or type(left) in (bool, float, str):
        return left == right
    return left is right


def kind_of(value):
    """(str) Short name of the kind of value, used in error messages."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if type(value) is float:
        return "number"
    if type(value) is str:
        return "string"
    if isinstance(value, lox.LoxClass):
        return "class"
    if isinstance(value, lox.LoxInstance):
        return "instance"
    if isinstance(value, lox.LoxCallable):
        return "function"
    return type(value).__name__


def stringify(value):
    """Convert value to the text shown by print.

    Returns:
        (str) Display text
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if type(value) is float:
        return _format_number(value)
    return str(value)


def _format_number(value):
    """Positional notation of the shortest digits that round trip.

    Integral values drop the fraction. Negative zero keeps its sign.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    number = decimal.Decimal(repr(value))
    if value.is_integer():
        number = number.to_integral_value()
    return format(number, "f")
