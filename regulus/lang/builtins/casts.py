"""Conversions between atom types."""

from regulus.lang.error import GenericException, OVERFLOW, TYPE
from regulus.lang.functions import builtin, evaluate_as
from regulus.pure.atom import INT_MAX, INT_MIN, display
from regulus.pure.lexical import INT_PATTERN


@builtin("int", 1)
def int_(state, args):
    """Converts the given integer, boolean or string into an integer.
    Booleans become 0 or 1. Strings must contain a decimal integer, otherwise an exception is raised.
    """
    value = evaluate_as(state, args[0], "Int", "Bool", "String")
    if not isinstance(value, str):
        return int(value)

    if not INT_PATTERN.fullmatch(value):
        raise GenericException(TYPE, f"cannot convert string to int: invalid digit in \"{value}\"")
    number = int(value)
    if not INT_MIN <= number <= INT_MAX:
        raise GenericException(OVERFLOW, f"cannot convert string to int: \"{value}\" is too large")
    return number


@builtin("string", 1)
def string(state, args):
    """Converts the given integer, boolean, null or string into a string.
    Unlike `printable`, lists, objects and functions cannot be converted and cause an exception.
    """
    return display(evaluate_as(state, args[0], "Int", "Bool", "Null", "String"))


@builtin("bool", 1)
def bool_(state, args):
    """Converts the given boolean, integer or string into a boolean.
    Integers are true unless they are 0. Strings must be "true" or "false".
    """
    value = evaluate_as(state, args[0], "Bool", "Int", "String")
    if not isinstance(value, str):
        return value != 0
    if value not in ("true", "false"):
        raise GenericException(TYPE, f"cannot convert string to bool: \"{value}\"")
    return value == "true"


@builtin("printable", 1)
def printable(state, args):
    """Evaluates the given arg and returns a string representation of it.
    Unlike `string`, this works for every value. Note that the exact output format is not stable.

    This is identical to the output of `write`.
    """
    return display(args[0].evaluate(state))
