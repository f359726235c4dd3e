"""Checked integer arithmetic. Every result must fit into a signed 64-bit integer, otherwise an Overflow exception is
raised; division and remainder by zero are reported as Overflow as well.
"""

from regulus.lang.error import GenericException, ARGUMENT, OVERFLOW
from regulus.lang.functions import builtin, evaluate_as
from regulus.pure.atom import INT_MAX, INT_MIN

INT_BITS = 64


def operands(state, args):
    return evaluate_as(state, args[0], "Int"), evaluate_as(state, args[1], "Int")


def checked(value, name):
    if not INT_MIN <= value <= INT_MAX:
        raise GenericException(OVERFLOW, f"overflow occurred during {name}")
    return value


def truncated_div(lhs, rhs):
    """Division rounding toward zero (Python's // rounds toward negative infinity)."""
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def shift_amount(state, args, name):
    amount = evaluate_as(state, args[1], "Int")
    if amount < 0:
        raise GenericException(ARGUMENT, f"invalid arithmetic argument for `{name}`: negative shift amount {amount}")
    if amount >= INT_BITS:
        raise GenericException(OVERFLOW, f"{name} operation failed")
    return amount


@builtin("+", 2)
def add(state, args):
    """Adds the two given integers and returns the result, causing an exception in case of overflow."""
    lhs, rhs = operands(state, args)
    return checked(lhs + rhs, "+")


@builtin("-", 2)
def sub(state, args):
    """Subtracts the two given integers and returns the result, causing an exception in case of overflow."""
    lhs, rhs = operands(state, args)
    return checked(lhs - rhs, "-")


@builtin("*", 2)
def mul(state, args):
    """Multiplies the two given integers and returns the result, causing an exception in case of overflow."""
    lhs, rhs = operands(state, args)
    return checked(lhs * rhs, "*")


@builtin("/", 2)
def div(state, args):
    """Divides the two given integers, rounding toward zero, and returns the result.
    Causes an exception in case of division by zero or overflow.
    """
    lhs, rhs = operands(state, args)
    if rhs == 0:
        raise GenericException(OVERFLOW, "attempted to divide by zero")
    return checked(truncated_div(lhs, rhs), "/")


@builtin("%", 2)
def rem(state, args):
    """Calculates the remainder of the two given integers and returns the result. The result has the sign of the
    first integer. Causes an exception in case of division by zero.
    """
    lhs, rhs = operands(state, args)
    if rhs == 0:
        raise GenericException(OVERFLOW, "attempted to calculate the remainder of a division by zero")
    checked(truncated_div(lhs, rhs), "%")
    return lhs - rhs * truncated_div(lhs, rhs)


@builtin("<<", 2)
def shl(state, args):
    """Shifts the first integer to the left by the second amount of bits. Bits shifted out are lost.
    Causes an exception if the shift amount is negative or not smaller than 64.
    """
    lhs = evaluate_as(state, args[0], "Int")
    amount = shift_amount(state, args, "<<")
    shifted = (lhs << amount) & (2 ** INT_BITS - 1)
    return shifted - 2 ** INT_BITS if shifted > INT_MAX else shifted


@builtin(">>", 2)
def shr(state, args):
    """Shifts the first integer to the right by the second amount of bits, keeping its sign.
    Causes an exception if the shift amount is negative or not smaller than 64.
    """
    lhs = evaluate_as(state, args[0], "Int")
    return lhs >> shift_amount(state, args, ">>")


@builtin("^", 2)
def xor(state, args):
    """Evaluates both arguments as integers and performs bitwise XOR."""
    lhs, rhs = operands(state, args)
    return lhs ^ rhs
