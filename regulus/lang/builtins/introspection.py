"""Information about functions and the current time."""

import time

from regulus.lang.error import GenericException, ARGUMENT
from regulus.lang.functions import builtin
from regulus.pure.atom import Function

NANOS_PER_SECOND = 10 ** 9


def function_argument(state, args, name):
    function = args[0].evaluate(state)
    if not isinstance(function, Function):
        raise GenericException(ARGUMENT, f"`{name}` must be called on a function")
    return function


@builtin("doc", 1)
def doc(state, args):
    """Returns the documentation string of a function."""
    return function_argument(state, args, "doc").doc


@builtin("argc", 1)
def argc(state, args):
    """Returns the argument count of a function, or `null` if it takes any number of arguments."""
    return function_argument(state, args, "argc").argc


@builtin("now", 0)
def now(state, args):
    """Returns the current time in seconds (Unix epoch) as an integer."""
    return time.time_ns() // NANOS_PER_SECOND


@builtin("now_nanos_part", 0)
def now_nanos_part(state, args):
    """Returns the nanosecond part of the current time as an integer."""
    return time.time_ns() % NANOS_PER_SECOND
