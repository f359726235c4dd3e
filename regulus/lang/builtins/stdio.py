"""Standard input and output of the running program. All streams are the State's, so they can be redirected."""

from regulus.lang.error import GenericException, ASSERTION
from regulus.lang.functions import builtin, evaluate_all
from regulus.pure.atom import display


@builtin("print")
def print_(state, args):
    """Evaluates all arguments and prints them to stdout, separated by spaces and followed by a newline."""
    state.write(" ".join(display(value) for value in evaluate_all(state, args)) + "\n")


@builtin("write", 1)
def write(state, args):
    """Evaluates the given argument and prints it to stdout, without any additional spaces or newline."""
    state.write(display(args[0].evaluate(state)))


@builtin("input", 0)
def input_(state, args):
    """Takes no arguments and reads from stdin until a newline is entered.
    Returns the read input, excluding the newline, as a string.
    """
    return state.read_line()


@builtin("__builtin_print_catch", 1)
def print_catch(state, args):
    """Evaluates the given argument, which must cause an exception, and prints that exception to stderr.
    Not meant to be used outside of tests.
    """
    try:
        value = args[0].evaluate(state)
    except GenericException as exc:
        state.write_err(f"{exc}\n")
        return None
    if state.exit_unwind is not None:
        return None
    raise GenericException(ASSERTION, f"`__builtin_print_catch` argument should cause an exception, got "
                                      f"{display(value)}")
