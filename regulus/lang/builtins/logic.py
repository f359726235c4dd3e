"""Boolean logic and integer comparisons."""

import operator

from regulus.lang.functions import builtin, evaluate_as


def compare(state, args, op):
    return op(evaluate_as(state, args[0], "Int"), evaluate_as(state, args[1], "Int"))


@builtin("||", 2, aliases=["or"])
def or_(state, args):
    """Evaluates both arguments as booleans and performs short-circuiting OR on them.

    This function has an alias: `or`.
    """
    return evaluate_as(state, args[0], "Bool") or evaluate_as(state, args[1], "Bool")


@builtin("&&", 2, aliases=["and"])
def and_(state, args):
    """Evaluates both arguments as booleans and performs short-circuiting AND on them.

    This function has an alias: `and`.
    """
    return evaluate_as(state, args[0], "Bool") and evaluate_as(state, args[1], "Bool")


@builtin("!", 1, aliases=["not"])
def not_(state, args):
    """Evaluates the argument as a boolean and performs NOT on it.

    This function has an alias: `not`.
    """
    return not evaluate_as(state, args[0], "Bool")


@builtin("<", 2)
def lt(state, args):
    """Evaluates both arguments as integers and checks if the left is less than the right."""
    return compare(state, args, operator.lt)


@builtin("<=", 2)
def le(state, args):
    """Evaluates both arguments as integers and checks if the left is less than or equal to the right."""
    return compare(state, args, operator.le)


@builtin(">", 2)
def gt(state, args):
    """Evaluates both arguments as integers and checks if the left is greater than the right."""
    return compare(state, args, operator.gt)


@builtin(">=", 2)
def ge(state, args):
    """Evaluates both arguments as integers and checks if the left is greater than or equal to the right."""
    return compare(state, args, operator.ge)
