"""Registry of native (builtin) functions.

Every builtin is a plain Python function `body(state, args)` taking the State and the *unevaluated* call arguments,
registered with the `builtin` decorator. Its docstring becomes the doc string of the resulting Function, so `doc(+)`
is documented by the same text that documents its implementation.
"""

import importlib
import inspect

from regulus.lang.error import GenericException, ARGUMENT
from regulus.pure.atom import Function, expect
from regulus.pure.syntax import Variable


BUILTIN_MODULES = ["arithmetic", "casts", "core", "introspection", "logic", "objects", "sequences", "stdio"]

BUILTINS = {}  # name: Function, filled in when the builtin modules are imported


def builtin(name, argc=None, aliases=()):
    """Registers the decorated body as a Function named name (and every alias). argc=None means variadic."""

    def decorator(body):
        function = Function(inspect.cleandoc(body.__doc__ or ""), argc, body)
        for alias in (name, *aliases):
            if alias in BUILTINS:
                raise ValueError(f"builtin `{alias}` registered twice")
            BUILTINS[alias] = function
        return body

    return decorator


def all_functions():
    """Returns a new name: Function dict of every builtin. The Function objects themselves are shared."""
    for module in BUILTIN_MODULES:
        importlib.import_module(f"regulus.lang.builtins.{module}")
    return dict(BUILTINS)


def evaluate_as(state, argument, *variants):
    """Evaluates argument and checks that the result is of one of variants (e.g. "Int")."""
    return expect(argument.evaluate(state), *variants)


def evaluate_all(state, args):
    """Evaluates every argument in order, returning the list of values."""
    return [argument.evaluate(state) for argument in args]


def variable_name(argument, msg):
    """Returns the name of argument if it is a bare variable, raises an Argument exception with msg otherwise."""
    if not isinstance(argument, Variable):
        raise GenericException(ARGUMENT, msg, argument.span)
    return argument.name
