"""Control flow, bindings, functions, modules and exceptions."""

from regulus.lang.closure import define_function
from regulus.lang.error import GenericException, ARGUMENT, ASSERTION, ASSIGN
from regulus.lang.functions import builtin, evaluate_as, variable_name
from regulus.lang.imports import import_module
from regulus.lang.state import Result
from regulus.pure.atom import display, equals
from regulus.pure.syntax import Variable


@builtin("_", aliases=["run"])
def run(state, args):
    """Evaluates all given arguments and returns the atom the last argument evaluated to.
    If no arguments are given, `null` is returned.

    Every program is implicitly wrapped in a call to this function.

    This function has an alias: `run`.
    """
    value = None
    for argument in args:
        value = argument.evaluate(state)
    return value


@builtin("=", 2, aliases=["assign"])
def assign(state, args):
    """Assigns the second argument to a variable named like the first argument.

    This function has an alias: `assign`.
    """
    if not isinstance(args[0], Variable):
        raise GenericException(ASSIGN, "Error during assignment: no variable was given to assign to!", args[0].span)
    value = args[1].evaluate(state)
    if state.exit_unwind is None:
        state.storage.insert(args[0].name, value)


@builtin("if", 2)
def if_(state, args):
    """Evaluates the first argument as a boolean.
    If it evaluates to true, the second argument is evaluated and returned.
    If it evaluates to false, the second argument is ignored and `null` is returned.
    """
    if evaluate_as(state, args[0], "Bool"):
        return args[1].evaluate(state)
    return None


@builtin("ifelse", 3)
def ifelse(state, args):
    """Evaluates the first argument as a boolean.
    If it evaluates to true, the second argument is evaluated and returned.
    If it evaluates to false, the third argument is evaluated and returned instead.
    """
    if evaluate_as(state, args[0], "Bool"):
        return args[1].evaluate(state)
    return args[2].evaluate(state)


@builtin("while", 2)
def while_(state, args):
    """Repeatedly evaluates the first argument as a boolean.
    If it evaluates to true, the second argument is evaluated and the same steps begin again.
    If it evaluates to false, the loop ends and `null` is returned.
    """
    while state.exit_unwind is None and evaluate_as(state, args[0], "Bool"):
        args[1].evaluate(state)


@builtin("def")
def def_(state, args):
    """Defines a new function.
    The first argument is the function identifier and the last argument is the function body.
    All arguments in between are the names of the function parameters that can be accessed in the function body.
    Values defined in the function are scoped and cannot be accessed outside of the function body.

    A parameter written as `$name` is lazy: it is bound to a function without arguments that evaluates the
    argument expression each time it is called. A parameter written as `[name]` must come last and collects all
    remaining arguments into a list.

    Comments directly before the `def` call become the doc string of the function.
    """
    if len(args) < 2:
        raise GenericException(ARGUMENT, f"too few arguments passed to `def`: expected at least 2, found {len(args)}")

    name = variable_name(args[0], "Error during function definition: no valid variable was given to define to!")
    doc = state.current_call.doc if state.current_call is not None else ""
    state.storage.insert(name, define_function(doc, args[1:-1], args[-1]))


@builtin("fn")
def fn(state, args):
    """Creates a new function and returns it.

    The last argument is the function body.
    All arguments before are the names of the function parameters that can be accessed in the function body (see
    `def` for lazy and variadic parameters).
    Values defined in the function are scoped and cannot be accessed outside of the function body.
    """
    if not args:
        raise GenericException(ARGUMENT, "`fn` invocation is missing body")
    return define_function("", args[:-1], args[-1])


@builtin("import", 1)
def import_(state, args):
    """Imports a module and returns what it evaluated to.

    The argument is the bare module name. The module is looked up as `NAME.re` in the directory of the current file
    first and in the standard library second. All top-level definitions of the module become visible afterwards.
    """
    name = variable_name(args[0], "`import` argument must be a variable, string syntax was removed")
    return import_module(state, name)


@builtin("error", 2)
def error(state, args):
    """Raises an exception.
    The first argument is a string that describes the error kind.
    The second argument is a string error message.

    The error kind should be a capitalized word.
    When displaying the error kind, `Error` will be appended implicitly, so the error kind given here should not end
    in `Error`, `Exception` or similar.
    """
    kind = evaluate_as(state, args[0], "String")
    msg = evaluate_as(state, args[1], "String")
    raise GenericException(kind, msg)


@builtin("catch", 1)
def catch(state, args):
    """Evaluates the given value and returns it.
    If an exception occurs while evaluating the argument, the exception is converted into a string and returned
    instead.
    """
    try:
        return args[0].evaluate(state)
    except GenericException as exc:
        return str(exc)


@builtin("exit", 1)
def exit_(state, args):
    """Evaluates the given argument and terminates the program directly.
    The program will return the given value as its final result.

    Even if the argument causes an exception, it is returned directly too.

    If `exit` is reached via an `import`-ed module, it will stop the main program too.
    """
    try:
        result = Result(args[0].evaluate(state))
    except GenericException as exc:
        result = Result(exception=exc)

    state.exit_unwind = result


@builtin("eval", 1)
def eval_(state, args):
    """Evaluates the given argument as a string, then treats this string as regulus code and executes it.
    Returns the result of that program.

    Variables defined inside the evaluated code are not visible outside of the `eval` invocation, but assignments to
    globals are. Only modules of the standard library can be imported from it.
    """
    code = evaluate_as(state, args[0], "String")

    nested = state.nested(source_name="<eval>")
    result = nested.run(code)
    if nested.exit_unwind is not None:
        state.exit_unwind = nested.exit_unwind
        return None
    value = result.unwrap()
    state.storage.extend_from({}, nested.storage.globals)
    return value


@builtin("global", 1)
def global_(state, args):
    """Marks a variable identifier as global: it can be read and assigned from within every function afterwards.

    This does not require the identifier to be defined at this time.
    """
    state.storage.declare_global(variable_name(args[0], "`global(1)` expects a variable argument"))


@builtin("==", 2, aliases=["equals"])
def equals_(state, args):
    """Evaluates both arguments and returns whether they are equal.

    Values of different types are never equal, and functions are not even equal to themselves.

    This function has an alias: `equals`.
    """
    return equals(args[0].evaluate(state), args[1].evaluate(state))


@builtin("assert", 1)
def assert_(state, args):
    """Evaluates the argument as a boolean and raises an exception if it is false."""
    if not evaluate_as(state, args[0], "Bool"):
        raise GenericException(ASSERTION, f"assertion failed: `{args[0].stringify()}`")


@builtin("assert_eq", 2)
def assert_eq(state, args):
    """Evaluates both arguments and raises an exception if they are not equal."""
    lhs = args[0].evaluate(state)
    rhs = args[1].evaluate(state)
    if not equals(lhs, rhs):
        raise GenericException(ASSERTION, f"assertion failed: {display(lhs)} != {display(rhs)}")
