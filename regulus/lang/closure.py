"""User-defined functions, as created by `def` and `fn`.

A parameter is written as a bare name, optionally modified:

```
<param>  ::= <name>             ; evaluated eagerly
           | "$" <name>         ; lazy: bound to a zero-argument thunk that re-evaluates the call-site expression
           | "[" <name> "]"     ; variadic: collects all remaining arguments into a List (must be last)
           | "[$" <name> "]"    ; lazy and variadic: a List of thunks
```
"""

from copy import deepcopy

from regulus.lang.error import GenericException, ARGUMENT
from regulus.lang.functions import variable_name
from regulus.pure.atom import Function


class Parameter:
    """A formal parameter of a user-defined function."""

    def __init__(self, name, variadic=False, lazy=False):
        self.name = name
        self.variadic = variadic
        self.lazy = lazy

    @staticmethod
    def parse(text, span=None):
        variadic = text.startswith("[") and text.endswith("]") and len(text) >= 2
        if variadic:
            text = text[1:-1]

        lazy = text.startswith("$")
        if lazy:
            text = text[1:]

        if not text:
            raise GenericException(ARGUMENT, "function parameter names must not be empty", span)
        return Parameter(text, variadic, lazy)

    def __eq__(self, other):
        return (isinstance(other, Parameter) and self.name == other.name and self.variadic == other.variadic
                and self.lazy == other.lazy)

    def __repr__(self):
        text = f"${self.name}" if self.lazy else self.name
        return f"Parameter({'[' + text + ']' if self.variadic else text})"


def make_lazy(argument, depth):
    """Wraps the unevaluated argument into a thunk. Forcing it evaluates argument with only the scopes that were
    visible at the call site (the bottom depth scopes), every time it is forced.
    """

    def force(state, args):
        with state.storage.truncated(depth):
            return argument.evaluate(state)

    return Function("", 0, force)


class Closure:
    """Body of a user-defined Function. Owns a copy of its body, so it never refers back to the defining Storage."""

    def __init__(self, params, body):
        self.params = params
        self.body = deepcopy(body)

        for idx, param in enumerate(params):
            if param.variadic and idx != len(params) - 1:
                raise GenericException(ARGUMENT, "variadic argument must be the last of the fn arguments")

    @property
    def variadic(self):
        return bool(self.params) and self.params[-1].variadic

    @property
    def argc(self):
        return None if self.variadic else len(self.params)

    @property
    def required(self):
        """Minimum number of call arguments."""
        return len(self.params) - 1 if self.variadic else len(self.params)

    def _bind_value(self, state, param, argument, depth):
        if param.lazy:
            return make_lazy(argument, depth)
        return argument.evaluate(state)

    def __call__(self, state, args):
        if len(args) < self.required:
            raise GenericException(ARGUMENT, f"too few arguments to variadic function: expected at least "
                                             f"{self.required}, found {len(args)}")

        # evaluate everything before binding anything, so f(a, b) may call f(b, a)
        depth = state.storage.depth
        values = []
        for idx, param in enumerate(self.params):
            if param.variadic:
                values.append([self._bind_value(state, param, argument, depth) for argument in args[idx:]])
            else:
                values.append(self._bind_value(state, param, args[idx], depth))

        with state.storage.scope():
            for param, value in zip(self.params, values):
                state.storage.insert(param.name, value)
            return self.body.evaluate(state)


def define_function(doc, fn_args, body):
    """Builds the Function of `def`/`fn` from the unevaluated parameter arguments and body."""
    params = [Parameter.parse(variable_name(arg, "Error during definition: invalid args were given!"), arg.span)
              for arg in fn_args]
    closure = Closure(params, body)
    return Function(doc, closure.argc, closure)
