"""Variable bindings: a stack of scopes (innermost last) plus a separate map of globals.

A function call pushes a scope and pops it when it returns, so locals and parameters never outlive their call.
Reads look through the globals first, then every scope from the innermost outwards. Writes go to the globals for
names declared global and to the innermost scope otherwise, so they never touch the caller's bindings.
"""

from contextlib import contextmanager

from regulus.lang.error import GenericException, NAME
from regulus.pure.atom import Function


class Storage:
    """Governs the bindings of one State."""

    def __init__(self, builtins=None):
        self.scopes = [dict(builtins or {})]  # never empty
        self.globals = {}                     # globally declared name: value (absent until first assigned)
        self.global_names = set()

    @property
    def depth(self):
        return len(self.scopes)

    def get(self, name):
        """Returns the value bound to name. Raises KeyError if there is none."""
        if name in self.global_names and name in self.globals:
            return self.globals[name]
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise KeyError(name)

    def __contains__(self, name):
        try:
            self.get(name)
        except KeyError:
            return False
        return True

    def get_function(self, name):
        """Returns the Function bound to name, raises a Name GenericException if there is none."""
        try:
            value = self.get(name)
        except KeyError:
            raise GenericException(NAME, f"No function `{name}` found!") from None
        if not isinstance(value, Function):
            raise GenericException(NAME, f"`{name}` is not a function!")
        return value

    def insert(self, name, value):
        if name in self.global_names:
            self.globals[name] = value
        else:
            self.scopes[-1][name] = value

    def declare_global(self, name):
        """Marks name as global. If it is already bound locally, that value becomes the global value."""
        if name in self.global_names:
            return
        self.global_names.add(name)
        for scope in reversed(self.scopes):
            if name in scope:
                self.globals[name] = scope.pop(name)
                break

    def add_global(self, name, value):
        self.global_names.add(name)
        self.globals[name] = value

    def push_scope(self):
        self.scopes.append({})

    def pop_scope(self):
        if len(self.scopes) == 1:
            raise RuntimeError("cannot pop the outermost scope")
        self.scopes.pop()

    @contextmanager
    def scope(self):
        """Pushes a new scope for the duration of the with block, popping it on every exit path."""
        self.push_scope()
        try:
            yield self.scopes[-1]
        finally:
            self.pop_scope()

    @contextmanager
    def truncated(self, depth):
        """Hides every scope above depth for the duration of the with block. Used to evaluate lazy arguments against
        the scopes that were visible at their call site.
        """
        depth = max(1, min(depth, len(self.scopes)))
        hidden = self.scopes[depth:]
        del self.scopes[depth:]
        try:
            yield
        finally:
            self.scopes.extend(hidden)

    def exported(self, baseline=None):
        """Returns the top-level bindings and globals that differ from baseline (name: value of an earlier snapshot),
        compared by identity.
        """
        baseline = baseline or {}
        return {name: value for name, value in self.scopes[0].items() if baseline.get(name, baseline) is not value}

    def snapshot(self):
        """Returns a shallow copy of the top-level scope, for use as a baseline for exported."""
        return dict(self.scopes[0])

    def extend_from(self, bindings, globals_=None):
        """Merges bindings into the current scope and globals_ into the globals."""
        for name, value in bindings.items():
            self.insert(name, value)
        for name, value in (globals_ or {}).items():
            self.add_global(name, value)
