"""Runtime values ("atoms") of the regulus language.

Atoms are plain Python values wherever possible:

```
Int       ::= int              ; always within [INT_MIN, INT_MAX]
Bool      ::= bool
Null      ::= None
String    ::= str
List      ::= list             ; treated as immutable: builtins always return new lists
Object    ::= Object           ; flat field map plus a type id
Function  ::= Function         ; never equal to anything, not even itself
```

Since `bool` is a subclass of `int` in Python, never use `isinstance(atom, int)` directly: use is_int.
"""

from regulus.lang.error import GenericException, ARGUMENT, OVERFLOW, TYPE


INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1

INT_TY_ID = 0
BOOL_TY_ID = 1
NULL_TY_ID = 2
LIST_TY_ID = 3
STRING_TY_ID = 4
FUNCTION_TY_ID = 5
MIN_OBJECT_TY_ID = 6


class Function:
    """A callable atom. argc is the required number of arguments, or None for variadic functions. body is called with
    the State and the *unevaluated* call arguments.
    """

    def __init__(self, doc, argc, body):
        self.doc = doc
        self.argc = argc
        self.body = body

    def call(self, state, args, name=None):
        """Checks arity and invokes body."""
        if self.argc is not None and self.argc != len(args):
            target = f" for `{name}`" if name else ""
            raise GenericException(ARGUMENT, f"expected `{self.argc}` args, found `{len(args)}` args{target}")
        return self.body(state, args)

    def __eq__(self, other):
        return False

    def __hash__(self):
        return id(self)

    def __repr__(self):
        return f"Function(argc={self.argc!r}, doc={self.doc!r})"

    def __str__(self):
        return f"<function>({'_' if self.argc is None else self.argc})"


class Object:
    """A flat map of field names to atoms, tagged with the type id of the `type` that constructed it."""

    def __init__(self, data, ty_id):
        self.data = dict(data)
        self.ty_id = ty_id

    def copy(self):
        return Object(self.data, self.ty_id)

    def __eq__(self, other):
        if not isinstance(other, Object) or other.ty_id != self.ty_id or other.data.keys() != self.data.keys():
            return False
        return all(equals(value, other.data[key]) for key, value in self.data.items())

    __hash__ = None

    def __repr__(self):
        return f"Object({self.data!r}, ty_id={self.ty_id})"

    def __str__(self):
        return "{" + ", ".join(f"{key}: {display(self.data[key])}" for key in sorted(self.data)) + "}"


def is_int(atom):
    return isinstance(atom, int) and not isinstance(atom, bool)


def type_name(atom):
    """Name of the atom's variant, as used in error messages."""
    if atom is None:
        return "Null"
    elif isinstance(atom, bool):
        return "Bool"
    elif isinstance(atom, int):
        return "Int"
    elif isinstance(atom, str):
        return "String"
    elif isinstance(atom, list):
        return "List"
    elif isinstance(atom, Function):
        return "Function"
    elif isinstance(atom, Object):
        return "Object"
    raise TypeError(f"not an atom: {atom!r}")


def type_id(atom):
    if isinstance(atom, Object):
        return atom.ty_id
    return {
        "Int": INT_TY_ID,
        "Bool": BOOL_TY_ID,
        "Null": NULL_TY_ID,
        "List": LIST_TY_ID,
        "String": STRING_TY_ID,
        "Function": FUNCTION_TY_ID,
    }[type_name(atom)]


def equals(lhs, rhs):
    """Structural equality of two atoms. Functions are never equal, Bools never equal Ints."""
    if isinstance(lhs, Function) or isinstance(rhs, Function):
        return False
    if type_name(lhs) != type_name(rhs):
        return False
    if isinstance(lhs, list):
        return len(lhs) == len(rhs) and all(equals(left, right) for left, right in zip(lhs, rhs))
    return lhs == rhs


def display(atom):
    """Human readable form of atom, as printed by `print`, `write` and `printable`."""
    if atom is None:
        return "null"
    elif isinstance(atom, bool):
        return "true" if atom else "false"
    elif isinstance(atom, list):
        return "[" + ", ".join(display(element) for element in atom) + "]"
    return str(atom)


def literal(atom):
    """Approximation of the source code that produces atom. Only meaningful for Int, Bool, Null and String."""
    if isinstance(atom, str):
        return f'"{atom}"'
    return display(atom)


def check_int(value):
    """Returns value if it fits into a signed 64-bit integer, raises an Overflow exception otherwise."""
    if not INT_MIN <= value <= INT_MAX:
        raise GenericException(OVERFLOW, f"integer {value} does not fit into 64 bits")
    return value


def expect(atom, *variants):
    """Returns atom if its variant is one of variants, raises a Type exception otherwise."""
    if type_name(atom) not in variants:
        raise GenericException(TYPE, f"{display(atom)} is not a {' or '.join(variants)}!")
    return atom
