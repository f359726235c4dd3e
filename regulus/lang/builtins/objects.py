"""Objects: flat maps of field names to values, created by the constructors that `type` defines.

There are no methods as such: a "method" is a field holding a function, called through `@` with the object as its
first argument.
"""

from regulus.lang.error import GenericException, NAME, SYNTAX
from regulus.lang.functions import builtin, evaluate_as, variable_name
from regulus.pure.atom import Function, Object, expect, type_id as ty_id_of
from regulus.pure.syntax import FunctionCall, Literal, Variable


def parse_fields(state, fields):
    """Returns (required field names, {defaulted field name: value}) for the field arguments of `type`."""
    required = []
    defaulted = {}
    found = set()

    for field in fields:
        if isinstance(field, Variable):
            name = field.name
            required.append(name)
        elif isinstance(field, FunctionCall):
            if field.name != "=":
                raise GenericException(SYNTAX, "defaulted `type` values must use `=`", field.span)
            if len(field.args) != 2 or not isinstance(field.args[0], Variable):
                raise GenericException(SYNTAX, "defaulted `type` values must have the form `=(name, value)`",
                                       field.span)
            name = field.args[0].name
            defaulted[name] = field.args[1].evaluate(state)
        else:
            raise GenericException(SYNTAX, "`type` field arguments should be variables or `=` calls", field.span)

        if name in found:
            raise GenericException(SYNTAX, f"duplicate `type` field `{name}`", field.span)
        found.add(name)

    return required, defaulted


def get_field(obj, field):
    if field not in obj.data:
        raise GenericException(NAME, f"object has no field named `{field}`")
    return obj.data[field]


@builtin("type")
def type_(state, args):
    """Defines a new type.
    The first argument must be given and is the identifier of the type.
    All further arguments are its fields or its defaulted values.

    If the argument is just an identifier, it is a field.
    If it is a function call of the form `=(name, value)` (this must be `=` and not `assign`), this adds a field
    `name` which has the value `value` by default. Accordingly, this value can not be set in the constructor.

    Methods can be added by using the defaulted value syntax as `=(method_name, fn(self, arg1, function_body()))`.

    The identifier is bound to the constructor, which takes one argument per field without default.
    """
    if not args:
        raise GenericException(SYNTAX, "`type` takes at least one argument")

    name = variable_name(args[0], "`type` must take a variable as first argument")
    doc = state.current_call.doc if state.current_call is not None else ""
    required, defaulted = parse_fields(state, args[1:])
    if state.exit_unwind is not None:
        return
    ty_id = state.make_type_id()

    def construct(state, args):
        data = {field: argument.evaluate(state) for field, argument in zip(required, args)}
        data.update(defaulted)
        return Object(data, ty_id)

    state.storage.insert(name, Function(doc, len(required), construct))


@builtin(".", 2, aliases=["getattr"])
def getattr_(state, args):
    """Gets the value of a field of an object.

    The first argument is the object, the second is the field name as a variable.
    If the field does not exist on the object, an exception is raised.

    This function has an alias: `getattr`.
    """
    obj = evaluate_as(state, args[0], "Object")
    return get_field(obj, variable_name(args[1], "`.` takes a field identifier as second argument"))


@builtin("->", 3, aliases=["setattr"])
def setattr_(state, args):
    """Sets the value of a field of an object to a new value and returns the updated object. The original object is
    left unchanged.

    The first argument is the object, the second is the field name as a variable and the third is the new value.
    If the field does not exist on the object, an exception is raised.

    This function has an alias: `setattr`.
    """
    obj = evaluate_as(state, args[0], "Object").copy()
    field = variable_name(args[1], "`->` takes a field identifier as second argument")
    get_field(obj, field)
    obj.data[field] = args[2].evaluate(state)
    return obj


@builtin("@", aliases=["call_method"])
def call_method(state, args):
    """Calls a method on an object with the given arguments.
    The object itself is implicitly added as the first argument to the method.

    The first argument is the object, the second the name of the method and all further arguments are the
    arguments to the method.

    This function has an alias: `call_method`.
    """
    if len(args) < 2:
        raise GenericException(SYNTAX, "too few arguments for `@`")

    obj = evaluate_as(state, args[0], "Object")
    method_name = variable_name(args[1], "`@` expected the name of a method as second arg")
    if method_name not in obj.data:
        raise GenericException(NAME, f"object has no method `{method_name}`")

    method = expect(obj.data[method_name], "Function")
    return method.call(state, [Literal(obj, args[0].span), *args[2:]], f"<object>.{method_name}")


@builtin("type_id", 1)
def type_id(state, args):
    """Returns the type id corresponding to the given value.

    A type id is a non-negative integer. Primitive types are currently represented with these ids (note that this
    may change at any point):

    * Int: 0
    * Bool: 1
    * Null: 2
    * List: 3
    * String: 4
    * Function: 5
    * Object: 6+ (depending on the type of object).
    """
    return ty_id_of(args[0].evaluate(state))
