"""Lists and strings. Sequences are values: every function here returns a new sequence instead of changing one."""

from regulus.lang.error import GenericException, INDEX
from regulus.lang.functions import builtin, evaluate_all, evaluate_as, variable_name


def to_index(state, argument):
    index = evaluate_as(state, argument, "Int")
    if index < 0:
        raise GenericException(INDEX, f"invalid list index: {index} is negative")
    return index


def check_bounds(seq, index):
    if index >= len(seq):
        raise GenericException(INDEX, "sequence index out of bounds")


@builtin("list")
def list_(state, args):
    """Evaluates all arguments and returns them as a list."""
    return evaluate_all(state, args)


@builtin("len", 1)
def len_(state, args):
    """Returns the length of the given list or string argument."""
    return len(evaluate_as(state, args[0], "String", "List"))


@builtin("index", 2)
def index(state, args):
    """Returns the value in the first list or string argument at the second integer argument.
    Raises an exception if the index is out of bounds.
    """
    seq = evaluate_as(state, args[0], "String", "List")
    idx = to_index(state, args[1])
    check_bounds(seq, idx)
    return seq[idx]


@builtin("append", 2)
def append(state, args):
    """Appends the second argument at the back of the list given as first argument and returns the new list.
    Alternatively, if the first argument is a string and the second is too, a new concatenated string will be
    returned.
    """
    seq = evaluate_as(state, args[0], "String", "List")
    if isinstance(seq, str):
        return seq + evaluate_as(state, args[1], "String")
    return seq + [args[1].evaluate(state)]


@builtin("replace_at", 3)
def replace_at(state, args):
    """Replaces an element at a list index with another.
    The first argument is the list, the second the index and the third the new value.
    If the index is out of bounds, an exception is raised.
    If the first argument is a string instead, the new value must be a single character, otherwise an exception will
    be raised.
    """
    seq = evaluate_as(state, args[0], "String", "List")
    idx = to_index(state, args[1])
    check_bounds(seq, idx)

    if isinstance(seq, str):
        char = evaluate_as(state, args[2], "String")
        if len(char) != 1:
            raise GenericException(INDEX, "atom is not a single character")
        return seq[:idx] + char + seq[idx + 1:]
    return seq[:idx] + [args[2].evaluate(state)] + seq[idx + 1:]


@builtin("remove_at", 2)
def remove_at(state, args):
    """Removes the element at the given list index.
    The first argument is the list, the second the index.
    If the index is out of bounds, an exception is raised.
    If the first argument is a string instead, the single character at that position will be removed.

    Returns the updated sequence.
    """
    seq = evaluate_as(state, args[0], "String", "List")
    idx = to_index(state, args[1])
    check_bounds(seq, idx)
    return seq[:idx] + seq[idx + 1:]


@builtin("for_in", 3)
def for_in(state, args):
    """Iterates over the given list elements or string characters.
    The first argument is the sequence, the second the loop variable name for each element and the third is the
    body that will be run for each of these elements.
    Afterwards, `null` is returned.
    """
    seq = evaluate_as(state, args[0], "String", "List")
    loop_var = variable_name(args[1], "invalid loop variable given to `for_in`")

    for element in seq:
        if state.exit_unwind is not None:
            break
        state.storage.insert(loop_var, element)
        args[2].evaluate(state)


@builtin("strconcat")
def strconcat(state, args):
    """Concatenates any number of strings into one and returns it.
    Other values are not implicitly cast and cause an exception.
    """
    return "".join(evaluate_as(state, argument, "String") for argument in args)
