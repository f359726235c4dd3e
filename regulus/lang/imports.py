"""Module resolution for `import`.

A module name is looked up as `<dir>/<name>.re` in the directory of the importing source (if it has one), then in the
embedded standard library. The module runs to completion in a nested State; its new top-level bindings are then
merged into the importer.
"""

import os
import re

from regulus.lang.error import GenericException, IMPORT
from regulus.lang.stl import STL

FILE_EXTENSION = "re"
PRELUDE = "prelude"
MODULE_NAME = re.compile(r"[A-Za-z0-9_]+")


def stl_identity(name):
    return f"<stl:{name}>"


def resolve(state, name, stl_only=False):
    """Returns (identity, directory, code, in_stl) of the module called name. identity is a canonical file path or
    '<stl:NAME>'. With stl_only, files in the directory of state are not considered. Raises an Import
    GenericException if the module cannot be found.
    """
    if not MODULE_NAME.fullmatch(name):
        raise GenericException(IMPORT, f"invalid characters in import name `{name}`, only a-Z, 0-9 and _ are allowed")

    if state.directory is not None and not stl_only:
        path = os.path.join(state.directory, f"{name}.{FILE_EXTENSION}")
        if os.path.isfile(path):
            try:
                with open(path, "r") as file:
                    code = file.read()
            except OSError as exc:
                raise GenericException(IMPORT, f"failed to read `{path}` for importing `{name}`: {exc}") from None
            return os.path.realpath(path), os.path.dirname(os.path.realpath(path)), code, False

    if name in STL:
        return stl_identity(name), None, STL[name], True

    raise GenericException(IMPORT, f"failed to find file for importing `{name}`")


def import_module(state, name, stl_only=False):
    """Runs module name and merges its top-level bindings and globals into state. Returns the module's result.

    If the module called exit, the exit is moved into state instead and nothing is merged.
    """
    identity, directory, code, in_stl = resolve(state, name, stl_only)

    if identity in state.import_stack:
        raise GenericException(IMPORT, f"cyclic import of `{name}` at path `{identity}` detected")

    module = state.nested(directory, identity, in_stl)
    module.import_stack.append(identity)
    result = module.run(code)

    if module.exit_unwind is not None:
        state.exit_unwind = module.exit_unwind
        return None

    value = result.unwrap()
    state.storage.extend_from(module.storage.exported(module.baseline), module.storage.globals)
    return value
