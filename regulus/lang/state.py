"""Execution state of a regulus program and the programmatic entry points `run` and `run_file`.

A State owns exactly one Storage and drives a program to completion. `import` and `eval` do not reuse the caller's
State: they build a nested one (sharing only the I/O handles, globals and type ids), run it synchronously and merge
what is needed back.
"""

import itertools
import os
import sys

from regulus.lang.error import GenericException, IO, OVERFLOW
from regulus.lang.functions import all_functions
from regulus.lang.imports import PRELUDE, import_module
from regulus.lang.storage import Storage
from regulus.pure.atom import MIN_OBJECT_TY_ID
from regulus.pure.lexical import tokenize
from regulus.pure.positions import Source
from regulus.pure.syntax import build_program


class Result:
    """Outcome of running a program: either value or exception is meaningful."""

    def __init__(self, value=None, exception=None):
        self.value = value
        self.exception = exception

    @property
    def ok(self):
        return self.exception is None

    def unwrap(self):
        """Returns value, or raises exception if running failed."""
        if self.exception is not None:
            raise self.exception
        return self.value

    def __repr__(self):
        if self.ok:
            return f"Result(value={self.value!r})"
        return f"Result(exception={self.exception!r})"


class State:
    """Governs one regulus program run: bindings, I/O handles, import context and the exit-unwind flag.

    directory is the directory that local imports are resolved against (None: only the embedded standard library is
    importable). in_stl marks States that run embedded standard library code, which never import the prelude.
    """
    SH_FILE = "<in>"  # source name for code without a file

    def __init__(self, directory=None, source_name=SH_FILE, stdin=None, stdout=None, stderr=None, in_stl=False,
                 prelude=True):
        self.storage = Storage(all_functions())
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

        self.directory = directory
        self.source_name = source_name
        self.in_stl = in_stl
        self.import_stack = []      # canonical paths (or <stl:NAME>) of modules currently being imported

        self.exit_unwind = None     # Result stored by `exit`, returned by run instead of the normal result
        self.current_call = None    # FunctionCall currently being dispatched, read by builtins such as `def`

        self.type_ids = itertools.count(MIN_OBJECT_TY_ID)
        self.use_prelude = prelude
        self.prelude_loaded = in_stl
        self.baseline = self.storage.snapshot()  # bindings that are not exported when imported

    @classmethod
    def from_file(cls, path, **kwargs):
        """Returns a State for running the file at path and the file's code."""
        code = read_file(path)
        state = cls(source_name=path, **kwargs)
        state.enter_file(path)
        return state, code

    def enter_file(self, path):
        """Resolves imports relative to the file at path from now on and protects it against importing itself."""
        self.directory = os.path.dirname(os.path.abspath(path))
        if os.path.realpath(path) not in self.import_stack:
            self.import_stack.append(os.path.realpath(path))

    def nested(self, directory=None, source_name=SH_FILE, in_stl=False):
        """Returns a fresh State for an imported module or evaluated string, sharing I/O handles, globals, the import
        stack and type ids with self.
        """
        state = State(directory, source_name, self.stdin, self.stdout, self.stderr, in_stl, self.use_prelude)
        state.import_stack = list(self.import_stack)
        state.type_ids = self.type_ids
        for name in self.storage.global_names:
            state.storage.global_names.add(name)
        state.storage.globals.update(self.storage.globals)
        return state

    def load_prelude(self):
        """Imports the prelude once, unless this State runs standard library code or the prelude was disabled."""
        if self.prelude_loaded or not self.use_prelude:
            return
        self.prelude_loaded = True
        import_module(self, PRELUDE, stl_only=True)
        self.baseline = self.storage.snapshot()

    def run(self, code, source_name=None):
        """Runs code in this State and returns a Result. If exit was called, its stored Result is returned instead."""
        source = Source(source_name or self.source_name, code)
        depth = self.storage.depth
        try:
            self.load_prelude()
            program = build_program(tokenize(code, source))
            result = Result(program.evaluate(self))
        except GenericException as exc:
            result = Result(exception=exc)
        except RecursionError:
            del self.storage.scopes[depth:]  # scopes may not have been popped while the stack was exhausted
            result = Result(exception=GenericException(OVERFLOW, "maximum recursion depth exceeded"))

        if self.exit_unwind is not None:
            return self.exit_unwind
        return result

    def make_type_id(self):
        return next(self.type_ids)

    def write(self, text):
        """Writes text to stdout. Nothing is written anymore once exit was called."""
        if self.exit_unwind is None:
            self._write(self.stdout, text)

    def write_err(self, text):
        """Writes text to stderr. Nothing is written anymore once exit was called."""
        if self.exit_unwind is None:
            self._write(self.stderr, text)

    @staticmethod
    def _write(stream, text):
        try:
            stream.write(text)
        except (OSError, ValueError) as exc:
            raise GenericException(IO, f"Error while writing: {exc}") from None

    def read_line(self):
        """Reads one line from stdin, without its newline. Raises an Io GenericException at end of input."""
        try:
            line = self.stdin.readline()
        except (OSError, ValueError) as exc:
            raise GenericException(IO, f"Error while reading input: {exc}") from None
        if not line:
            raise GenericException(IO, "end of input reached")
        if not line.endswith("\n"):
            raise GenericException(IO, "missing newline after input() call")
        return line[:-1]


def read_file(path):
    try:
        with open(path, "r") as file:
            return file.read()
    except OSError:
        raise GenericException(IO, f"'{path}' could not be opened") from None


def run(code, directory=None, state=None):
    """Runs code and returns (Result, final State). If state is given, it is used (and mutated) instead of a fresh
    State rooted at directory.
    """
    if state is None:
        state = State(directory=directory)
    return state.run(code), state


def run_file(path, state=None, **kwargs):
    """Runs the file at path and returns (Result, final State). If state is given, it is used (and mutated) instead of
    a fresh State: imports are resolved relative to the file from then on.
    """
    if state is None:
        state, code = State.from_file(path, **kwargs)
    else:
        code = read_file(path)
        state.enter_file(path)
    return state.run(code, source_name=path), state
