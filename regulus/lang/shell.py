"""Handles interactive/command-line mode for the regulus interpreter. Uses cmd as backend."""

import cmd

from regulus.lang.error import ErrorHandler, GenericException
from regulus.pure.atom import display
from regulus.pure.lexical import TokenType, tokenize


def is_incomplete(code):
    """Returns True if code needs more lines: it has more '(' than ')' or ends inside a string literal."""
    try:
        tokens = tokenize(code)
    except GenericException as exc:
        return exc.msg == "unclosed string literal"

    kinds = [token.kind for token in tokens]
    return kinds.count(TokenType.LEFT_PAREN) > kinds.count(TokenType.RIGHT_PAREN)


class Shell(cmd.Cmd):
    """Regulus interpreter shell. Every line runs in the same State, so definitions persist between lines."""
    intro = "Regulus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, state, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.state = state
        self.error_handler = ErrorHandler(fatal=False)

        self._tmp_lines = []
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary regulus code. Returns True (ending the shell) once `exit` was called."""
        self._tmp_lines.append(line)
        code = "\n".join(self._tmp_lines)

        if is_incomplete(code):
            self.prompt = self.secondary_prompt
            return False

        self._tmp_lines = []
        self.prompt = self._tmp_prompt
        self.line_num += 1

        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            result = self.state.run(code, source_name=f"<in:{self.line_num}>")
            value = result.unwrap()
            if value is not None:
                print(display(value), file=self.stdout)

        return self.state.exit_unwind is not None

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the regulus interpreter!\n\n"
              "Everything in regulus is a function call. Try it out by typing '=(x, +(3, 4))'.\n"
              "This will bind the value 7 to the name 'x'. Next, try typing 'print(x)'.\n\n"
              "Functions are defined with 'def(name, arg1, arg2, body)', and the documentation of\n"
              "any function can be read with 'doc(name)'. Type 'exit(null)' to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line, but keep empty lines of unfinished code."""
        if self._tmp_lines:
            return self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return True
