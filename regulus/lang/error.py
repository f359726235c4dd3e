"""Error handling for the regulus language. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


# exception kinds raised by the interpreter itself; `error(KIND, MSG)` may use any other string
TYPE = "Type"
OVERFLOW = "Overflow"
NAME = "Name"
SYNTAX = "Syntax"
ARGUMENT = "Argument"
ASSIGN = "Assign"
INDEX = "Index"
IO = "Io"
IMPORT = "Import"
USER_RAISED = "UserRaised"
ASSERTION = "Assertion"


class GenericException(Exception):
    """A regulus exception: an open kind tag, a message and the spans of the calls it propagated through, innermost
    first.
    """

    def __init__(self, kind, msg, span=None):
        super().__init__(msg)
        self.kind = kind
        self.msg = msg
        self.backtrace = [span] if span is not None else []

    def add_frame(self, span):
        """Records that this exception left the call at span. Called once per call level while propagating."""
        if span is not None and (not self.backtrace or self.backtrace[-1] != span):
            self.backtrace.append(span)
        return self

    @property
    def origin(self):
        """Innermost known span of this exception, if any."""
        return self.backtrace[0] if self.backtrace else None

    def __str__(self):
        return f"{self.kind}Error: {self.msg}"

    def __repr__(self):
        return f"GenericException({self.kind!r}, {self.msg!r})"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report regulus errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, file=None):
        self.fatal = fatal
        self.file = file

    @property
    def out(self):
        return self.file if self.file is not None else sys.stderr

    @staticmethod
    def diagnose(span, warning=False):
        """Returns the source line of span with the spanned part highlighted and underlined."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line = span.source.line(span.start.line)
        start = span.start.column - 1
        end = span.end.column if span.end.line == span.start.line else len(line)
        end = max(min(end, len(line)), start + 1)

        diagnosis = "    " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "    " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    @staticmethod
    def traceback(error):
        """Formats the backtrace of error, outermost call first."""
        frames = [span for span in reversed(error.backtrace) if span.source is not None]

        error_msg = ""
        for idx, span in enumerate(frames):
            error_msg += f"  File '{span.source.name}', line {span.start.line}, column {span.start.column}:\n"
            if idx == len(frames) - 1:
                error_msg += ErrorHandler.diagnose(span) + "\n"
            else:
                error_msg += f"    {span.source.line(span.start.line).strip()}\n"

        if len(frames) > 1:
            error_msg = "Traceback:\n" + error_msg

        return error_msg

    def warn(self, msg, span=None):
        """Prints a warning message, pointing at span if given."""
        location = f"{span}: " if span is not None and span.source is not None else ""
        warning = colored(location, attrs=["bold"])
        warning += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg

        print(warning, file=self.out)
        if span is not None and span.source is not None:
            print(ErrorHandler.diagnose(span, warning=True), file=self.out)

    def throw(self, error, internal=False):
        """Prints error with its traceback. error must be a GenericException. Exits with status 1 if fatal."""
        error_msg = ErrorHandler.traceback(error)

        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + str(error)
        print(error_msg, file=self.out)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("Interrupt", "keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException(OVERFLOW, "maximum recursion depth exceeded"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("Internal", f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
