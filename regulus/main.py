"""Runs .re files or the interactive shell of the regulus interpreter. Called from the `regulus` executable script.

The final value of a program is printed unless it is null. Any uncaught regulus exception is reported with its
traceback and makes the process exit with status 1.
"""

import argparse
import os
import sys

from regulus.lang.error import ErrorHandler
from regulus.lang.shell import Shell
from regulus.lang.state import State, run_file
from regulus.pure.atom import display

RECURSION_LIMIT = 10000  # every call of a regulus function takes several Python frames


def main():
    """Runs the regulus interpreter. Called from the regulus executable script."""
    with ErrorHandler():
        parser = argparse.ArgumentParser(prog="regulus")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--no-prelude", help="do not import the prelude automatically", action="store_true")
        parser.add_argument("--recursion-limit", help="maximum depth of the Python stack", type=int,
                            default=RECURSION_LIMIT)
        args = parser.parse_args()

        sys.setrecursionlimit(args.recursion_limit)

        if args.file is not None:
            result, __ = run_file(args.file, prelude=not args.no_prelude)
            value = result.unwrap()
            if value is not None:
                print(display(value))

        else:
            Shell(State(directory=os.getcwd(), prelude=not args.no_prelude)).cmdloop()


if __name__ == "__main__":
    main()
