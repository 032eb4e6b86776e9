"""Runs the Lox interpreter on a script file, or in interactive mode when no file is given. Also uses the error
handling context manager. Called from the pylox console script.

Exit codes follow sysexits.h: 64 for bad usage, 65 for a static error in the script, 66 for an unreadable script and
70 for a runtime error (or a host-level failure such as a stack overflow).
"""

import argparse
import sys

from pylox.lang.error import EX_SOFTWARE, ErrorHandler
from pylox.lang.session import Session
from pylox.lang.shell import Shell


EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66

RECURSION_LIMIT = 10000  # every Lox call costs several Python frames


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with EX_USAGE instead of argparse's default status of 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EX_USAGE, f"{self.prog}: error: {message}\n")


def main(argv=None):
    """Runs the Lox interpreter. Returns the process exit code."""
    parser = UsageParser(prog="pylox", usage="pylox [script]")
    parser.add_argument("script", help="file to interpret and run (if empty, goes to interactive mode)", nargs="?")
    args = parser.parse_args(argv)

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler() as error_handler:
        sess = Session(error_handler)

        if args.script is None:
            Shell(sess).cmdloop()
            return 0

        try:
            sess.run_file(args.script)
        except OSError as error:
            print(f"pylox: could not open '{args.script}': {error.strerror}", file=sys.stderr)
            return EX_NOINPUT
        except UnicodeDecodeError:
            print(f"pylox: could not read '{args.script}': not valid UTF-8", file=sys.stderr)
            return EX_NOINPUT

        if sess.had_error:
            return EX_DATAERR
        if sess.had_runtime_error:
            return EX_SOFTWARE
        return 0

    return EX_SOFTWARE  # only reached when the error handler suppressed a fatal error


if __name__ == "__main__":
    sys.exit(main())
