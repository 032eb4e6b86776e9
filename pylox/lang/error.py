"""Error handling for the Lox interpreter. Only LoxErrors should be encountered while running a program: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Diagnostics come in two shapes, which are part of the observable contract of the interpreter:

```
[line N] Error<where>: message   ; static errors (lexing, parsing, resolving)
[line N] message                 ; runtime errors
```
"""

import sys

from termcolor import colored

from pylox.lang.tokens import TokenType


EX_SOFTWARE = 70  # exit code used for fatal host conditions (see ErrorHandler.__exit__)


class LoxError(Exception):
    """Superclass of every error the interpreter raises on purpose."""


class ParseError(LoxError):
    """Signals panic mode inside the parser. Never escapes Parser.parse."""


class LoxRuntimeError(LoxError):
    """Error raised while evaluating a program. token is used to attribute the error to a source line."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class ErrorHandler:
    """Collects and reports errors for a session. Also a context manager that turns host-level failures (interrupts,
    recursion exhaustion, internal bugs) into reported messages.
    """
    ERROR = "red"

    def __init__(self, stream=None, fatal=True):
        self.stream = stream
        self.fatal = fatal

        self.had_error = False
        self.had_runtime_error = False
        self.messages = []  # plain text of every reported diagnostic, in order

    def reset(self):
        """Clears both error flags. Called before each line in interactive mode."""
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line, message):
        """Reports a static error that has no token to point at (lexical errors)."""
        self._report(line, "", message)

    def token_error(self, token, message):
        """Reports a static error located at token."""
        if token.type == TokenType.EOF:
            self._report(token.line, " at end", message)
        else:
            self._report(token.line, f" at '{token.lexeme}'", message)

    def runtime_error(self, error):
        """Reports a LoxRuntimeError."""
        prefix = f"[line {error.token.line}]"
        self._emit(prefix, error.message)
        self.had_runtime_error = True

    def throw(self, message, internal=False):
        """Reports a fatal error and, if self.fatal, exits the process."""
        prefix = colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"]) if internal else ""
        prefix += colored("fatal:", ErrorHandler.ERROR, attrs=["bold"])

        self.messages.append(f"fatal: {message}")
        print(f"{prefix} {message}", file=self._stream())

        if self.fatal:
            sys.exit(EX_SOFTWARE)
        self.had_runtime_error = True

    def _report(self, line, where, message):
        self._emit(f"[line {line}] Error{where}:", message)
        self.had_error = True

    def _emit(self, prefix, message):
        self.messages.append(f"{prefix} {message}")
        print(colored(prefix, ErrorHandler.ERROR, attrs=["bold"]) + f" {message}", file=self._stream())

    def _stream(self):
        return self.stream if self.stream is not None else sys.stderr

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw("keyboard interrupt")
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw("Stack overflow.")
        elif exc_type is not None:
            self.throw(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True)
            do_exit = True

        return not do_exit
