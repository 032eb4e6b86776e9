"""Session control for Lox. A session owns one Interpreter (and therefore one set of globals) and runs source text
through the whole pipeline: scanning, parsing, resolving and interpreting. Used both for running a script file and for
the interactive shell, where every line is its own unit of work but definitions accumulate.
"""

from pylox.lang.interpreter import Interpreter
from pylox.lang.parser import Parser
from pylox.lang.resolver import Resolver
from pylox.lang.scanner import Scanner


class Session:
    """Governs a Lox session, with control over the globals shared by successive runs."""

    def __init__(self, error_handler, out=None):
        self.error_handler = error_handler
        self.interpreter = Interpreter(error_handler, out)

    @property
    def had_error(self):
        """Whether the last run hit a static (lexing, parsing or resolving) error."""
        return self.error_handler.had_error

    @property
    def had_runtime_error(self):
        return self.error_handler.had_runtime_error

    def parse(self, source):
        """Scans and parses source. Returns the statements that parsed, even if errors were reported."""
        tokens = Scanner(source, self.error_handler).scan_tokens()
        return Parser(tokens, self.error_handler).parse()

    def run(self, source):
        """Runs source as one unit of work. Nothing is executed if a static error is reported; a runtime error stops
        the unit but leaves already-defined globals intact.
        """
        statements = self.parse(source)
        if self.had_error:
            return

        Resolver(self.interpreter, self.error_handler).resolve(statements)
        if self.had_error:
            return

        self.interpreter.interpret(statements)

    def run_line(self, line):
        """Runs one line of interactive input. Error flags are reset first so one bad line doesn't block the rest."""
        self.error_handler.reset()
        self.run(line)

    def run_file(self, path):
        """Reads path as UTF-8 text and runs it once. Nothing runs if the file can't be read or decoded."""
        with open(path, "r", encoding="utf-8") as file:
            source = file.read()
        self.run(source)
