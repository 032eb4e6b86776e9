"""Handles interactive mode for the Lox interpreter. Uses cmd as backend.

Every line is Lox source, except for a bare command word (help, exit) or a line starting with ":" (":ast print 1;"),
which is a shell command. Lox identifiers may be named like commands, so "exit = exit + 1;" is still Lox.
"""

import cmd

from pylox.lang.printer import AstPrinter


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "

    COMMAND_PREFIX = ":"
    BARE_COMMANDS = {"help", "exit", "EOF"}  # cmdloop feeds "EOF" on end of input

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def parseline(self, line):
        """Returns (None, None, line) for Lox source so that onecmd hands it to default."""
        stripped = line.strip()
        if stripped.startswith(Shell.COMMAND_PREFIX):
            return super().parseline(stripped[len(Shell.COMMAND_PREFIX):])
        if stripped in Shell.BARE_COMMANDS:
            return stripped, "", stripped
        return None, None, line

    def default(self, line):
        """Executes arbitrary Lox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.run_line(line)

    def do_ast(self, arg):
        """Prints the syntax tree of the given statements without running them: :ast print 1 + 2 * 3;"""
        self.sess.error_handler.reset()
        printer = AstPrinter()
        for stmt in self.sess.parse(arg):
            print(printer.print(stmt), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Lox interpreter!\n\n"
              "Lox is a small dynamically-typed scripting language with closures and classes.\n"
              "Every line is run as soon as it is entered, and definitions stay around for\n"
              "the following lines.\n\n"
              "Try it out by typing 'var greeting = \"hi\";' and then 'print greeting;'.\n"
              "Type ':ast <source>' to see how a line is parsed, and 'exit' (or Ctrl-D) to quit.",
              file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
