import io
import unittest
from unittest import mock

from pylox.lang.error import ErrorHandler
from pylox.lang.interpreter import is_equal, is_truthy, stringify
from pylox.lang.session import Session


def run(source):
    out = io.StringIO()
    error_handler = ErrorHandler(stream=io.StringIO(), fatal=False)
    Session(error_handler, out).run(source)
    return out.getvalue().splitlines(), error_handler.messages


class ValueTestCase(unittest.TestCase):

    def test_is_truthy(self):
        should_fail = [None, False]
        for case in should_fail:
            self.assertFalse(is_truthy(case), case)

        should_pass = [True, 0.0, 1.0, "", "false"]
        for case in should_pass:
            self.assertTrue(is_truthy(case), case)

    def test_is_equal(self):
        should_fail = [(None, False), (1.0, True), (0.0, False), ("1", 1.0), (None, 0.0)]
        for left, right in should_fail:
            self.assertFalse(is_equal(left, right), (left, right))

        should_pass = [(None, None), (1.0, 1.0), ("a", "a"), (True, True)]
        for left, right in should_pass:
            self.assertTrue(is_equal(left, right), (left, right))

    def test_stringify(self):
        cases = {None: "nil", True: "true", False: "false", 3.0: "3", 3.5: "3.5", -0.25: "-0.25", "s": "s",
                 1e16: "1E+16", 1.2345678901234568e+20: "1.2345678901234568E+20", 1e-07: "1E-07"}
        for case, expected in cases.items():
            self.assertEqual(expected, stringify(case), case)


class ExpressionTestCase(unittest.TestCase):

    def test_print(self):
        cases = {
            "print 1 + 1;": ["2"],
            "print 3.5;": ["3.5"],
            "print 10 / 4;": ["2.5"],
            "print \"a\" + \"b\";": ["ab"],
            "print \"n=\" + 1;": ["n=1"],
            "print 1.5 + \"x\";": ["1.5x"],
            "print nil;": ["nil"],
            "print -(2 * 3) + 1;": ["-5"],
            "print 10000000000000000;": ["1E+16"],
            "print 123456789012345678901;": ["1.2345678901234568E+20"],
            "print 0.0000001;": ["1E-07"],
            "print \"big: \" + 10000000000000000;": ["big: 1E+16"],
            "print 2 > 1; print 2 <= 1;": ["true", "false"],
        }
        for case, expected in cases.items():
            output, messages = run(case)
            self.assertEqual([], messages, case)
            self.assertEqual(expected, output, case)

    def test_equality(self):
        cases = {
            "print nil == nil;": ["true"],
            "print nil == false;": ["false"],
            "print 1 == true;": ["false"],
            "print \"a\" == \"a\";": ["true"],
            "print \"1\" != 1;": ["true"],
            "print 0 == 0.0;": ["true"],
        }
        for case, expected in cases.items():
            output, __ = run(case)
            self.assertEqual(expected, output, case)

    def test_truthiness(self):
        output, __ = run("print !0; print !\"\"; print !nil; print !false;")
        self.assertEqual(["false", "false", "true", "true"], output)

    def test_logical(self):
        cases = {
            "print nil or \"x\";": ["x"],
            "print 1 or undefined;": ["1"],
            "print 1 and 2;": ["2"],
            "print false and undefined;": ["false"],
            "print nil and 1;": ["nil"],
        }
        for case, expected in cases.items():
            output, messages = run(case)
            self.assertEqual([], messages, case)
            self.assertEqual(expected, output, case)

    def test_ternary(self):
        cases = {
            "print true ? 1 : 2;": ["1"],
            "print nil ? 1 : 2;": ["2"],
            "print 0 ? \"zero is truthy\" : \"no\";": ["zero is truthy"],
        }
        for case, expected in cases.items():
            output, __ = run(case)
            self.assertEqual(expected, output, case)

    def test_ternary_evaluates_every_operand(self):
        source = """
        var n = 0;
        fun bump() { n = n + 1; return n; }
        print true ? bump() : bump();
        print n;
        """
        output, messages = run(source)
        self.assertEqual([], messages)
        self.assertEqual(["1", "2"], output)

    def test_runtime_errors(self):
        cases = {
            "print 1 + true;": "[line 1] Operands (1, true) must be two numbers or contain a string.",
            "print nil + \"a\";": "[line 1] Operands (nil, a) must be two numbers or contain a string.",
            "print 1 < \"2\";": "[line 1] Operands (1, 2) must be numbers.",
            "print \"a\" * 2;": "[line 1] Operands (a, 2) must be numbers.",
            "print -\"a\";": "[line 1] Operand 'a' must be a number.",
            "print 1 / 0;": "[line 1] Division by zero.",
            "var z = 0; print 1 / z;": "[line 1] Division by zero.",
            "print 1 / (2 - 2);": "[line 1] Division by zero.",
            "print x;": "[line 1] Undefined variable 'x'.",
            "x = 1;": "[line 1] Undefined variable 'x'.",
            "\n\nprint nope;": "[line 3] Undefined variable 'nope'.",
        }
        for case, expected in cases.items():
            output, messages = run(case)
            self.assertEqual([expected], messages, case)


class StatementTestCase(unittest.TestCase):

    def test_block_scoping(self):
        output, __ = run("var a = \"outer\"; { var a = \"inner\"; print a; } print a;")
        self.assertEqual(["inner", "outer"], output)

    def test_assignment_reaches_enclosing_scope(self):
        output, __ = run("var a = 1; { a = 2; { a = a + 1; } } print a;")
        self.assertEqual(["3"], output)

    def test_uninitialized_var(self):
        output, __ = run("var a; print a;")
        self.assertEqual(["nil"], output)

    def test_control_flow(self):
        cases = {
            "if (1 > 2) print \"a\"; else print \"b\";": ["b"],
            "if (nil) print \"a\";": [],
            "var i = 0; while (i < 3) { print i; i = i + 1; }": ["0", "1", "2"],
            "for (var i = 0; i < 3; i = i + 1) print i;": ["0", "1", "2"],
            "var s = \"\"; for (var i = 0; i < 3; i = i + 1) s = s + i; print s;": ["012"],
        }
        for case, expected in cases.items():
            output, messages = run(case)
            self.assertEqual([], messages, case)
            self.assertEqual(expected, output, case)

    def test_for_variable_does_not_leak(self):
        output, messages = run("for (var i = 0; i < 1; i = i + 1) {} print i;")
        self.assertEqual([], output)
        self.assertEqual(["[line 1] Undefined variable 'i'."], messages)

    def test_runtime_error_stops_unit(self):
        output, messages = run("print 1; print nope; print 2;")
        self.assertEqual(["1"], output)
        self.assertEqual(["[line 1] Undefined variable 'nope'."], messages)

    def test_static_error_stops_everything(self):
        output, messages = run("print 1;\nprint ;")
        self.assertEqual([], output)
        self.assertEqual(["[line 2] Error at ';': Expect expression."], messages)


class FunctionTestCase(unittest.TestCase):

    def test_call_and_return(self):
        cases = {
            "fun add(a, b) { return a + b; } print add(1, 2);": ["3"],
            "fun f() {} print f();": ["nil"],
            "fun f() { return; } print f();": ["nil"],
            "fun f() { while (true) { return \"done\"; } } print f();": ["done"],
            "fun f(n) { if (n > 0) return \"pos\"; return \"other\"; } print f(1); print f(0);": ["pos", "other"],
            "fun f() { for (var i = 0; ; i = i + 1) if (i == 3) return i; } print f();": ["3"],
        }
        for case, expected in cases.items():
            output, messages = run(case)
            self.assertEqual([], messages, case)
            self.assertEqual(expected, output, case)

    def test_recursion(self):
        source = """
        fun fib(n) {
            if (n < 2) return n;
            return fib(n - 2) + fib(n - 1);
        }
        print fib(10);
        """
        output, __ = run(source)
        self.assertEqual(["55"], output)

    def test_mutual_recursion(self):
        source = """
        fun isEven(n) { if (n == 0) return true; return isOdd(n - 1); }
        fun isOdd(n) { if (n == 0) return false; return isEven(n - 1); }
        print isEven(10);
        print isOdd(7);
        """
        output, __ = run(source)
        self.assertEqual(["true", "true"], output)

    def test_closure_counter(self):
        source = """
        fun makeCounter() {
            var i = 0;
            fun inc() { i = i + 1; return i; }
            return inc;
        }
        var c = makeCounter();
        print c();
        print c();
        var d = makeCounter();
        print d();
        """
        output, __ = run(source)
        self.assertEqual(["1", "2", "1"], output)

    def test_closure_outlives_block(self):
        source = """
        var get;
        {
            var hidden = "kept";
            fun g() { return hidden; }
            get = g;
        }
        print get();
        """
        output, __ = run(source)
        self.assertEqual(["kept"], output)

    def test_argument_order(self):
        source = """
        var i = 0;
        fun next() { i = i + 1; return i; }
        fun show(a, b) { print a; print b; }
        show(next(), next());
        """
        output, __ = run(source)
        self.assertEqual(["1", "2"], output)

    def test_printing_callables(self):
        output, __ = run("fun f() {} print f; print clock;")
        self.assertEqual(["<fn f>", "<native fn>"], output)

    def test_clock(self):
        output, messages = run("var a = clock(); var b = clock(); print a > 0; print b >= a;")
        self.assertEqual([], messages)
        self.assertEqual(["true", "true"], output)

    def test_clock_reads_monotonic_time(self):
        with mock.patch("pylox.lang.runtime.time.monotonic", return_value=42.5):
            output, messages = run("print clock();")
        self.assertEqual([], messages)
        self.assertEqual(["42.5"], output)

    def test_call_errors(self):
        cases = {
            "var x = 1; x();": "[line 1] Can only call functions and classes.",
            "\"str\"();": "[line 1] Can only call functions and classes.",
            "fun f(a) {} f();": "[line 1] Expected 1 arguments but got 0.",
            "fun f() {} f(1, 2);": "[line 1] Expected 0 arguments but got 2.",
            "clock(1);": "[line 1] Expected 0 arguments but got 1.",
        }
        for case, expected in cases.items():
            output, messages = run(case)
            self.assertEqual([expected], messages, case)


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.error_handler = ErrorHandler(stream=io.StringIO(), fatal=False)
        self.sess = Session(self.error_handler, self.out)

    def test_definitions_accumulate(self):
        self.sess.run_line("var a = 1;")
        self.sess.run_line("fun twice(x) { return x * 2; }")
        self.sess.run_line("print twice(a);")
        self.assertEqual(["2"], self.out.getvalue().splitlines())

    def test_flags_reset_per_line(self):
        self.sess.run_line("print ;")
        self.assertTrue(self.sess.had_error)

        self.sess.run_line("print nope;")
        self.assertFalse(self.sess.had_error)
        self.assertTrue(self.sess.had_runtime_error)

        self.sess.run_line("print 1;")
        self.assertFalse(self.sess.had_error)
        self.assertFalse(self.sess.had_runtime_error)
        self.assertEqual(["1"], self.out.getvalue().splitlines())

    def test_globals_survive_runtime_error(self):
        self.sess.run_line("var a = 1; a = 2; a = nope; a = 3;")
        self.sess.run_line("print a;")
        self.assertEqual(["2"], self.out.getvalue().splitlines())

    def test_environment_restored_after_error(self):
        self.sess.run_line("var a = \"global\"; { var a = \"local\"; print nope; }")
        self.sess.run_line("print a;")
        self.assertEqual(["global"], self.out.getvalue().splitlines())


if __name__ == '__main__':
    unittest.main()
