import io
import unittest
from contextlib import redirect_stdout

from minipas.lang.error import ErrorHandler, EvalError, LexError, MinipasError, ParseError


class MinipasErrorTestCase(unittest.TestCase):

    def test_kinds(self):
        cases = {LexError: "LexError", ParseError: "SyntaxError", EvalError: "RuntimeError"}
        for case, expected in cases.items():
            self.assertEqual(expected, case("boom").kind)
            self.assertTrue(issubclass(case, MinipasError))

    def test_message(self):
        error = MinipasError("'{}' and '{}'", ("a", 2), pos=4, length=3)
        self.assertEqual("'a' and '2'", str(error))
        self.assertEqual("'a' and '2'", error.plain)
        self.assertEqual(["a", "2"], error.exprs)
        self.assertEqual((4, 3), (error.pos, error.length))
        self.assertFalse(error.internal)

        self.assertEqual("undefined variable 'q'", str(EvalError("undefined variable '{}'", "q", name="q")))


class ErrorHandlerTestCase(unittest.TestCase):

    def test_locate(self):
        source = "BEGIN\n  x := y\nEND."
        cases = {
            0: (0, 0, "BEGIN"),
            8: (1, 2, "  x := y"),
            13: (1, 7, "  x := y"),
            15: (2, 0, "END."),
            len(source): (2, 4, "END."),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, ErrorHandler.locate(source, case), case)

    def test_throw(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.pas")
        handler.register_source("prog.pas", "BEGIN\n  x := y\nEND.", 1)

        out = io.StringIO()
        with redirect_stdout(out):
            handler.throw(EvalError("undefined variable '{}'", "y", pos=13, name="y"))

        output = out.getvalue()
        self.assertIn("prog.pas:2:8: ", output)
        self.assertIn("error: ", output)
        self.assertIn("[RuntimeError] undefined variable", output)
        self.assertIn("  x := ", output)
        self.assertIn("^", output)
        self.assertEqual({"prog.pas": (None, None)}, handler.traceback)

    def test_throw_line_offset(self):
        handler = ErrorHandler(fatal=False)
        handler.register_source("<in>", "BEGIN\nx := 1 / 0\nEND.", 5)

        out = io.StringIO()
        with redirect_stdout(out):
            handler.throw(EvalError("division by zero", pos=13))
        self.assertIn("<in>:6:8: ", out.getvalue())

    def test_throw_fatal(self):
        handler = ErrorHandler()
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as context:
            handler.throw(MinipasError("boom"))
        self.assertEqual(1, context.exception.code)

    def test_context_manager(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False):
                raise ParseError("expected {} but found {}", ("DOT", "EOF"))
        self.assertIn("[SyntaxError] expected", out.getvalue())

        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False):
                raise RecursionError()
        self.assertIn("[RuntimeError] program nested too deeply", out.getvalue())

        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(KeyError):
            with ErrorHandler(fatal=False):
                raise KeyError("x")
        self.assertIn("[internal] ", out.getvalue())

        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(0)


if __name__ == '__main__':
    unittest.main()
