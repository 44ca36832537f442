import io
import unittest
from contextlib import redirect_stdout

from minipas.lang.error import ErrorHandler
from minipas.lang.session import Session
from minipas.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def feed(self, *lines):
        """Runs lines through the shell, returns what it printed and whether it asked to stop."""
        out = io.StringIO()
        stop = False
        with redirect_stdout(out):
            for line in lines:
                stop = self.shell.onecmd(line)
        return out.getvalue(), stop

    def test_single_line(self):
        output, stop = self.feed("BEGIN x := 2 + 3 * 4 END.")
        self.assertEqual("x = 14\n", output)
        self.assertFalse(stop)

    def test_multi_line(self):
        output, __ = self.feed("BEGIN", "    a := 10 - 2 - 3;")
        self.assertEqual("", output)
        self.assertEqual(self.shell.secondary_prompt, self.shell.prompt)

        output, __ = self.feed("", "    b := a * 2", "END.")
        self.assertEqual("a = 5\nb = 10\n", output)
        self.assertEqual(self.shell._tmp_prompt, self.shell.prompt)

    def test_continuation_lines_are_not_commands(self):
        output, stop = self.feed("BEGIN", "exit := 1", "END.")
        self.assertEqual("exit = 1\n", output)
        self.assertFalse(stop)

    def test_errors_do_not_exit(self):
        output, __ = self.feed("BEGIN x := y END.")
        self.assertIn("[RuntimeError] undefined variable", output)
        self.assertIn("<in>:1:12: ", output)

        output, __ = self.feed("BEGIN x := 1 END", "BEGIN x := 1 END.")
        self.assertIn("[SyntaxError]", output)

        output, __ = self.feed("BEGIN x := 1 % 2 END.")
        self.assertIn("[LexError]", output)

        output, __ = self.feed("BEGIN x := 7 END.")
        self.assertEqual("x = 7\n", output)

    def test_error_line_numbers(self):
        self.feed("BEGIN x := 1 END.")
        output, __ = self.feed("BEGIN", "x := 1 / 0", "END.")
        self.assertIn("<in>:3:8: ", output)

    def test_tree(self):
        output, __ = self.feed("tree")
        self.assertIn("tree printing on", output)

        output, __ = self.feed("BEGIN END.")
        self.assertEqual("  |Other(1)|  \n  |Other(1)|  \n  |Other(0)|  \n", output)

        self.feed("tree")
        self.assertFalse(self.shell.show_tree)

    def test_vars(self):
        output, __ = self.feed("vars")
        self.assertEqual("", output)

        output, __ = self.feed("BEGIN a := 1; b := -a END.", "vars")
        self.assertEqual("a = 1\nb = -1\na = 1\nb = -1\n", output)

    def test_exit(self):
        self.assertTrue(self.feed("exit")[1])
        self.assertEqual(("\n", True), self.feed("EOF"))

    def test_emptyline(self):
        self.assertEqual(("", ""), self.feed(""))

    def test_trailing_text_after_period(self):
        output, __ = self.feed("BEGIN x := 1 END. y")
        self.assertIn("[SyntaxError] unexpected", output)
        self.assertEqual(self.shell._tmp_prompt, self.shell.prompt)

        output, __ = self.feed("BEGIN", "x := 2", "END. BEGIN")
        self.assertIn("[SyntaxError] unexpected", output)

        output, __ = self.feed("BEGIN x := 3 END.")
        self.assertEqual("x = 3\n", output)

    def test_help(self):
        output, stop = self.feed("help")
        self.assertIn("BEGIN ... END", output)
        self.assertIn("syntax error", output)
        self.assertFalse(stop)


if __name__ == '__main__':
    unittest.main()
