"""Interactive mode for minipas: programs are typed line by line into a cmd.Cmd loop."""

import cmd


class Shell(cmd.Cmd):
    """Reads programs line by line and prints their variables once the closing period arrives."""
    intro = "minipas :: type a BEGIN ... END. program, 'help' for an overview, 'exit' to leave."
    prompt = "> "
    secondary_prompt = ". "  # shown while a program is still open
    _tmp_prompt = "> "       # restored once the program has run

    def __init__(self, sess, show_tree=False, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.show_tree = show_tree

        self._tmp_line = ""
        self.line_num = 0
        self.first_line = 1  # line number the buffered program started on

    def default(self, line):
        """Executes arbitrary minipas program, possibly spread over several lines."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self.first_line = self.line_num

            text, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = text
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if text:
                self.sess.add(text, self.first_line)
                self.sess.run()
                self._print_result(self.sess.results[-1])

    def _print_result(self, result):
        if self.show_tree:
            print(result.tree.render(), end="")
        if result.store:
            print(result.variables())

    def onecmd(self, line):
        """Lines continuing a program are never commands."""
        if self._tmp_line:
            return self.default(line)
        return super().onecmd(line)

    def do_help(self, arg):
        """Prints an overview of the language and the shell commands."""
        print("A program is a BEGIN ... END block followed by a period. Blocks hold assignments of integer \n"
              "expressions, separated by semicolons, and may be nested.\n\n"
              "Try it out by typing 'BEGIN x := 2 + 3 * 4; y := x / 2 END.'. The final value of every \n"
              "variable is printed once the program has run. Programs can span several lines: keep typing \n"
              "until the closing period. Anything typed after the period on the same line is part of the \n"
              "program, so it is reported as a syntax error.\n\n"
              "Commands: 'tree' toggles printing of the syntax tree, 'vars' reprints the last variables, \n"
              "'exit' quits.")

    def do_tree(self, arg):
        """Toggles printing of the syntax tree of each program."""
        self.show_tree = not self.show_tree
        print(f"tree printing {'on' if self.show_tree else 'off'}")

    def do_vars(self, arg):
        """Prints the variables of the last successful program."""
        if self.sess.results and self.sess.results[-1].store:
            print(self.sess.results[-1].variables())

    def emptyline(self):
        # cmd.Cmd would rerun the last command
        return ""

    def do_EOF(self, arg):
        """Leaves the shell on end of input (Ctrl-D)."""
        print()
        return True

    def do_exit(self, arg):
        """Leaves the shell."""
        return True
