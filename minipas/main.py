"""Uses the minipas lexer, parser and evaluator to run .pas files, or run in command-line mode. Also uses the error
handling context manager. Called from the minipas console script.
"""

import argparse
import logging

from minipas.lang.error import ErrorHandler
from minipas.lang.shell import Shell
from minipas.lang.session import Session


def main(argv=None):
    """Runs minipas interpreter. Called from minipas console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="minipas")
        parser.add_argument("file", help="file to interpret and run, '-' for stdin (if empty, goes to command-line mode)",
                            nargs="?")
        parser.add_argument("-t", "--tree", help="print the syntax tree before the variables", action="store_true")
        parser.add_argument("-v", "--verbose", help="log each stage of the run to stderr", action="store_true")
        args = parser.parse_args(argv)

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            for result in sess.results:
                if args.tree:
                    print(result.tree.render(), end="")
                if result.store:
                    print(result.variables())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True), show_tree=args.tree).cmdloop()
