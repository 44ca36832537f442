"""Session control for minipas. Acquires program text, either from a file or line by line from the command-line, and
runs each program through the lexer, parser and evaluator.
"""

import dataclasses as dc
import logging
import sys

from minipas.core.evaluator import evaluate
from minipas.core.syntax import Parser
from minipas.core.tree import Node
from minipas.lang.error import MinipasError

logger = logging.getLogger(__name__)


@dc.dataclass
class Result:
    tree: Node
    store: dict

    def variables(self):
        """Lines of 'name = value' in assignment order."""
        return "\n".join(f"{name} = {value}" for name, value in self.store.items())


class Session:
    """Governs a minipas session. Every program runs against its own fresh store."""
    SH_FILE = "<in>"     # command-line interpreter filename
    STDIN_FILE = "-"

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.to_run = []    # list of (source, line num) to run
        self.results = []   # list of Results, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path == Session.STDIN_FILE:
            self.add(sys.stdin.read())

        elif path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.add(file.read())
            except OSError:
                raise MinipasError("'{}' could not be opened", path)

        elif not cmd_line:
            raise MinipasError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, buffered=""):
        """Joins line onto the lines buffered so far. Returns the joined text and whether or not more lines are needed,
        which is the case until a '.' has been typed. '.' only ever terminates a program, so whatever follows it
        on the same line is left for the parser to reject.
        """
        text = buffered + line + "\n" if buffered or line.strip() else ""
        return text, bool(text) and "." not in text

    def add(self, source, line_num=1):
        """Queues source to be run. Parsing and evaluation are delayed until run is called."""
        self.to_run.append((source, line_num))

    def run(self):
        """Runs every queued program in order. Will raise any errors that are encountered; a failed program leaves
        no result behind.
        """
        while self.to_run:
            source, line_num = self.to_run.pop(0)
            self.error_handler.register_source(self.path, source, line_num)

            tree = Parser(source).parse()
            store = evaluate(tree)
            self.results.append(Result(tree, store))
            logger.debug("%s: program finished, %d variable(s)", self.path, len(store))

            self.error_handler.remove_source(self.path)

    def pop(self):
        """Removes and returns the newest result."""
        return self.results.pop()
