"""Error handling for minipas. Only MinipasErrors should be encountered while running a program: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import logging
import sys

from termcolor import colored

logger = logging.getLogger(__name__)


class MinipasError(Exception):
    """Templates an error message so that it can be reported with the offending source highlighted. exprs are
    substituted into msg, bolded when printed to a terminal.
    """
    kind = "Error"

    def __init__(self, msg, exprs=None, pos=None, length=1, internal=False):
        if exprs is None:
            exprs = []
        if not isinstance(exprs, (list, tuple)):
            exprs = [exprs]

        self.exprs = [str(expr) for expr in exprs]
        self.plain = msg.format(*self.exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))  # color expr snippets

        self.pos = pos        # offset into the source of the offending text, if known
        self.length = length  # length of the offending text, needed for error display
        self.internal = internal

        super().__init__(self.plain)


class LexError(MinipasError):
    """Unrecognized character, or ':' not followed by '='."""
    kind = "LexError"


class ParseError(MinipasError):
    """Current token does not fit the grammar."""
    kind = "SyntaxError"


class EvalError(MinipasError):
    """Undefined variable, division by zero, overflow or a malformed tree."""
    kind = "RuntimeError"

    def __init__(self, msg, exprs=None, pos=None, length=1, internal=False, name=None):
        super().__init__(msg, exprs, pos, length, internal)
        self.name = name  # offending variable, if any


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report minipas errors instead."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_source(self, path, source, line_num):
        """Registers source (starting at line_num of path) in traceback. Should be called prior to Session run."""
        self.traceback[path] = (source, line_num)

    def remove_source(self, path):
        """Removes source from traceback given path. Should be called after a successful Session run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def locate(source, pos):
        """Returns (line index, column, line) of offset pos in source. Both indices are 0-based."""
        pos = min(pos, len(source))
        line_idx = source.count("\n", 0, pos)
        line_start = source.rfind("\n", 0, pos) + 1
        line_end = source.find("\n", pos)
        if line_end == -1:
            line_end = len(source)
        return line_idx, pos - line_start, source[line_start:line_end]

    @staticmethod
    def diagnose(error, source):
        """Returns the source line containing error highlighted and underlined."""
        __, col, line = ErrorHandler.locate(source, error.pos)
        end = min(col + max(error.length, 1), len(line))

        diagnosis = "  " + line[:col]
        diagnosis += colored(line[col:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * col
        diagnosis += colored("^" + "~" * (end - col - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Reports error using self.traceback. error must be a MinipasError, and self.traceback must be a dict of
        path: (source, line_num) representing the origin of the error.
        """
        error_msg = ""
        source = None

        for path, (text, line_num) in self.traceback.items():
            if text is not None:
                source = text
                if error.pos is not None:
                    line_idx, col, __ = ErrorHandler.locate(text, error.pos)
                    error_msg += colored(f"{path}:{line_num + line_idx}:{col + 1}: ", attrs=["bold"])
                else:
                    error_msg += colored(f"{path}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + f"[{error.kind}] " + error.msg
        print(error_msg)
        logger.debug("reported %s: %s", error.kind, error.plain)

        if not error.internal and source is not None and error.pos is not None:
            print(ErrorHandler.diagnose(error, source))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(MinipasError("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(EvalError("program nested too deeply", internal=True))
        elif issubclass(exc_type, MinipasError):
            self.throw(exc_val)
        else:
            self.throw(MinipasError("unknown error: '{}: {}'", (exc_type.__name__, exc_val), internal=True))
            do_exit = True

        return not do_exit
