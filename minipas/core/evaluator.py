"""Tree-walking evaluation of minipas programs against a single global variable store.

Values are signed 64-bit integers: any result outside that range is an error rather than a silently wider Python int,
and division truncates toward zero.
"""

import logging

from minipas.core.lexical import INT_MAX, INT_MIN, TokenKind
from minipas.lang.error import EvalError

logger = logging.getLogger(__name__)


def divide(left, right):
    """Integer division truncated toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


OPERATIONS = {
    (TokenKind.ADD_OP, "+"): lambda left, right: left + right,
    (TokenKind.ADD_OP, "-"): lambda left, right: left - right,
    (TokenKind.MUL_OP, "*"): lambda left, right: left * right,
    (TokenKind.MUL_OP, "/"): divide,
}


class Evaluator:
    """Executes statements and computes expression values. store maps names to values in first-assignment order."""

    def __init__(self):
        self.store = {}

    def visit(self, node):
        """Executes the statement rooted at node."""
        if node.kind is TokenKind.OTHER:
            for statement in node.nodes:
                self.visit(statement)

        elif node.kind is TokenKind.ASSIGN:
            target, expr = self._operands(node, 2)
            name = self.visit_var(target)
            value = self.visit_value(expr)
            self.store[name] = value
            logger.debug("%s := %d", name, value)

        else:
            raise EvalError("unexpected {} in statement position", node.token, pos=node.token.pos, internal=True)

    def visit_value(self, node):
        """Returns the value of the expression rooted at node."""
        token = node.token

        if token.kind is TokenKind.ID:
            if token.value not in self.store:
                raise EvalError("undefined variable '{}'", token.value, pos=token.pos, length=len(token.value),
                                name=token.value)
            return self.store[token.value]

        elif token.kind is TokenKind.INTEGER:
            return token.value

        elif token.kind is TokenKind.UNARY and token.value in ("+", "-"):
            operand, = self._operands(node, 1)
            operand = self.visit_value(operand)
            return self._checked(operand if token.value == "+" else -operand, node)

        elif (token.kind, token.value) in OPERATIONS:
            left, right = self._operands(node, 2)
            left, right = self.visit_value(left), self.visit_value(right)
            if token.value == "/" and right == 0:
                raise EvalError("division by zero", pos=token.pos)
            return self._checked(OPERATIONS[token.kind, token.value](left, right), node)

        raise EvalError("unexpected {} in expression", token, pos=token.pos, internal=True)

    def visit_var(self, node):
        """Returns the name of the variable node is assigning to."""
        if node.kind is not TokenKind.ID:
            raise EvalError("cannot assign to {}", node.token, pos=node.token.pos, internal=True)
        return node.token.value

    @staticmethod
    def _operands(node, count):
        """Returns the children of node, which must number exactly count."""
        if len(node.nodes) != count:
            raise EvalError("{} expects {} operand(s), got {}", (node.token, count, len(node.nodes)),
                            pos=node.token.pos, internal=True)
        return node.nodes

    @staticmethod
    def _checked(value, node):
        if not INT_MIN <= value <= INT_MAX:
            raise EvalError("integer overflow in {}", node.token, pos=node.token.pos)
        return value


def evaluate(tree):
    """Runs tree against a fresh store and returns the final store. Nothing is returned if evaluation fails."""
    evaluator = Evaluator()
    try:
        evaluator.visit(tree)
    except RecursionError:
        raise EvalError("program nested too deeply to evaluate", pos=tree.token.pos, internal=True)
    logger.debug("evaluation finished with %d variable(s)", len(evaluator.store))
    return evaluator.store
