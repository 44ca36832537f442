"""Abstract syntax tree for minipas. A node is a token reused as its semantic tag plus an ordered list of child nodes:
the shape of the tree alone encodes statement and expression structure.

```
Other                  ; program root (one child), compound statement body (n children) or empty statement
ASSIGN                 ; [variable, expr]
operation: + - * /     ; [left, right]
UNARY: + -             ; [operand]
variable / INTEGER     ; leaves
```
"""

from collections import deque

from minipas.core.lexical import Token, TokenKind

LEAVES = (TokenKind.ID, TokenKind.INTEGER)


class Node:

    def __init__(self, token, nodes=None):
        self.token = token
        self.nodes = nodes if nodes is not None else []

    @classmethod
    def group(cls, nodes=None):
        """Returns a synthetic grouping node over nodes."""
        return cls(Token(TokenKind.OTHER), nodes)

    @property
    def kind(self):
        return self.token.kind

    @property
    def is_leaf(self):
        return self.token.kind in LEAVES

    def render(self):
        """Breadth-first, level-by-level dump of the tree. Each node is shown as its tag and child count, and every
        level ends with a newline. Variables and integers always show a count of 0 and are not descended into.

        Format:
          |<tag>(<count>)|    |<tag>(<count>)|  ...
        """
        result = ""
        queue = deque([self])

        while queue:
            for __ in range(len(queue)):
                node = queue.popleft()
                if node.is_leaf:
                    result += f"  |{node.token}(0)|  "
                else:
                    result += f"  |{node.token}({len(node.nodes)})|  "
                    queue.extend(node.nodes)
            result += "\n"

        return result

    def __eq__(self, other):
        return (isinstance(other, Node) and self.token.kind is other.token.kind
                and self.token.value == other.token.value and self.nodes == other.nodes)

    def __repr__(self):
        if self.nodes:
            return f"Node('{self.token}', nodes={self.nodes})"
        return f"Node('{self.token}')"

    def __str__(self):
        return self.render()
