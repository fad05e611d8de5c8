"""Node base classes."""

__all__ = ["Node", "Expr", "Stmt", "SourcePosition"]

from collections.abc import Generator
from dataclasses import dataclass


@dataclass
class SourcePosition:
    """Source code position information for AST nodes.

    Tracks where an AST node originated in the source code,
    useful for error messages and debugging.

    Attributes:
        filename: Source file path (e.g., "examples/counter.lox")
        start_line: Starting line number (1-indexed)
        start_column: Starting column number (1-indexed)
        end_line: Ending line number (1-indexed)
        end_column: Ending column number (1-indexed)
    """
    filename: str | None = None
    start_line: int | None = None
    start_column: int | None = None
    end_line: int | None = None
    end_column: int | None = None

    def __str__(self) -> str:
        """Format position for error messages (just line number)."""
        if self.start_line:
            return f"on line {self.start_line}"
        return ""


class Node:
    """Base class for all AST nodes.

    Nodes are driven by the `evaluate` generator that returns a computed
    value and may yield child nodes to request further evaluation. The
    yield is a two way channel that receives the resulting value from
    the evaluated child.

    Nodes compare by identity. The resolver uses them as keys for the
    scope distances of variable references.

    Attributes:
        position: Optional source position information.
                  Set by parser when creating nodes from source code.
    """

    position: SourcePosition | None = None

    def evaluate(self, frame) -> Generator:
        """Evaluate this node to produce a value.

        Args:
            frame: The engine frame running this node

        Yields:
            Child nodes, or Compute requests, that need evaluation

        Receives:
            Values (results from evaluating children)

        Returns:
            Final value result
        """
        raise NotImplementedError(f"{self.__class__.__name__}.evaluate() not implemented")

    def unparse(self) -> str:
        """Convert this node back to Lox source code."""
        raise NotImplementedError(f"{self.__class__.__name__}.unparse() not implemented")

    def children(self):
        """Iterate the direct child nodes."""
        for value in vars(self).values():
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for child in value:
                    if isinstance(child, Node):
                        yield child

    def find_all(self, node_type):
        """Find all descendants of given type, including self."""
        results = [self] if isinstance(self, node_type) else []
        for child in self.children():
            results.extend(child.find_all(node_type))
        return results

    def __repr__(self):
        attrs = []
        for key, value in vars(self).items():
            if key == "position" or isinstance(value, Node):
                continue
            if isinstance(value, list) and value and isinstance(value[0], Node):
                attrs.append(f"*{len(value)}")
                continue
            attrs.append(f"{key}={value!r}")
        return f"{self.__class__.__name__}({' '.join(attrs)})"


class Expr(Node):
    """Base class for nodes that evaluate to a runtime value."""


class Stmt(Node):
    """Base class for nodes executed for their effect.

    Statements evaluate to nil, except expression statements which pass
    through the value of their expression.
    """
