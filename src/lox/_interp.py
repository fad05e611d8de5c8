"""Main interpreter.

The interpreter ties the pieces together: source text is parsed into
statements, the resolver annotates every local variable reference with its
scope distance, and the engine executes the statements against the global
environment.

Resolution results accumulate in `Interp.locals`, keyed by AST node, so
code resolved in earlier runs (earlier REPL lines, function bodies declared
earlier) keeps its annotations.
"""

__all__ = ["Interp"]

import logging
import sys

import lox

logger = logging.getLogger(__name__)


class Interp:
    """Interpreter and state for Lox.

    Args:
        output: (TextIO | None) Stream for print statements, defaults to
            the sys.stdout current at print time
        max_depth: (int) Deepest evaluation nesting before StackOverflow

    Attributes:
        globals: (Environment) Global scope, alive for the interpreter lifetime
        locals: (dict[Node, int]) Scope distances of resolved references
        engine: (Engine) Evaluation engine
    """

    def __init__(self, output=None, max_depth=lox.DEFAULT_MAX_DEPTH):
        self.output = output
        self.globals = lox.Environment()
        self.locals = {}
        self.engine = lox.Engine(self, max_depth)
        lox.define_natives(self.globals)

    def __repr__(self):
        return f"Interp<globals={len(self.globals.values)}>"

    def run(self, source, filename=None):
        """Parse, resolve and execute a program.

        Args:
            source: (str) Program source text
            filename: (str | None) Source filename for error positions

        Returns:
            Value of the last top level statement

        Raises:
            ParseError: Source has invalid syntax
            ResolveError: Program has static errors, nothing was executed
            LoxRuntimeError: Execution failed
        """
        statements = lox.parse(source, filename)
        self.resolve(statements)
        return self.interpret(statements)

    def resolve(self, statements):
        """Resolve statements and remember their scope distances.

        Returns:
            (dict[Node, int]) Scope distances found in these statements
        """
        resolved = lox.resolve(statements, known_globals=self.globals.values)
        self.locals.update(resolved)
        return resolved

    def interpret(self, statements):
        """Execute resolved top level statements in order.

        The first runtime error stops execution. Effects of statements
        that already ran are kept.

        Returns:
            Value of the last statement
        """
        result = None
        for statement in statements:
            result = self.engine.run(statement, self.globals)
        return result

    def evaluate(self, source):
        """Parse, resolve and evaluate a single expression."""
        expr = lox.parse_expr(source)
        self.resolve([lox.ast.Expression(expr)])
        return self.engine.run(expr, self.globals)

    def print(self, value):
        """Write the display text of a value as one line of output."""
        output = self.output if self.output is not None else sys.stdout
        output.write(lox.stringify(value) + "\n")
