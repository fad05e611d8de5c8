"""Engine for evaluating AST nodes on an explicit frame stack.

The engine doesn't know about language semantics. AST nodes orchestrate
everything from their `evaluate` generators, the engine only advances them.
Because frames are a linked list instead of the Python call stack, deeply
recursive Lox programs do not hit the Python recursion limit.
"""

__all__ = ["Engine", "Compute", "DEFAULT_MAX_DEPTH"]

import logging

import lox

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 20000


class Engine:
    """Generic processor for nodes that contain `evaluate` generators.

    The generators return values and yield child nodes (or `Compute`
    requests) for further evaluation. The result of each child is sent back
    into the generator that requested it.

    Exceptions raised by a child are thrown into its parent generator at
    the point where it yielded. A node can catch them with a regular
    `try/except` around its `yield`, which is how a function call catches
    the return signal of its body. Uncaught exceptions leave `run`.

    Args:
        interp: (Interp) Interpreter that owns this engine
        max_depth: (int) Deepest frame nesting before StackOverflow
    """

    def __init__(self, interp, max_depth=DEFAULT_MAX_DEPTH):
        self.interp = interp
        self.max_depth = max_depth

    def run(self, node, env):
        """Run a node and return its result.

        Args:
            node (Node): AST node to evaluate
            env (Environment): Environment to evaluate the node in

        Returns:
            Final value from node evaluation
        """
        result = None
        error = None
        newest = _Frame(node, None, env, self)
        current = newest

        while current:
            try:
                if error is not None:
                    pending, error = error, None
                    request = current.gen.throw(pending)
                elif current is newest:
                    request = next(current.gen)
                else:
                    request = current.gen.send(result)

                if isinstance(request, Compute):
                    child_env = request.env if request.env is not None else current.env
                    child = request.node
                else:
                    child_env = current.env
                    child = request

                if current.depth >= self.max_depth:
                    error = lox.StackOverflow("Stack overflow.", child.position)
                    continue

                newest = _Frame(child, current, child_env, self)
                current = newest

            except StopIteration as e:
                result = e.value
                current = current.previous

            except Exception as e:
                if isinstance(e, lox.LoxError) and e.position is None:
                    e.position = current.node.position
                current = current.previous
                if current is None:
                    logger.debug("Unwound to top level with %s: %s", type(e).__name__, e)
                    raise
                error = e

        return result


class Compute:
    """Request to evaluate a child AST node in a specific environment.

    This is yielded from `Node.evaluate` when the child needs an environment
    other than the one of the yielding node. Yielding a bare node evaluates
    it in the current environment.

    Args:
        node (Node): AST node to evaluate
        env (Environment | None): Environment for the child
    """

    __slots__ = ("node", "env")

    def __init__(self, node, env=None):
        self.node = node
        self.env = env

    def __repr__(self):
        return f"Compute(node={self.node!r}, env={self.env!r})"


class _Frame:
    """Evaluation frame - represents one step in the evaluation stack.

    Frames form a linked list through `previous`. The generator is created
    as soon as the frame is.

    Args:
        node (Node): AST node being evaluated
        previous (_Frame | None): Parent frame (None for root)
        env (Environment): Environment of this evaluation
        engine (Engine): Owning engine
    """

    __slots__ = ("node", "gen", "previous", "env", "engine", "depth")

    def __init__(self, node, previous, env, engine):
        self.node = node
        self.previous = previous
        self.env = env
        self.engine = engine
        self.depth = previous.depth + 1 if previous else 0
        self.gen = node.evaluate(self)

    @property
    def interp(self):
        return self.engine.interp

    def distance(self, node):
        """Resolved scope distance for a node, None for globals."""
        return self.engine.interp.locals.get(node)

    def __repr__(self):
        return f"_Frame(depth={self.depth}, node={self.node!r})"
