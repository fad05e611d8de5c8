"""Lexical environments for variable bindings."""

__all__ = ["Environment"]

import lox


class Environment:
    """One lexical scope of name bindings.

    Environments form a chain through their `enclosing` reference. They are
    shared, never copied: a closure keeps a reference to the environment it
    was declared in, so every holder sees mutations made through any other.

    Lookups of resolved names use the scope distance computed by the
    resolver and walk exactly that many links. Unresolved names are globals
    and are looked up in the outermost environment.

    Args:
        enclosing: (Environment | None) Parent scope, None for globals

    Attributes:
        values: (dict[str, object]) Bindings defined in this scope
        enclosing: (Environment | None) Parent scope
    """

    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """Bind name in this scope, replacing any binding it already has."""
        self.values[name] = value

    def ancestor(self, distance):
        """Get the environment `distance` links up the chain."""
        env = self
        for _ in range(distance):
            env = env.enclosing
            if env is None:
                raise lox.EvalError(f"Scope distance {distance} exceeds environment chain")
        return env

    def get_at(self, distance, name):
        """Get a resolved name from the scope `distance` links up."""
        values = self.ancestor(distance).values
        try:
            return values[name]
        except KeyError:
            raise lox.EvalError(f"Resolved name '{name}' missing at distance {distance}") from None

    def assign_at(self, distance, name, value):
        """Reassign a resolved name in the scope `distance` links up."""
        values = self.ancestor(distance).values
        if name not in values:
            raise lox.UndefinedVariable(f"Undefined variable '{name}'.")
        values[name] = value

    def globals(self):
        """The outermost environment of this chain."""
        env = self
        while env.enclosing is not None:
            env = env.enclosing
        return env

    def get_global(self, name):
        values = self.globals().values
        try:
            return values[name]
        except KeyError:
            raise lox.UndefinedVariable(f"Undefined variable '{name}'.") from None

    def assign_global(self, name, value):
        values = self.globals().values
        if name not in values:
            raise lox.UndefinedVariable(f"Undefined variable '{name}'.")
        values[name] = value

    def __repr__(self):
        depth = 0
        env = self.enclosing
        while env is not None:
            depth += 1
            env = env.enclosing
        return f"Environment<depth={depth} names={list(self.values)}>"
