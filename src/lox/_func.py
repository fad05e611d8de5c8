"""Function definitions and calls"""

__all__ = ["LoxCallable", "LoxFunction", "NativeFunction", "ReturnSignal", "define_natives"]

import time

import lox


class ReturnSignal(Exception):
    """Unwinds a function body back to its call boundary.

    Raised by the return statement and caught only by `LoxFunction.call`.
    This is control flow, never reported as an error.

    Args:
        value: Returned value (None for nil)
    """

    def __init__(self, value):
        self.value = value
        super().__init__("return")


class LoxCallable:
    """Base class for every value that can be called.

    Subclasses implement `arity` and `call`. The `call` method is a
    generator in the same protocol as `Node.evaluate`: it yields child
    computations to the engine and returns the call result.
    """

    def arity(self):
        raise NotImplementedError(f"{self.__class__.__name__}.arity() not implemented")

    def call(self, interp, arguments):
        """Invoke with already evaluated arguments.

        Args:
            interp: (Interp) The running interpreter
            arguments: (list) Argument values, count already checked

        Yields:
            Compute requests for the engine

        Returns:
            Call result value
        """
        raise NotImplementedError(f"{self.__class__.__name__}.call() not implemented")


class LoxFunction(LoxCallable):
    """User function or method, closed over its defining environment.

    The closure is captured once, when the declaration is executed. Every
    call creates a new environment enclosed by the closure, so separate
    calls get separate locals while still sharing everything the closure
    can reach.

    Args:
        declaration: (ast.Function) Declaration node
        closure: (Environment) Environment active at declaration
        is_initializer: (bool) Function is a class `init` method

    Attributes:
        declaration: (ast.Function) Declaration node
        closure: (Environment) Environment active at declaration
        is_initializer: (bool) Calls always return `this`
    """

    __slots__ = ("declaration", "closure", "is_initializer")

    def __init__(self, declaration, closure, is_initializer=False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self):
        return self.declaration.name

    def arity(self):
        return len(self.declaration.params)

    def bind(self, instance):
        """Create a bound method with `this` set to instance.

        The new function closes over a fresh environment holding only
        `this`, enclosed by the original closure.
        """
        env = lox.Environment(self.closure)
        env.define("this", instance)
        return LoxFunction(self.declaration, env, self.is_initializer)

    def call(self, interp, arguments):
        env = lox.Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            env.define(param, argument)

        try:
            yield lox.Compute(self.declaration.body, env)
        except ReturnSignal as signal:
            if self.is_initializer:
                return self.closure.get_at(0, "this")
            return signal.value

        if self.is_initializer:
            return self.closure.get_at(0, "this")
        return None

    def __str__(self):
        return f"<fn {self.name}>"

    def __repr__(self):
        return f"LoxFunction<{self.name}>"


class NativeFunction(LoxCallable):
    """Function implemented in Python.

    Args:
        name: (str) Global name of the function
        arity: (int) Number of arguments
        function: (callable) Python implementation
    """

    __slots__ = ("name", "_arity", "function")

    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self):
        return self._arity

    def call(self, interp, arguments):
        return self.function(*arguments)
        yield  # Make it a generator

    def __str__(self):
        return "<native fn>"

    def __repr__(self):
        return f"NativeFunction<{self.name}>"


def _clock():
    return float(time.time())


def define_natives(env):
    """Define the native functions in a global environment."""
    env.define("clock", NativeFunction("clock", 0, _clock))
