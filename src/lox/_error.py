"""Error classes and helpers

Every problem reported to a caller is a `LoxError` carrying a message and
the source position it came from. The `kind` of an error is its class name,
which callers can use without importing the individual classes.

Static errors are collected by the resolver and raised together as one
`ResolveError`. Runtime errors abort execution at the first failure.
"""

__all__ = [
    "LoxError",
    "EvalError",
    "ParseError",
    "StaticError",
    "ResolveError",
    "ReturnOutsideFunction",
    "ReturnFromInitializer",
    "ThisOutsideClass",
    "SuperWithoutSuperclass",
    "CyclicInheritance",
    "SelfReferenceInitializer",
    "DuplicateDeclaration",
    "NestingTooDeep",
    "LoxRuntimeError",
    "UndefinedVariable",
    "UndefinedProperty",
    "NotCallable",
    "NotAnInstanceError",
    "WrongArity",
    "TypeMismatch",
    "SuperclassMustBeClass",
    "StackOverflow",
]


class LoxError(Exception):
    """Error reported by the Lox language.

    Args:
        message: (str) Error description
        position: (SourcePosition | None) Where the error occurred

    Attributes:
        message: (str) Error description
        position: (SourcePosition | None) Where the error occurred
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)

    @property
    def kind(self):
        """(str) Name of the error kind."""
        return type(self).__name__

    @property
    def line(self):
        """(int | None) Source line of the error, when known."""
        if self.position is None:
            return None
        return self.position.start_line

    def __str__(self):
        if self.line:
            return f"[line {self.line}] {self.message}"
        return self.message


class EvalError(Exception):
    """Error in internal processing of the interpreter."""


class ParseError(LoxError):
    """Source text could not be parsed."""


class StaticError(LoxError):
    """Structural problem found before execution."""


class ReturnOutsideFunction(StaticError):
    """Return statement in top level code."""


class ReturnFromInitializer(StaticError):
    """Return with a value inside an init method."""


class ThisOutsideClass(StaticError):
    """Use of this outside of any method."""


class SuperWithoutSuperclass(StaticError):
    """Use of super outside a class, or in a class with no superclass."""


class CyclicInheritance(StaticError):
    """Class inherits from itself, directly or through other classes."""


class SelfReferenceInitializer(StaticError):
    """Variable read inside its own initializer."""


class DuplicateDeclaration(StaticError):
    """Name declared twice in the same local scope."""


class NestingTooDeep(StaticError):
    """Statement nested deeper than the resolver can follow."""


class ResolveError(LoxError):
    """All static errors found in one pass over a program.

    Args:
        errors: (list[StaticError]) Errors in source order

    Attributes:
        errors: (list[StaticError]) Errors in source order
    """

    def __init__(self, errors):
        self.errors = list(errors)
        first = self.errors[0] if self.errors else None
        message = "\n".join(str(error) for error in self.errors)
        super().__init__(message, first.position if first else None)

    def __str__(self):
        return self.message


class LoxRuntimeError(LoxError):
    """Error raised while executing a program."""


class UndefinedVariable(LoxRuntimeError):
    """Reference or assignment to a name that was never defined."""


class UndefinedProperty(LoxRuntimeError):
    """Instance has no field or method with the requested name."""


class NotCallable(LoxRuntimeError):
    """Call of a value that is not a function or class."""


class NotAnInstanceError(LoxRuntimeError):
    """Property access on a value that is not an instance."""


class WrongArity(LoxRuntimeError):
    """Call with the wrong number of arguments."""


class TypeMismatch(LoxRuntimeError):
    """Operator applied to operands of the wrong type."""


class SuperclassMustBeClass(LoxRuntimeError):
    """Superclass expression did not evaluate to a class."""


class StackOverflow(LoxRuntimeError):
    """Evaluation nested deeper than the engine allows."""
