"""Expression nodes."""

__all__ = [
    "Literal",
    "Variable",
    "Assign",
    "Binary",
    "Logical",
    "Unary",
    "Grouping",
    "Call",
    "Get",
    "Set",
    "This",
    "Super",
]

import math

import lox
from ._base import Expr


class Literal(Expr):
    """Constant nil, boolean, number or string."""

    def __init__(self, value):
        if value is not None and type(value) not in (bool, float, str):
            raise TypeError(f"Literal value must be nil, bool, float or str, got {type(value)}")
        self.value = value

    def evaluate(self, frame):
        return self.value
        yield  # Make it a generator

    def unparse(self):
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return lox.stringify(self.value)


class Variable(Expr):
    """Reference to a variable by name."""

    def __init__(self, name):
        self.name = name

    def evaluate(self, frame):
        distance = frame.distance(self)
        if distance is None:
            return frame.env.get_global(self.name)
        return frame.env.get_at(distance, self.name)
        yield  # Make it a generator

    def unparse(self):
        return self.name


class Assign(Expr):
    """Assignment to an existing variable, evaluates to the assigned value."""

    def __init__(self, name, value):
        self.name = name
        self.value = value

    def evaluate(self, frame):
        value = yield self.value
        distance = frame.distance(self)
        if distance is None:
            frame.env.assign_global(self.name, value)
        else:
            frame.env.assign_at(distance, self.name, value)
        return value

    def unparse(self):
        return f"{self.name} = {self.value.unparse()}"


def _numbers(op, left, right):
    if not (lox.is_number(left) and lox.is_number(right)):
        raise lox.TypeMismatch(
            f"Operands must be numbers, got {lox.kind_of(left)} {op} {lox.kind_of(right)}."
        )


def _divide(left, right):
    """Floating point division, including the IEEE results for zero."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _binary(op, left, right):
    match op:
        case "==":
            return lox.is_equal(left, right)
        case "!=":
            return not lox.is_equal(left, right)
        case "+":
            if lox.is_number(left) and lox.is_number(right):
                return left + right
            if lox.is_string(left) and lox.is_string(right):
                return left + right
            raise lox.TypeMismatch(
                f"Operands must be two numbers or two strings, got {lox.kind_of(left)} + {lox.kind_of(right)}."
            )

    _numbers(op, left, right)
    match op:
        case "-":
            return left - right
        case "*":
            return left * right
        case "/":
            return _divide(left, right)
        case ">":
            return left > right
        case ">=":
            return left >= right
        case "<":
            return left < right
        case "<=":
            return left <= right
    raise ValueError(f"Unknown binary operator: {op}")


class Binary(Expr):
    """Arithmetic, comparison or equality operation.

    Both operands are always evaluated, left first.
    """

    OPS = ("+", "-", "*", "/", "==", "!=", "<", "<=", ">", ">=")

    def __init__(self, op, left, right):
        if op not in self.OPS:
            raise ValueError(f"Binary requires one of {self.OPS}, got {op!r}")
        self.op = op
        self.left = left
        self.right = right

    def evaluate(self, frame):
        left = yield self.left
        right = yield self.right
        return _binary(self.op, left, right)

    def unparse(self):
        return f"{self.left.unparse()} {self.op} {self.right.unparse()}"


class Logical(Expr):
    """Short-circuit `and` / `or`, evaluates to one of its operands."""

    def __init__(self, op, left, right):
        if op not in ("and", "or"):
            raise ValueError(f"Logical requires and/or, got {op!r}")
        self.op = op
        self.left = left
        self.right = right

    def evaluate(self, frame):
        left = yield self.left
        if self.op == "or":
            if lox.is_truthy(left):
                return left
        elif not lox.is_truthy(left):
            return left
        return (yield self.right)

    def unparse(self):
        return f"{self.left.unparse()} {self.op} {self.right.unparse()}"


class Unary(Expr):
    """Negation `-x` or logical not `!x`."""

    def __init__(self, op, operand):
        if op not in ("-", "!"):
            raise ValueError(f"Unary requires - or !, got {op!r}")
        self.op = op
        self.operand = operand

    def evaluate(self, frame):
        value = yield self.operand
        if self.op == "!":
            return not lox.is_truthy(value)
        if not lox.is_number(value):
            raise lox.TypeMismatch(f"Operand must be a number, got {lox.kind_of(value)}.")
        return -value

    def unparse(self):
        return f"{self.op}{self.operand.unparse()}"


class Grouping(Expr):
    """Parenthesized expression."""

    def __init__(self, expression):
        self.expression = expression

    def evaluate(self, frame):
        return (yield self.expression)

    def unparse(self):
        return f"({self.expression.unparse()})"


class Call(Expr):
    """Call of a function, method or class.

    The callee and then the arguments are evaluated left to right before
    the callee is checked.
    """

    def __init__(self, callee, arguments):
        self.callee = callee
        self.arguments = list(arguments)

    def evaluate(self, frame):
        callee = yield self.callee
        arguments = []
        for argument in self.arguments:
            arguments.append((yield argument))

        if not isinstance(callee, lox.LoxCallable):
            raise lox.NotCallable(f"Can only call functions and classes, got {lox.kind_of(callee)}.")
        arity = callee.arity()
        if len(arguments) != arity:
            raise lox.WrongArity(f"Expected {arity} arguments but got {len(arguments)}.")

        return (yield from callee.call(frame.interp, arguments))

    def unparse(self):
        args = ", ".join(argument.unparse() for argument in self.arguments)
        return f"{self.callee.unparse()}({args})"


class Get(Expr):
    """Property read `object.name`."""

    def __init__(self, object, name):
        self.object = object
        self.name = name

    def evaluate(self, frame):
        instance = yield self.object
        if not isinstance(instance, lox.LoxInstance):
            raise lox.NotAnInstanceError(
                f"Only instances have properties, got {lox.kind_of(instance)}."
            )
        return instance.get(self.name)

    def unparse(self):
        return f"{self.object.unparse()}.{self.name}"


class Set(Expr):
    """Property write `object.name = value`, evaluates to the value."""

    def __init__(self, object, name, value):
        self.object = object
        self.name = name
        self.value = value

    def evaluate(self, frame):
        instance = yield self.object
        if not isinstance(instance, lox.LoxInstance):
            raise lox.NotAnInstanceError(f"Only instances have fields, got {lox.kind_of(instance)}.")
        value = yield self.value
        instance.set(self.name, value)
        return value

    def unparse(self):
        return f"{self.object.unparse()}.{self.name} = {self.value.unparse()}"


class This(Expr):
    """The receiver of the running method."""

    def evaluate(self, frame):
        return frame.env.get_at(frame.distance(self), "this")
        yield  # Make it a generator

    def unparse(self):
        return "this"


class Super(Expr):
    """Superclass method `super.name`, bound to the current receiver.

    The lookup starts at the superclass of the class that declares the
    running method, which the method closure holds as `super`. The
    receiver `this` is always one environment inside of it.
    """

    def __init__(self, method):
        self.method = method

    def evaluate(self, frame):
        distance = frame.distance(self)
        superclass = frame.env.get_at(distance, "super")
        instance = frame.env.get_at(distance - 1, "this")
        method = superclass.find_method(self.method)
        if method is None:
            raise lox.UndefinedProperty(f"Undefined property '{self.method}'.")
        return method.bind(instance)
        yield  # Make it a generator

    def unparse(self):
        return f"super.{self.method}"
