"""Statement nodes."""

__all__ = [
    "Expression",
    "Print",
    "Var",
    "Body",
    "Block",
    "If",
    "While",
    "Function",
    "Return",
    "Class",
]

import logging

import lox
from ._base import Stmt

logger = logging.getLogger(__name__)


def _indent(text):
    return "\n".join(f"    {line}" if line else line for line in text.splitlines())


class Expression(Stmt):
    """Expression evaluated for its effect. Passes its value through."""

    def __init__(self, expression):
        self.expression = expression

    def evaluate(self, frame):
        return (yield self.expression)

    def unparse(self):
        return f"{self.expression.unparse()};"


class Print(Stmt):
    """Write the display text of a value to the interpreter output."""

    def __init__(self, expression):
        self.expression = expression

    def evaluate(self, frame):
        value = yield self.expression
        frame.interp.print(value)
        return None

    def unparse(self):
        return f"print {self.expression.unparse()};"


class Var(Stmt):
    """Variable declaration, initialized to nil without an initializer."""

    def __init__(self, name, initializer=None):
        self.name = name
        self.initializer = initializer

    def evaluate(self, frame):
        value = None
        if self.initializer is not None:
            value = yield self.initializer
        frame.env.define(self.name, value)
        return None

    def unparse(self):
        if self.initializer is None:
            return f"var {self.name};"
        return f"var {self.name} = {self.initializer.unparse()};"


class Body(Stmt):
    """Statement sequence run in the environment it is given.

    Function calls run their body in the environment holding the
    parameters. Blocks wrap a body in a new environment.
    """

    def __init__(self, statements):
        self.statements = list(statements)

    def evaluate(self, frame):
        for statement in self.statements:
            yield statement
        return None

    def unparse(self):
        return "\n".join(statement.unparse() for statement in self.statements)


class Block(Stmt):
    """Braced statements with their own scope."""

    def __init__(self, statements):
        self.body = Body(statements)

    @property
    def statements(self):
        return self.body.statements

    def evaluate(self, frame):
        yield lox.Compute(self.body, lox.Environment(frame.env))
        return None

    def unparse(self):
        if not self.statements:
            return "{}"
        return "{\n" + _indent(self.body.unparse()) + "\n}"


class If(Stmt):
    def __init__(self, condition, then_branch, else_branch=None):
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

    def evaluate(self, frame):
        condition = yield self.condition
        if lox.is_truthy(condition):
            yield self.then_branch
        elif self.else_branch is not None:
            yield self.else_branch
        return None

    def unparse(self):
        text = f"if ({self.condition.unparse()}) {self.then_branch.unparse()}"
        if self.else_branch is not None:
            text += f" else {self.else_branch.unparse()}"
        return text


class While(Stmt):
    def __init__(self, condition, body):
        self.condition = condition
        self.body = body

    def evaluate(self, frame):
        while lox.is_truthy((yield self.condition)):
            yield self.body
        return None

    def unparse(self):
        return f"while ({self.condition.unparse()}) {self.body.unparse()}"


class Function(Stmt):
    """Function declaration, also used for methods in a class body.

    Executing the declaration captures the current environment as the
    closure of the new function.
    """

    def __init__(self, name, params, body):
        self.name = name
        self.params = list(params)
        self.body = body if isinstance(body, Body) else Body(body)

    def evaluate(self, frame):
        frame.env.define(self.name, lox.LoxFunction(self, frame.env))
        return None
        yield  # Make it a generator

    def unparse(self, keyword="fun "):
        params = ", ".join(self.params)
        body = _indent(self.body.unparse())
        return f"{keyword}{self.name}({params}) {{\n{body}\n}}" if body else f"{keyword}{self.name}({params}) {{}}"


class Return(Stmt):
    """Return from the enclosing function, nil without a value."""

    def __init__(self, value=None):
        self.value = value

    def evaluate(self, frame):
        value = None
        if self.value is not None:
            value = yield self.value
        raise lox.ReturnSignal(value)

    def unparse(self):
        if self.value is None:
            return "return;"
        return f"return {self.value.unparse()};"


class Class(Stmt):
    """Class declaration with optional superclass.

    Methods close over the environment of the declaration. With a
    superclass, an extra environment holding `super` sits between the
    declaration environment and the methods.
    """

    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = list(methods)

    def evaluate(self, frame):
        superclass = None
        if self.superclass is not None:
            superclass = yield self.superclass
            if not isinstance(superclass, lox.LoxClass):
                raise lox.SuperclassMustBeClass(
                    f"Superclass must be a class, got {lox.kind_of(superclass)}.",
                    self.superclass.position,
                )

        env = frame.env
        if superclass is not None:
            env = lox.Environment(env)
            env.define("super", superclass)

        methods = {}
        for method in self.methods:
            methods[method.name] = lox.LoxFunction(method, env, method.name == "init")

        klass = lox.LoxClass(self.name, superclass, methods)
        logger.debug("Declared class %s (superclass %s, methods %s)",
                     self.name, superclass.name if superclass else None, list(methods))
        frame.env.define(self.name, klass)
        return None

    def unparse(self):
        header = f"class {self.name}"
        if self.superclass is not None:
            header += f" < {self.superclass.unparse()}"
        if not self.methods:
            return header + " {}"
        methods = "\n".join(_indent(method.unparse(keyword="")) for method in self.methods)
        return f"{header} {{\n{methods}\n}}"
