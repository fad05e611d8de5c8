"""Static resolution of variable references.

The resolver makes one pass over a program before it runs. It mirrors the
block and function nesting with a stack of compile-time scopes and records,
for every local variable reference, how many environments separate the
reference from its declaration. References that match no local scope are
globals and are not recorded.

In the same pass it checks the structural rules of the language. All
problems are collected and raised together as one `ResolveError`, so a
program with any static error never starts executing.
"""

__all__ = ["Resolver", "resolve"]

import enum
import logging

import lox

logger = logging.getLogger(__name__)


class FunctionKind(enum.Enum):
    NONE = enum.auto()
    FUNCTION = enum.auto()
    METHOD = enum.auto()
    INITIALIZER = enum.auto()


class ClassKind(enum.Enum):
    NONE = enum.auto()
    CLASS = enum.auto()
    SUBCLASS = enum.auto()


def resolve(statements, known_globals=()):
    """Resolve a program.

    Args:
        statements: (list[Stmt]) Top level statements
        known_globals: (Iterable[str]) Globals already defined at runtime

    Returns:
        (dict[Node, int]) Scope distance of each local reference

    Raises:
        ResolveError: Program has one or more static errors
    """
    return Resolver(known_globals).resolve(statements)


class Resolver:
    """Single use resolver for one program.

    Each scope maps a name to False while its initializer is being
    resolved, then to True once the name is usable.

    Args:
        known_globals: (Iterable[str]) Globals already defined at runtime
    """

    def __init__(self, known_globals=()):
        self.scopes = []
        self.globals = {name: True for name in known_globals}
        self.parents = {}
        self.locals = {}
        self.errors = []
        self.function = FunctionKind.NONE
        self.klass = ClassKind.NONE

    def resolve(self, statements):
        for statement in statements:
            try:
                self.statement(statement)
            except RecursionError:
                # Unwound partway, reset to the top level
                self.scopes.clear()
                self.function = FunctionKind.NONE
                self.klass = ClassKind.NONE
                self.error(lox.NestingTooDeep, "Expression nested too deeply.", statement)

        if self.errors:
            logger.debug("Resolution found %d errors", len(self.errors))
            raise lox.ResolveError(self.errors)
        logger.debug("Resolved %d local references", len(self.locals))
        return self.locals

    def error(self, cls, message, node):
        self.errors.append(cls(message, node.position))

    # === Scopes ===

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name, node):
        if not self.scopes:
            # A global with an earlier binding stays readable in its initializer
            self.globals.setdefault(name, False)
            return
        scope = self.scopes[-1]
        if name in scope:
            self.error(lox.DuplicateDeclaration,
                       f"Already a variable named '{name}' in this scope.", node)
        scope[name] = False

    def define(self, name):
        if not self.scopes:
            self.globals[name] = True
            return
        self.scopes[-1][name] = True

    def resolve_local(self, node, name):
        for distance, scope in enumerate(reversed(self.scopes)):
            if name in scope:
                self.locals[node] = distance
                return

    # === Statements ===

    def statement(self, stmt):
        match stmt:
            case lox.ast.Expression() | lox.ast.Print():
                self.expression(stmt.expression)
            case lox.ast.Var():
                self.declare(stmt.name, stmt)
                if stmt.initializer is not None:
                    self.expression(stmt.initializer)
                self.define(stmt.name)
            case lox.ast.Block():
                self.begin_scope()
                self.body(stmt.body)
                self.end_scope()
            case lox.ast.Body():
                self.body(stmt)
            case lox.ast.If():
                self.expression(stmt.condition)
                self.statement(stmt.then_branch)
                if stmt.else_branch is not None:
                    self.statement(stmt.else_branch)
            case lox.ast.While():
                self.expression(stmt.condition)
                self.statement(stmt.body)
            case lox.ast.Function():
                self.declare(stmt.name, stmt)
                self.define(stmt.name)
                self.function_body(stmt, FunctionKind.FUNCTION)
            case lox.ast.Return():
                if self.function is FunctionKind.NONE:
                    self.error(lox.ReturnOutsideFunction, "Can't return from top-level code.", stmt)
                if stmt.value is not None:
                    if self.function is FunctionKind.INITIALIZER:
                        self.error(lox.ReturnFromInitializer,
                                   "Can't return a value from an initializer.", stmt)
                    self.expression(stmt.value)
            case lox.ast.Class():
                self.class_declaration(stmt)
            case _:
                raise lox.EvalError(f"Cannot resolve statement {stmt!r}")

    def body(self, body):
        for statement in body.statements:
            self.statement(statement)

    def function_body(self, function, kind):
        enclosing = self.function
        self.function = kind

        self.begin_scope()
        for param in function.params:
            self.declare(param, function)
            self.define(param)
        self.body(function.body)
        self.end_scope()

        self.function = enclosing

    def class_declaration(self, stmt):
        enclosing = self.klass
        self.klass = ClassKind.CLASS

        self.declare(stmt.name, stmt)
        self.define(stmt.name)

        if stmt.superclass is not None:
            self.check_inheritance(stmt)
            self.klass = ClassKind.SUBCLASS
            self.expression(stmt.superclass)
            self.begin_scope()
            self.scopes[-1]["super"] = True
        self.parents[stmt.name] = stmt.superclass.name if stmt.superclass else None

        self.begin_scope()
        self.scopes[-1]["this"] = True
        for method in stmt.methods:
            kind = FunctionKind.INITIALIZER if method.name == "init" else FunctionKind.METHOD
            self.function_body(method, kind)
        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()

        self.klass = enclosing

    def check_inheritance(self, stmt):
        """Reject a superclass chain that leads back to the class itself.

        The chain follows the superclass names of classes declared earlier
        in the program.
        """
        seen = set()
        parent = stmt.superclass.name
        while parent is not None and parent not in seen:
            if parent == stmt.name:
                self.error(lox.CyclicInheritance, "A class can't inherit from itself.", stmt.superclass)
                return
            seen.add(parent)
            parent = self.parents.get(parent)

    # === Expressions ===

    def expression(self, expr):
        match expr:
            case lox.ast.Variable():
                if self.scopes:
                    initializing = self.scopes[-1].get(expr.name) is False
                else:
                    initializing = self.globals.get(expr.name) is False
                if initializing:
                    self.error(lox.SelfReferenceInitializer,
                               f"Can't read variable '{expr.name}' in its own initializer.", expr)
                self.resolve_local(expr, expr.name)
            case lox.ast.Assign():
                self.expression(expr.value)
                self.resolve_local(expr, expr.name)
            case lox.ast.Binary() | lox.ast.Logical():
                self.expression(expr.left)
                self.expression(expr.right)
            case lox.ast.Unary():
                self.expression(expr.operand)
            case lox.ast.Grouping():
                self.expression(expr.expression)
            case lox.ast.Call():
                self.expression(expr.callee)
                for argument in expr.arguments:
                    self.expression(argument)
            case lox.ast.Get():
                self.expression(expr.object)
            case lox.ast.Set():
                self.expression(expr.value)
                self.expression(expr.object)
            case lox.ast.This():
                if self.klass is ClassKind.NONE:
                    self.error(lox.ThisOutsideClass, "Can't use 'this' outside of a class.", expr)
                    return
                self.resolve_local(expr, "this")
            case lox.ast.Super():
                if self.klass is ClassKind.NONE:
                    self.error(lox.SuperWithoutSuperclass,
                               "Can't use 'super' outside of a class.", expr)
                    return
                if self.klass is not ClassKind.SUBCLASS:
                    self.error(lox.SuperWithoutSuperclass,
                               "Can't use 'super' in a class with no superclass.", expr)
                    return
                self.resolve_local(expr, "super")
            case lox.ast.Literal():
                pass
            case _:
                raise lox.EvalError(f"Cannot resolve expression {expr!r}")
