"""Classes and instances"""

__all__ = ["LoxClass", "LoxInstance"]

import lox


class LoxClass(lox.LoxCallable):
    """A declared class.

    Calling the class constructs a new instance and runs its `init` method,
    if the class or an ancestor defines one. The method table is fixed when
    the class is declared.

    Args:
        name: (str) Class name
        superclass: (LoxClass | None) Parent class
        methods: (dict[str, LoxFunction]) Methods declared in the class body

    Attributes:
        name: (str) Class name
        superclass: (LoxClass | None) Parent class
        methods: (dict[str, LoxFunction]) Methods declared in the class body
    """

    __slots__ = ("name", "superclass", "methods")

    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = dict(methods)

    def find_method(self, name):
        """Find a method on this class or the nearest ancestor defining it.

        Returns:
            (LoxFunction | None) Unbound method, or None
        """
        klass = self
        while klass is not None:
            method = klass.methods.get(name)
            if method is not None:
                return method
            klass = klass.superclass
        return None

    def arity(self):
        initializer = self.find_method("init")
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interp, arguments):
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            yield from initializer.bind(instance).call(interp, arguments)
        return instance

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"LoxClass<{self.name}>"


class LoxInstance:
    """Object created by calling a class.

    Fields live on the instance and shadow methods of the same name.

    Args:
        klass: (LoxClass) Class of the instance
    """

    __slots__ = ("klass", "fields")

    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    def get(self, name):
        """Get a field, or a method bound to this instance."""
        if name in self.fields:
            return self.fields[name]

        method = self.klass.find_method(name)
        if method is not None:
            return method.bind(self)

        raise lox.UndefinedProperty(f"Undefined property '{name}'.")

    def set(self, name, value):
        self.fields[name] = value

    def __str__(self):
        return f"{self.klass.name} instance"

    def __repr__(self):
        return f"LoxInstance<{self.klass.name}>"
