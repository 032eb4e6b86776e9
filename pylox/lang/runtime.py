"""Runtime object model: everything a Lox value can be besides nil, booleans, numbers and strings."""

import time
from abc import ABC, abstractmethod

from pylox.lang.environment import Environment
from pylox.lang.error import LoxRuntimeError


class LoxCallable(ABC):
    """Anything that can appear before "(" in a call expression."""

    @abstractmethod
    def arity(self):
        """Number of arguments the callable expects."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Calls self with already-evaluated arguments. len(arguments) == self.arity() is checked by the caller."""


class NativeFunction(LoxCallable):
    """Callable implemented in Python."""

    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(*arguments)

    def __str__(self):
        return "<native fn>"


def clock():
    """Seconds from a monotonic clock, as a Lox number. Only differences between two calls are meaningful."""
    return time.monotonic()


NATIVES = [NativeFunction("clock", 0, clock)]


class Return:
    """Outcome of executing a return statement. Statement execution returns either None (normal completion) or an
    instance of this class, which every enclosing block and loop hands back unchanged until a call consumes it.
    """
    __slots__ = ["value"]

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"Return({self.value!r})"


class LoxFunction(LoxCallable):
    """User function or method: a declaration plus the environment it closes over."""

    def __init__(self, declaration, closure, is_initializer=False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    def bind(self, instance):
        """Returns a copy of self whose closure has "this" bound to instance."""
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        # a fresh environment per call, not per declaration: recursion needs it
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        outcome = interpreter.execute_block(self.declaration.body, environment)

        if self.is_initializer:
            return self.closure.get_at(0, "this")
        if isinstance(outcome, Return):
            return outcome.value
        return None

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"


class LoxClass(LoxCallable):
    """A class is callable: calling it constructs an instance."""

    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name):
        """Looks name up in this class, then up the superclass chain. Returns None if there is no such method."""
        if name in self.methods:
            return self.methods[name]
        if self.superclass is not None:
            return self.superclass.find_method(name)
        return None

    def arity(self):
        initializer = self.find_method("init")
        return 0 if initializer is None else initializer.arity()

    def call(self, interpreter, arguments):
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self):
        return self.name


class LoxInstance:
    """Instance of a LoxClass. Fields are created on first assignment."""

    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    def get(self, name):
        """Fields shadow methods of the same name."""
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise LoxRuntimeError(name, f"Undefined property '{name.lexeme}'.")

    def set(self, name, value):
        self.fields[name.lexeme] = value

    def __str__(self):
        return f"{self.klass.name} instance"
