"""Runtime lexical scoping: a chain of frames, each mapping names to values."""

from pylox.lang.error import LoxRuntimeError


class Environment:
    """A single frame. enclosing is None only for the global environment. Frames are shared by reference: closures,
    nested blocks and call frames all keep their enclosing frame alive.
    """

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def define(self, name, value):
        """Binds name in this frame. Redefinition silently replaces the old value."""
        self.values[name] = value

    def get(self, name):
        """Dynamic lookup through the whole chain. name is a Token."""
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name, value):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def ancestor(self, distance):
        environment = self
        for _ in range(distance):
            environment = environment.enclosing
        return environment

    def get_at(self, distance, name):
        """Lookup at a distance computed by the resolver; name is a plain string."""
        return self.ancestor(distance).values[name]

    def assign_at(self, distance, name, value):
        """Assignment at a distance computed by the resolver; name is a plain string, as in get_at."""
        self.ancestor(distance).values[name] = value
