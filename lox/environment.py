from .errors import LoxRuntimeError


class Environment:
    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        self.values[name] = value

    def assign(self, name, value):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return
        raise LoxRuntimeError(f"Undefined variable '{name.lexeme}'.", name)

    def get(self, name):
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise LoxRuntimeError(f"Undefined variable '{name.lexeme}'.", name)

    def assign_at(self, distance, name, value):
        self.ancestor(distance).assign(name, value)
        return value

    def get_at(self, distance, name):
        return self.ancestor(distance).get(name)

    def ancestor(self, distance):
        environment = self
        for _ in range(distance):
            environment = environment.enclosing
            if environment is None:
                # The resolver and the runtime disagree on the scope shape.
                raise LookupError(
                    f"no environment {distance} levels above the current one")
        return environment
