from .environment import Environment
from .errors import LoxRuntimeError
from .syntax import Stmt


class LoxCallable:
    def arity(self):
        raise NotImplementedError()

    def call(self, interpreter, arguments):
        raise NotImplementedError()


class NativeFunction(LoxCallable):
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


class LoxFunction(LoxCallable):
    """A function declaration or lambda paired with its defining environment."""

    def __init__(self, declaration, closure, is_initializer=False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    def arity(self):
        return len(self.declaration.params)

    def bind(self, instance):
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def call(self, interpreter, arguments):
        # Parameters get a frame of their own, the body block runs in a
        # child of it; the resolver assigns distances on the same shape.
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        signal = interpreter.execute_block(
            self.declaration.body, Environment(environment))

        if self.is_initializer:
            return self.closure.values["this"]
        if signal is not None:
            return signal.value
        return None

    def __str__(self):
        match self.declaration:
            case Stmt.Function(name):
                return f"<fn {name.lexeme}>"
        return "<fn>"


class LoxClass(LoxCallable):
    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def arity(self):
        if initializer := self.find_method("init"):
            return initializer.arity()
        return 0

    def call(self, interpreter, arguments):
        instance = LoxInstance(self)
        if initializer := self.find_method("init"):
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def find_method(self, name):
        if method := self.methods.get(name):
            return method
        if self.superclass is not None:
            return self.superclass.find_method(name)
        return None

    def __str__(self):
        return self.name


class LoxInstance:
    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    def get(self, name):
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]
        if method := self.klass.find_method(name.lexeme):
            return method.bind(self)
        raise LoxRuntimeError(f"Undefined property '{name.lexeme}'.", name)

    def set(self, name, value):
        self.fields[name.lexeme] = value

    def __str__(self):
        return f"{self.klass.name} instance"


def type_name(value):
    match value:
        case None:
            return "nil"
        case bool():
            return "boolean"
        case float():
            return "number"
        case str():
            return "string"
        case LoxClass():
            return "class"
        case LoxCallable():
            return "function"
        case LoxInstance():
            return "instance"
    return type(value).__name__


def stringify(value):
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case float():
            text = repr(value)
            if text.endswith(".0"):
                text = text[:-2]
            return text
    return str(value)
