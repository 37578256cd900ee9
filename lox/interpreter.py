import logging
import time
from dataclasses import dataclass

from .environment import Environment
from .errors import LoxRuntimeError
from .runtime import (
    LoxCallable,
    LoxClass,
    LoxFunction,
    LoxInstance,
    NativeFunction,
    stringify,
    type_name,
)
from .syntax import Expr, Stmt

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Return:
    """Completion of a statement that executed `return`.

    Statements that complete normally yield None instead; blocks and loops
    stop at the first Return and hand it upward unchanged.
    """

    value: object = None


class Interpreter:
    Error = LoxRuntimeError

    def __init__(self):
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.globals.define("clock", NativeFunction("clock", 0, time.time))

    def interpret(self, statements):
        log.debug("executing %d statements", len(statements))
        for statement in statements:
            self.execute(statement)

    def resolve(self, locals_):
        self.locals.update(locals_)

    def evaluate(self, expr):
        match expr:
            case Expr.Assign(name, value):
                return self.assign_variable(expr, name, self.evaluate(value))
            case Expr.Binary(left, operator, right):
                return self.binary(operator, self.evaluate(left), self.evaluate(right))
            case Expr.Call(callee, paren, arguments):
                return self.call(self.evaluate(callee), paren, arguments)
            case Expr.Comma(expressions):
                value = None
                for expression in expressions:
                    value = self.evaluate(expression)
                return value
            case Expr.Conditional(predicate, consequent, alternative):
                if self.is_truthy(self.evaluate(predicate)):
                    return self.evaluate(consequent)
                return self.evaluate(alternative)
            case Expr.Function():
                return LoxFunction(expr, self.environment)
            case Expr.Get(obj, name):
                obj = self.evaluate(obj)
                if isinstance(obj, LoxInstance):
                    return obj.get(name)
                raise Interpreter.Error("Only instances have properties.", name)
            case Expr.Grouping(expression):
                return self.evaluate(expression)
            case Expr.Literal(value):
                return value
            case Expr.Logical(left, operator, right):
                left = self.evaluate(left)
                if operator.type == "OR":
                    if self.is_truthy(left):
                        return left
                elif not self.is_truthy(left):
                    return left
                return self.evaluate(right)
            case Expr.Set(obj, name, value):
                obj = self.evaluate(obj)
                if not isinstance(obj, LoxInstance):
                    raise Interpreter.Error("Only instances have properties.", name)
                value = self.evaluate(value)
                obj.set(name, value)
                return value
            case Expr.Super(keyword, method):
                distance = self.locals[expr]
                superclass = self.environment.get_at(distance, keyword)
                # The frame binding "this" sits just inside the one holding "super".
                instance = self.environment.ancestor(distance - 1).values["this"]
                if bound := superclass.find_method(method.lexeme):
                    return bound.bind(instance)
                raise Interpreter.Error(
                    f"Undefined property '{method.lexeme}'.", method)
            case Expr.This(keyword):
                return self.lookup_variable(keyword, expr)
            case Expr.Unary(operator, right):
                return self.unary(operator, self.evaluate(right))
            case Expr.Variable(name):
                return self.lookup_variable(name, expr)
        raise TypeError(f"unknown expression {expr!r}")

    def execute(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                return self.execute_block(statements, Environment(self.environment))
            case Stmt.Class():
                self.execute_class(stmt)
            case Stmt.Expression(expression):
                self.evaluate(expression)
            case Stmt.Function(name):
                self.environment.define(name.lexeme, LoxFunction(stmt, self.environment))
            case Stmt.If(condition, then_branch, else_branch):
                if self.is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case Stmt.Print(expression):
                print(stringify(self.evaluate(expression)))
            case Stmt.Return(_, value):
                return Return(None if value is None else self.evaluate(value))
            case Stmt.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Stmt.While(condition, body):
                while self.is_truthy(self.evaluate(condition)):
                    if (signal := self.execute(body)) is not None:
                        return signal
            case _:
                raise TypeError(f"unknown statement {stmt!r}")
        return None

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                if (signal := self.execute(statement)) is not None:
                    return signal
        finally:
            self.environment = previous
        return None

    def execute_class(self, stmt):
        self.environment.define(stmt.name.lexeme, None)

        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise Interpreter.Error(
                    "Superclass must be a class.", stmt.superclass.name)

        closure = self.environment
        if superclass is not None:
            closure = Environment(closure)
            closure.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(
                method, closure, method.name.lexeme == "init")
            for method in stmt.methods}

        klass = LoxClass(stmt.name.lexeme, superclass, methods)
        self.environment.assign(stmt.name, klass)

    def call(self, callee, paren, arguments):
        if not isinstance(callee, LoxCallable):
            raise Interpreter.Error(
                f"Can only call functions and classes, got {type_name(callee)}.", paren)
        if len(arguments) != callee.arity():
            raise Interpreter.Error(
                f"Expected {callee.arity()} arguments but got {len(arguments)}.", paren)
        arguments = [self.evaluate(argument) for argument in arguments]
        return callee.call(self, arguments)

    def binary(self, operator, left, right):
        match operator.type:
            case "BANG_EQUAL":
                return not self.is_equal(left, right)
            case "EQUAL_EQUAL":
                return self.is_equal(left, right)
            case "PLUS":
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise Interpreter.Error(
                    "Operands must be two numbers or two strings, "
                    f"got {type_name(left)} and {type_name(right)}.", operator)

        self.check_number_operands(operator, left, right)
        match operator.type:
            case "GREATER":
                return left > right
            case "GREATER_EQUAL":
                return left >= right
            case "LESS":
                return left < right
            case "LESS_EQUAL":
                return left <= right
            case "MINUS":
                return left - right
            case "STAR":
                return left * right
            case "SLASH":
                if right == 0.0:
                    raise Interpreter.Error("Division by zero.", operator)
                return left / right
        raise Interpreter.Error(f"Unknown binary operator '{operator.lexeme}'.", operator)

    def unary(self, operator, right):
        match operator.type:
            case "BANG":
                return not self.is_truthy(right)
            case "MINUS":
                if not isinstance(right, float):
                    raise Interpreter.Error(
                        f"Operand must be a number, got {type_name(right)}.", operator)
                return -right
        raise Interpreter.Error(f"Unknown unary operator '{operator.lexeme}'.", operator)

    def lookup_variable(self, name, expr):
        if (distance := self.locals.get(expr)) is not None:
            return self.environment.get_at(distance, name)
        return self.globals.get(name)

    def assign_variable(self, expr, name, value):
        if (distance := self.locals.get(expr)) is not None:
            return self.environment.assign_at(distance, name, value)
        self.globals.assign(name, value)
        return value

    @staticmethod
    def is_truthy(value):
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return True

    @staticmethod
    def is_equal(left, right):
        # Mismatched kinds are unequal, True and 1.0 included.
        if type(left) is not type(right):
            return False
        return left == right

    @staticmethod
    def check_number_operands(operator, left, right):
        if not (isinstance(left, float) and isinstance(right, float)):
            raise Interpreter.Error(
                f"Operands must be numbers, got {type_name(left)} and {type_name(right)}.",
                operator)
