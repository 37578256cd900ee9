import contextlib
import logging
from dataclasses import dataclass

from .errors import ResolveError
from .syntax import Expr, Stmt

log = logging.getLogger(__name__)


@dataclass
class Binding:
    # Whether the name's initializer has finished resolving.
    initialized: bool = False
    # Whether the name has been read since it was declared.
    used: bool = False
    token: object = None


class Resolver:
    """Computes, for every local variable reference, how many scopes lie
    between the reference and the scope that declares it.

    Global names are never tracked: a reference that matches no enclosing
    scope gets no entry in the side-table and is looked up in the global
    environment at run time.
    """

    Error = ResolveError

    def __init__(self):
        self.scopes = []
        self.locals = {}
        self.current_function = "NONE"
        self.current_class = "NONE"

    def resolve(self, statements):
        self.resolve_all(statements)
        log.debug("resolved %d local references", len(self.locals))
        return self.locals

    def resolve_all(self, statements):
        for statement in statements:
            self.resolve_stmt(statement)

    def resolve_stmt(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                with self.scope() as locals_:
                    self.resolve_all(statements)
                    if self.current_function != "NONE":
                        self.check_locals(locals_)
            case Stmt.Class():
                self.resolve_class(stmt)
            case Stmt.Expression(expression) | Stmt.Print(expression):
                self.resolve_expr(expression)
            case Stmt.Function(name, params, body):
                self.declare(name)
                self.define(name)
                self.resolve_function(params, body, "FUNCTION")
            case Stmt.If(condition, then_branch, else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)
            case Stmt.Return(keyword, value):
                if self.current_function == "NONE":
                    raise Resolver.Error("Can't return from top-level code.", keyword)
                if value is not None:
                    if self.current_function == "INITIALIZER":
                        raise Resolver.Error(
                            "Can't return a value from an initializer.", keyword)
                    self.resolve_expr(value)
            case Stmt.Var(name, initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)
            case Stmt.While(condition, body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)
            case _:
                raise TypeError(f"unknown statement {stmt!r}")

    def resolve_class(self, stmt):
        kind = "CLASS" if stmt.superclass is None else "SUBCLASS"
        with self.class_context(kind):
            self.declare(stmt.name)
            self.define(stmt.name)

            if stmt.superclass is not None:
                if stmt.name.lexeme == stmt.superclass.name.lexeme:
                    raise Resolver.Error(
                        "A class can't inherit from itself.", stmt.superclass.name)
                self.resolve_expr(stmt.superclass)

            with contextlib.ExitStack() as stack:
                if stmt.superclass is not None:
                    stack.enter_context(self.scope())["super"] = Binding(True, True)
                stack.enter_context(self.scope())["this"] = Binding(True, True)

                for method in stmt.methods:
                    method_kind = "INITIALIZER" if method.name.lexeme == "init" else "METHOD"
                    self.resolve_function(method.params, method.body, method_kind)

    def resolve_function(self, params, body, kind):
        with self.function_context(kind), self.scope() as parameters:
            for param in params:
                self.declare(param)
                self.define(param)
            with self.scope() as locals_:
                self.resolve_all(body)
                self.check_locals(locals_, parameters)

    def check_locals(self, locals_, parameters=()):
        # Nested blocks pass no parameters and may shadow them.
        for name, binding in locals_.items():
            if name in parameters:
                raise Resolver.Error(
                    f"Local variable `{name}` conflicts with parameter.", binding.token)
            if not binding.used:
                raise Resolver.Error(
                    f"Local variable `{name}` is declared but never used.", binding.token)

    def resolve_expr(self, expr):
        match expr:
            case Expr.Assign(name, value):
                self.resolve_expr(value)
                self.resolve_local(expr, name, read=False)
            case Expr.Binary(left, _, right) | Expr.Logical(left, _, right):
                self.resolve_expr(left)
                self.resolve_expr(right)
            case Expr.Call(callee, _, arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)
            case Expr.Comma(expressions):
                for expression in expressions:
                    self.resolve_expr(expression)
            case Expr.Conditional(predicate, consequent, alternative):
                self.resolve_expr(predicate)
                self.resolve_expr(consequent)
                self.resolve_expr(alternative)
            case Expr.Function(_, params, body):
                self.resolve_function(params, body, "FUNCTION")
            case Expr.Get(obj, _):
                self.resolve_expr(obj)
            case Expr.Grouping(expression) | Expr.Unary(_, expression):
                self.resolve_expr(expression)
            case Expr.Literal():
                pass
            case Expr.Set(obj, _, value):
                self.resolve_expr(value)
                self.resolve_expr(obj)
            case Expr.Super(keyword, _):
                if self.current_class == "NONE":
                    raise Resolver.Error("Can't use 'super' outside of a class.", keyword)
                if self.current_class == "CLASS":
                    raise Resolver.Error(
                        "Can't use 'super' in a class with no superclass.", keyword)
                self.resolve_local(expr, keyword)
            case Expr.This(keyword):
                if self.current_class == "NONE":
                    raise Resolver.Error("Can't use 'this' outside of a class.", keyword)
                self.resolve_local(expr, keyword)
            case Expr.Variable(name):
                if self.scopes:
                    binding = self.scopes[-1].get(name.lexeme)
                    if binding is not None and not binding.initialized:
                        raise Resolver.Error(
                            "Can't read local variable in its own initializer.", name)
                self.resolve_local(expr, name)
            case _:
                raise TypeError(f"unknown expression {expr!r}")

    def resolve_local(self, expr, name, read=True):
        for distance, scope in enumerate(reversed(self.scopes)):
            if (binding := scope.get(name.lexeme)) is not None:
                self.locals[expr] = distance
                if read:
                    binding.used = True
                return

    def declare(self, name):
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            raise Resolver.Error(
                f"Already a variable with this name `{name.lexeme}` in this scope.", name)
        scope[name.lexeme] = Binding(token=name)

    def define(self, name):
        if self.scopes:
            self.scopes[-1][name.lexeme].initialized = True

    @contextlib.contextmanager
    def scope(self):
        self.scopes.append({})
        try:
            yield self.scopes[-1]
        finally:
            self.scopes.pop()

    @contextlib.contextmanager
    def function_context(self, kind):
        enclosing, self.current_function = self.current_function, kind
        try:
            yield
        finally:
            self.current_function = enclosing

    @contextlib.contextmanager
    def class_context(self, kind):
        enclosing, self.current_class = self.current_class, kind
        try:
            yield
        finally:
            self.current_class = enclosing


def resolve(statements):
    return Resolver().resolve(statements)
