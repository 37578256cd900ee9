"""Renders syntax trees as S-expressions, for inspecting what the parser built."""

from .runtime import stringify
from .syntax import Expr, Stmt


def print_expr(expr):
    match expr:
        case Expr.Assign(name, value):
            return f"(set! {name.lexeme} {print_expr(value)})"
        case Expr.Binary(left, operator, right) | Expr.Logical(left, operator, right):
            return f"({operator.lexeme} {print_expr(left)} {print_expr(right)})"
        case Expr.Call(callee, _, arguments):
            return parenthesize(print_expr(callee), *map(print_expr, arguments))
        case Expr.Comma(expressions):
            return parenthesize("begin", *map(print_expr, expressions))
        case Expr.Conditional(predicate, consequent, alternative):
            return parenthesize(
                "if", print_expr(predicate), print_expr(consequent), print_expr(alternative))
        case Expr.Function(_, params, body):
            names = " ".join(param.lexeme for param in params)
            return f"(lambda ({names}) {print_block(body)})"
        case Expr.Get(obj, name):
            return f"(get {print_expr(obj)} {name.lexeme})"
        case Expr.Grouping(expression):
            return f"(group {print_expr(expression)})"
        case Expr.Literal(value):
            return stringify(value)
        case Expr.Set(obj, name, value):
            return f"(set! {print_expr(obj)} {name.lexeme} {print_expr(value)})"
        case Expr.Super(_, method):
            return f"(super {method.lexeme})"
        case Expr.This():
            return "(this)"
        case Expr.Unary(operator, right):
            return f"({operator.lexeme} {print_expr(right)})"
        case Expr.Variable(name):
            return name.lexeme
    raise TypeError(f"unknown expression {expr!r}")


def print_stmt(stmt):
    match stmt:
        case Stmt.Block(statements):
            return print_block(statements)
        case Stmt.Class(name, superclass, methods):
            header = f"(class {name.lexeme}"
            if superclass is not None:
                header += f" < {superclass.name.lexeme}"
            return "".join([header, "\n", *(print_stmt(m) + "\n" for m in methods), ")"])
        case Stmt.Expression(expression):
            return print_expr(expression)
        case Stmt.Function(name, params, body):
            header = parenthesize(name.lexeme, *(param.lexeme for param in params))
            return "".join(["(define ", header, "\n", *(print_stmt(s) + "\n" for s in body), ")"])
        case Stmt.If(condition, then_branch, None):
            return parenthesize("if", print_expr(condition), print_stmt(then_branch))
        case Stmt.If(condition, then_branch, else_branch):
            return parenthesize(
                "if", print_expr(condition), print_stmt(then_branch), print_stmt(else_branch))
        case Stmt.Print(expression):
            return f"(print {print_expr(expression)})"
        case Stmt.Return(_, None):
            return "(return)"
        case Stmt.Return(_, value):
            return f"(return {print_expr(value)})"
        case Stmt.Var(name, None):
            return f"(define {name.lexeme})"
        case Stmt.Var(name, initializer):
            return f"(define {name.lexeme} {print_expr(initializer)})"
        case Stmt.While(condition, body):
            return parenthesize("while", print_expr(condition), print_stmt(body))
    raise TypeError(f"unknown statement {stmt!r}")


def print_block(statements):
    return "".join(["(begin\n", *(print_stmt(s) + "\n" for s in statements), ")"])


def parenthesize(*parts):
    return f"({' '.join(parts)})"
