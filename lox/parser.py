import logging

from .errors import ParseError
from .syntax import Expr, Stmt

log = logging.getLogger(__name__)

MAX_ARGUMENTS = 255


class Parser:
    Error = ParseError

    def __init__(self, tokens):
        self.tokens = tokens
        self.current = 0

    def parse(self):
        statements = []
        while not self.at_end():
            statements.append(self.declaration())
        log.debug("parsed %d top-level statements", len(statements))
        return statements

    def parse_expression(self):
        expr = self.expression()
        if not self.at_end():
            raise self.error(self.peek(), "Expected end of expression.")
        return expr

    def declaration(self):
        if self.match("CLASS"):
            return self.class_declaration()
        if self.check("FUN") and self.check_next("IDENTIFIER"):
            self.advance()
            return self.function("function")
        if self.match("VAR"):
            return self.var_declaration()
        return self.statement()

    def class_declaration(self):
        name = self.consume("IDENTIFIER", "Expected class name.")

        superclass = None
        if self.match("LESS"):
            superclass = Expr.Variable(self.consume(
                "IDENTIFIER", "Expected superclass name."))

        self.consume("LEFT_BRACE", "Expected '{' before class body.")

        methods = []
        while not self.at_end() and not self.check("RIGHT_BRACE"):
            methods.append(self.function("method"))

        self.consume("RIGHT_BRACE", "Expected '}' after class body.")
        return Stmt.Class(name, superclass, tuple(methods))

    def function(self, kind):
        name = self.consume("IDENTIFIER", f"Expected {kind} name.")
        self.consume("LEFT_PAREN", f"Expected '(' after {kind} name.")
        params = self.parameters()
        self.consume("LEFT_BRACE", f"Expected '{{' before {kind} body.")
        return Stmt.Function(name, params, tuple(self.block()))

    def parameters(self):
        params = []
        overflow = None
        if not self.check("RIGHT_PAREN"):
            while True:
                if len(params) >= MAX_ARGUMENTS and overflow is None:
                    overflow = self.peek()
                params.append(self.consume(
                    "IDENTIFIER", "Expected parameter name."))
                if not self.match("COMMA"):
                    break

        self.consume("RIGHT_PAREN", "Expected ')' after parameters.")
        if overflow is not None:
            raise self.error(
                overflow, f"Can't have more than {MAX_ARGUMENTS} parameters.")
        return tuple(params)

    def statement(self):
        if self.match("FOR"):
            return self.for_statement()
        if self.match("IF"):
            return self.if_statement()
        if self.match("PRINT"):
            return self.print_statement()
        if keyword := self.match("RETURN"):
            return self.return_statement(keyword)
        if self.match("WHILE"):
            return self.while_statement()
        if self.match("LEFT_BRACE"):
            return Stmt.Block(tuple(self.block()))
        return self.expression_statement()

    def block(self):
        statements = []
        while not self.check("RIGHT_BRACE") and not self.at_end():
            statements.append(self.declaration())
        self.consume("RIGHT_BRACE", "Expected '}' after block.")
        return statements

    def for_statement(self):
        self.consume("LEFT_PAREN", "Expected '(' after 'for'.")

        if self.match("SEMICOLON"):
            initializer = None
        elif self.match("VAR"):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check("SEMICOLON"):
            condition = self.expression()
        self.consume("SEMICOLON", "Expected ';' after loop condition.")

        increment = None
        if not self.check("RIGHT_PAREN"):
            increment = self.expression()
        self.consume("RIGHT_PAREN", "Expected ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = Stmt.Block((body, Stmt.Expression(increment)))
        if condition is None:
            condition = Expr.Literal(True)
        body = Stmt.While(condition, body)
        if initializer is not None:
            body = Stmt.Block((initializer, body))
        return body

    def if_statement(self):
        self.consume("LEFT_PAREN", "Expected '(' after 'if'.")
        condition = self.expression()
        self.consume("RIGHT_PAREN", "Expected ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match("ELSE"):
            else_branch = self.statement()
        return Stmt.If(condition, then_branch, else_branch)

    def print_statement(self):
        value = self.expression()
        self.consume("SEMICOLON", "Expected ';' after value.")
        return Stmt.Print(value)

    def return_statement(self, keyword):
        value = None
        if not self.check("SEMICOLON"):
            value = self.expression()
        self.consume("SEMICOLON", "Expected ';' after return value.")
        return Stmt.Return(keyword, value)

    def var_declaration(self):
        name = self.consume("IDENTIFIER", "Expected variable name.")
        initializer = None
        if self.match("EQUAL"):
            initializer = self.expression()
        self.consume("SEMICOLON", "Expected ';' after variable declaration.")
        return Stmt.Var(name, initializer)

    def while_statement(self):
        self.consume("LEFT_PAREN", "Expected '(' after 'while'.")
        condition = self.expression()
        self.consume("RIGHT_PAREN", "Expected ')' after condition.")
        body = self.statement()
        return Stmt.While(condition, body)

    def expression_statement(self):
        expr = self.expression()
        self.consume("SEMICOLON", "Expected ';' after expression.")
        return Stmt.Expression(expr)

    def expression(self):
        return self.comma()

    def comma(self):
        expr = self.assignment()
        if not self.check("COMMA"):
            return expr
        expressions = [expr]
        while self.match("COMMA"):
            expressions.append(self.assignment())
        return Expr.Comma(tuple(expressions))

    def assignment(self):
        expr = self.conditional()
        if equals := self.match("EQUAL"):
            value = self.assignment()
            match expr:
                case Expr.Variable(name):
                    return Expr.Assign(name, value)
                case Expr.Get(obj, name):
                    return Expr.Set(obj, name, value)
            raise self.error(equals, "Invalid assignment target.")
        return expr

    def conditional(self):
        predicate = self.logic_or()
        if not self.match("QUESTION"):
            return predicate
        consequent = self.expression()
        self.consume("COLON", "Expected ':' after then branch of conditional expression.")
        alternative = self.expression()
        return Expr.Conditional(predicate, consequent, alternative)

    def logic_or(self):
        expr = self.logic_and()
        while operator := self.match("OR"):
            expr = Expr.Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self):
        expr = self.equality()
        while operator := self.match("AND"):
            expr = Expr.Logical(expr, operator, self.equality())
        return expr

    def equality(self):
        expr = self.comparison()
        while operator := self.match("BANG_EQUAL", "EQUAL_EQUAL"):
            expr = Expr.Binary(expr, operator, self.comparison())
        return expr

    def comparison(self):
        expr = self.term()
        while operator := self.match("GREATER", "GREATER_EQUAL", "LESS", "LESS_EQUAL"):
            expr = Expr.Binary(expr, operator, self.term())
        return expr

    def term(self):
        expr = self.factor()
        while operator := self.match("MINUS", "PLUS"):
            expr = Expr.Binary(expr, operator, self.factor())
        return expr

    def factor(self):
        expr = self.unary()
        while operator := self.match("SLASH", "STAR"):
            expr = Expr.Binary(expr, operator, self.unary())
        return expr

    def unary(self):
        if operator := self.match("BANG", "MINUS"):
            return Expr.Unary(operator, self.unary())
        return self.call()

    def call(self):
        expr = self.primary()
        while True:
            if self.match("LEFT_PAREN"):
                expr = self.finish_call(expr)
            elif self.match("DOT"):
                name = self.consume(
                    "IDENTIFIER", "Expected property name after '.'.")
                expr = Expr.Get(expr, name)
            else:
                break
        return expr

    def finish_call(self, callee):
        arguments = []
        overflow = None
        if not self.check("RIGHT_PAREN"):
            while True:
                if len(arguments) >= MAX_ARGUMENTS and overflow is None:
                    overflow = self.peek()
                # Arguments sit below the comma operator, which would
                # otherwise swallow the separators.
                arguments.append(self.assignment())
                if not self.match("COMMA"):
                    break
        paren = self.consume("RIGHT_PAREN", "Expected ')' after arguments.")
        if overflow is not None:
            raise self.error(
                overflow, f"Can't have more than {MAX_ARGUMENTS} arguments.")
        return Expr.Call(callee, paren, tuple(arguments))

    def lambda_function(self, keyword):
        self.consume("LEFT_PAREN", "Expected '(' after 'fun'.")
        params = self.parameters()
        self.consume("LEFT_BRACE", "Expected '{' before function body.")
        return Expr.Function(keyword, params, tuple(self.block()))

    def primary(self):
        if self.match("FALSE"):
            return Expr.Literal(False)
        if self.match("TRUE"):
            return Expr.Literal(True)
        if self.match("NIL"):
            return Expr.Literal(None)
        if token := self.match("NUMBER", "STRING"):
            return Expr.Literal(token.literal)
        if self.match("LEFT_PAREN"):
            expr = self.expression()
            self.consume("RIGHT_PAREN", "Expected ')' after expression.")
            return Expr.Grouping(expr)
        if keyword := self.match("SUPER"):
            self.consume("DOT", "Expected '.' after 'super'.")
            method = self.consume(
                "IDENTIFIER", "Expected superclass method name.")
            return Expr.Super(keyword, method)
        if keyword := self.match("THIS"):
            return Expr.This(keyword)
        if keyword := self.match("FUN"):
            return self.lambda_function(keyword)
        if token := self.match("IDENTIFIER"):
            return Expr.Variable(token)
        raise self.error(self.peek(), "Expected expression.")

    def consume(self, token_type, message):
        if token := self.match(token_type):
            return token
        raise self.error(self.peek(), message)

    def match(self, *token_types):
        if self.peek().type in token_types:
            return self.advance()
        return None

    def check(self, token_type):
        return self.peek().type == token_type

    def check_next(self, token_type):
        if self.current + 1 >= len(self.tokens):
            return False
        return self.tokens[self.current + 1].type == token_type

    def advance(self):
        token = self.peek()
        if not self.at_end():
            self.current += 1
        return token

    def at_end(self):
        return self.peek().type == "EOF"

    def peek(self):
        return self.tokens[self.current]

    def error(self, token, message):
        return Parser.Error(message, token)


def parse(tokens):
    return Parser(tokens).parse()
