class LoxError(Exception):
    """Base class for every error the interpreter reports to a user."""

    def __init__(self, message, token=None, line=None):
        super().__init__(message)
        self.message = message
        self.token = token
        if line is None and token is not None:
            line = token.line
        self.line = line

    def where(self):
        if self.token is None:
            return ""
        if self.token.type == "EOF":
            return " at end"
        return f" at '{self.token.lexeme}'"

    def __str__(self):
        return f"[line {self.line}] Error{self.where()}: {self.message}"


class LexError(LoxError):
    pass


class ParseError(LoxError):
    pass


class ResolveError(LoxError):
    pass


class LoxRuntimeError(LoxError):
    def __str__(self):
        return f"{self.message}\n[line {self.line}]"
