from dataclasses import dataclass


KEYWORDS = {
    "and",
    "class",
    "else",
    "false",
    "for",
    "fun",
    "if",
    "nil",
    "or",
    "print",
    "return",
    "super",
    "this",
    "true",
    "var",
    "while",
}

SINGLE_CHAR_TOKENS = {
    "(": "LEFT_PAREN",
    ")": "RIGHT_PAREN",
    "{": "LEFT_BRACE",
    "}": "RIGHT_BRACE",
    ",": "COMMA",
    ".": "DOT",
    "-": "MINUS",
    "+": "PLUS",
    ";": "SEMICOLON",
    "*": "STAR",
    "?": "QUESTION",
    ":": "COLON",
}

# Operators that may be followed by "=" to form a two-character token.
EQUAL_SUFFIXED_TOKENS = {
    "!": ("BANG", "BANG_EQUAL"),
    "=": ("EQUAL", "EQUAL_EQUAL"),
    "<": ("LESS", "LESS_EQUAL"),
    ">": ("GREATER", "GREATER_EQUAL"),
}


@dataclass(frozen=True)
class Token:
    type: str
    lexeme: str
    literal: object
    line: int

    def __str__(self):
        return f"{self.type} {self.lexeme} {self.literal}"
