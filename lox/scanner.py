import logging

from .errors import LexError
from .tokens import EQUAL_SUFFIXED_TOKENS, KEYWORDS, SINGLE_CHAR_TOKENS, Token

log = logging.getLogger(__name__)


def is_digit(c):
    return "0" <= c <= "9"


def is_alpha(c):
    return "a" <= c <= "z" or "A" <= c <= "Z" or c == "_"


def is_alphanumeric(c):
    return is_alpha(c) or is_digit(c)


class Scanner:
    Error = LexError

    def __init__(self, source):
        self.source = source
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self):
        """Scan the whole source from the beginning."""
        self.start = self.current = 0
        self.line = 1
        tokens = []
        while True:
            tokens.append(token := self.next_token())
            if token.type == "EOF":
                break
        log.debug("scanned %d tokens over %d lines", len(tokens), self.line)
        return tokens

    def next_token(self):
        """Return the next token, or an EOF token once the source is exhausted.

        A LexError leaves the cursor past the offending input, so calling
        next_token() again resumes scanning after it.
        """
        while not self.at_end():
            self.start = self.current
            if token := self.scan_token():
                return token
        return Token("EOF", "", None, self.line)

    def scan_token(self):
        match c := self.advance():
            case "/":
                if self.match("/"):
                    self.comment()
                    return None
                return self.make_token("SLASH")
            case " " | "\r" | "\t":
                return None
            case "\n":
                self.line += 1
                return None
            case "\"":
                return self.string()
            case _ if c in SINGLE_CHAR_TOKENS:
                return self.make_token(SINGLE_CHAR_TOKENS[c])
            case _ if c in EQUAL_SUFFIXED_TOKENS:
                single, double = EQUAL_SUFFIXED_TOKENS[c]
                return self.make_token(double if self.match("=") else single)
            case _ if is_digit(c):
                return self.number()
            case _ if is_alpha(c):
                return self.identifier()
            case _:
                raise Scanner.Error(f"Unexpected character '{c}'.", line=self.line)

    def comment(self):
        while self.peek() != "\n" and not self.at_end():
            self.current += 1

    def string(self):
        while self.peek() != "\"" and not self.at_end():
            if self.peek() == "\n":
                self.line += 1
            self.current += 1

        if self.at_end():
            raise Scanner.Error("Unterminated string.", line=self.line)

        self.current += 1  # Closing "
        value = self.source[self.start + 1: self.current - 1]
        return self.make_token("STRING", value)

    def number(self):
        while is_digit(self.peek()):
            self.current += 1

        if self.peek() == "." and is_digit(self.peek_next()):
            self.current += 1
            while is_digit(self.peek()):
                self.current += 1

        value = float(self.source[self.start:self.current])
        return self.make_token("NUMBER", value)

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.current += 1

        text = self.source[self.start:self.current]
        if text not in KEYWORDS:
            return self.make_token("IDENTIFIER")
        match text:
            case "true":
                return self.make_token("TRUE", True)
            case "false":
                return self.make_token("FALSE", False)
            case _:
                return self.make_token(text.upper())

    def make_token(self, type, literal=None):
        lexeme = self.source[self.start:self.current]
        return Token(type, lexeme, literal, self.line)

    def match(self, expected):
        if not self.at_end():
            if self.source[self.current] == expected:
                self.current += 1
                return True
        return False

    def advance(self):
        c = self.source[self.current]
        self.current += 1
        return c

    def peek(self):
        if self.at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def at_end(self):
        return not self.current < len(self.source)


def tokenize(source):
    return Scanner(source).scan_tokens()
