from .errors import LexError, LoxError, LoxRuntimeError, ParseError, ResolveError
from .interpreter import Interpreter
from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner

__all__ = [
    "Interpreter",
    "LexError",
    "LoxError",
    "LoxRuntimeError",
    "ParseError",
    "Parser",
    "ResolveError",
    "Resolver",
    "Scanner",
]
