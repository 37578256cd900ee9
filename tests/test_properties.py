"""Property-based tests over generated Lox snippets."""

import re

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lox.errors import LoxRuntimeError
from lox.interpreter import Interpreter
from lox.parser import Parser
from lox.resolver import Resolver
from lox.runtime import stringify
from lox.scanner import Scanner

naturals = st.integers(min_value=0, max_value=10**9)
words = st.text(alphabet="abcdefghijklmnopqrstuvwxyz ", max_size=20)


def parse(source):
    return Parser(Scanner(source).scan_tokens()).parse()


def evaluate(source):
    expr = Parser(Scanner(source).scan_tokens()).parse_expression()
    return Interpreter().evaluate(expr)


def run(source):
    statements = parse(source)
    interpreter = Interpreter()
    interpreter.resolve(Resolver().resolve(statements))
    interpreter.interpret(statements)


@given(naturals, st.text(alphabet="0123456789", min_size=1, max_size=6))
def test_number_literal_value(whole, fraction):
    tokens = Scanner(f"{whole}.{fraction}").scan_tokens()
    assert [token.type for token in tokens] == ["NUMBER", "EOF"]
    assert tokens[0].literal == float(f"{whole}.{fraction}")
    assert evaluate(f"{whole}.{fraction}") == tokens[0].literal


@given(naturals)
def test_integral_numbers_print_without_fraction(n):
    assert stringify(evaluate(str(n))) == str(n)


@given(naturals, naturals)
def test_addition(a, b):
    assert evaluate(f"{a} + {b}") == float(a + b)


@given(words, words)
def test_string_concatenation(a, b):
    assert evaluate(f'"{a}" + "{b}"') == a + b


@given(naturals)
def test_division_by_zero_always_fails(a):
    with pytest.raises(LoxRuntimeError, match="Division by zero."):
        evaluate(f"{a} / 0")


@given(st.integers(min_value=0, max_value=8), st.integers(min_value=0, max_value=8))
def test_arity_mismatch_names_both_counts(arity, count):
    params = ", ".join(f"p{i}" for i in range(arity))
    arguments = ", ".join(str(i) for i in range(count))
    source = f"fun f({params}) {{}} f({arguments});"
    if arity == count:
        run(source)
        return
    message = f"Expected {arity} arguments but got {count}."
    with pytest.raises(LoxRuntimeError, match=re.escape(message)):
        run(source)


@settings(max_examples=25)
@given(st.integers(min_value=1, max_value=6))
def test_resolution_is_deterministic(depth):
    source = "fun f(a) { var b = a; " + "{ " * depth + "print b;" + " }" * depth + " }"
    statements = parse(source)
    first = Resolver().resolve(statements)
    second = Resolver().resolve(statements)
    assert first == second
    assert sorted(first.values()) == [1, depth]
