import pytest

from lox import parser, resolver, scanner
from lox.interpreter import Interpreter


def parse(source):
    return parser.parse(scanner.tokenize(source))


def parse_expression(source):
    return parser.Parser(scanner.tokenize(source)).parse_expression()


def run(source, interpreter=None):
    if interpreter is None:
        interpreter = Interpreter()
    statements = parse(source)
    interpreter.resolve(resolver.resolve(statements))
    interpreter.interpret(statements)
    return interpreter


@pytest.fixture
def run_lox(capsys):
    """Run a program and return the lines it printed."""

    def run_lox(source, interpreter=None):
        run(source, interpreter)
        return capsys.readouterr().out.splitlines()

    return run_lox


@pytest.fixture
def evaluate():
    def evaluate(source):
        return Interpreter().evaluate(parse_expression(source))

    return evaluate


@pytest.fixture(name="parse")
def parse_fixture():
    return parse


@pytest.fixture(name="parse_expression")
def parse_expression_fixture():
    return parse_expression


@pytest.fixture(name="run")
def run_fixture():
    return run
