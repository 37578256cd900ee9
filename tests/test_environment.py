import pytest

from lox.environment import Environment
from lox.errors import LoxRuntimeError
from lox.tokens import Token


def name(lexeme, line=1):
    return Token("IDENTIFIER", lexeme, None, line)


def test_define_and_get():
    environment = Environment()
    environment.define("a", 1.0)
    assert environment.get(name("a")) == 1.0


def test_define_overwrites():
    environment = Environment()
    environment.define("a", 1.0)
    environment.define("a", 2.0)
    assert environment.get(name("a")) == 2.0


def test_get_walks_enclosing_frames():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(Environment(outer))
    assert inner.get(name("a")) == "outer"


def test_undefined_variable():
    with pytest.raises(LoxRuntimeError) as excinfo:
        Environment(Environment()).get(name("missing", line=7))
    assert excinfo.value.message == "Undefined variable 'missing'."
    assert excinfo.value.line == 7


def test_assign_updates_nearest_declaring_frame():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.assign(name("a"), 2.0)
    assert outer.values == {"a": 2.0}
    assert inner.values == {}


def test_assign_never_creates_bindings():
    environment = Environment()
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'a'."):
        environment.assign(name("a"), 1.0)
    assert environment.values == {}


def test_get_at_and_assign_at_skip_shadowing_frames():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(outer)
    inner.define("a", "inner")

    assert inner.get_at(0, name("a")) == "inner"
    assert inner.get_at(1, name("a")) == "outer"

    assert inner.assign_at(1, name("a"), "changed") == "changed"
    assert outer.values["a"] == "changed"
    assert inner.values["a"] == "inner"


def test_distance_beyond_chain_is_not_a_lox_error():
    environment = Environment(Environment())
    with pytest.raises(LookupError):
        environment.get_at(2, name("a"))
