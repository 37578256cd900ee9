import pytest

from lox.errors import ResolveError
from lox.resolver import Resolver
from lox.syntax import Expr


def resolve(parse, source):
    return Resolver().resolve(parse(source))


@pytest.mark.parametrize("source, message", [
    ("{ var x = 1; var x = 2; }", "Already a variable with this name `x` in this scope."),
    ("fun foo(x) { var x = 1; print x; }", "Local variable `x` conflicts with parameter."),
    ("fun foo() {\n    var a = 123;\n}", "Local variable `a` is declared but never used."),
    ("fun foo() { var a; a = 1; }", "Local variable `a` is declared but never used."),
    ("fun foo() { fun helper() {} }", "Local variable `helper` is declared but never used."),
    ("fun foo() { { var unused = 1; } }", "Local variable `unused` is declared but never used."),
    ("fun foo() { if (true) { var a = 1; } }", "Local variable `a` is declared but never used."),
    ("class A { m() { for (var i = 0; true;) {} } }", "Local variable `i` is declared but never used."),
    ("{ var a = a; }", "Can't read local variable in its own initializer."),
    ("return 1;", "Can't return from top-level code."),
    ("class A { init() { return 1; } }", "Can't return a value from an initializer."),
    ("class A < A {}", "A class can't inherit from itself."),
    ("print this;", "Can't use 'this' outside of a class."),
    ("fun f() { return this; }", "Can't use 'this' outside of a class."),
    ("print super.x;", "Can't use 'super' outside of a class."),
    ("class A { m() { return super.m(); } }", "Can't use 'super' in a class with no superclass."),
    ("fun f(a, a) {}", "Already a variable with this name `a` in this scope."),
])
def test_resolve_errors(parse, source, message):
    with pytest.raises(ResolveError) as excinfo:
        resolve(parse, source)
    assert excinfo.value.message == message


def test_error_carries_declaration_line(parse):
    with pytest.raises(ResolveError) as excinfo:
        resolve(parse, "fun foo() {\n\n  var unused = 1;\n}")
    assert excinfo.value.line == 3
    assert str(excinfo.value) == (
        "[line 3] Error at 'unused': Local variable `unused` is declared but never used.")


@pytest.mark.parametrize("source", [
    "fun foo() { var a = 123; print a; }",
    "fun foo() { var a = 123; fun bar() { print a; } bar(); }",
    "fun f(a) { { var a = 2; print a; } print a; }",
    "fun f() { while (true) { var i = 1; print i; } }",
    "{ var unused = 1; }",
    "var a = a;",
    "print undefinedGlobal;",
    "class A { init() { return; } }",
    "fun f(unused) {}",
    "class A { m() { return fun () { return this; }; } }",
    "class A {} class B < A { m() { return super.m; } }",
    "fun outer() { fun inner() { return 1; } return inner; }",
])
def test_valid_programs(parse, source):
    resolve(parse, source)


def test_return_placement_is_scoped_to_each_function(parse):
    with pytest.raises(ResolveError, match="Can't return from top-level code."):
        resolve(parse, "fun f() { fun g() {} g(); } return;")


def test_lambda_inside_initializer_may_return_a_value(parse):
    resolve(parse, "class A { init() { var f = fun () { return 1; }; f(); } }")


def test_binding_distances(parse):
    statements = parse("{ var a = 1; { var b = 2; print a; print b; } } print a;")
    locals_ = Resolver().resolve(statements)

    outer = statements[0]
    inner = outer.statements[1]
    read_a, read_b = (stmt.expression for stmt in inner.statements[1:])
    global_a = statements[1].expression

    assert locals_[read_a] == 1
    assert locals_[read_b] == 0
    assert global_a not in locals_


def test_function_body_is_one_scope_inside_the_parameters(parse):
    statements = parse("fun f(p) { var l = p; return l; }")
    locals_ = Resolver().resolve(statements)
    body = statements[0].body
    read_p = body[0].initializer
    read_l = body[1].value
    assert isinstance(read_p, Expr.Variable)
    assert locals_[read_p] == 1
    assert locals_[read_l] == 0


def test_assignment_is_resolved(parse):
    statements = parse("{ var a; { a = 2; } print a; }")
    locals_ = Resolver().resolve(statements)
    assign = statements[0].statements[1].statements[0].expression
    assert isinstance(assign, Expr.Assign)
    assert locals_[assign] == 1


def test_resolving_twice_gives_identical_distances(parse):
    statements = parse(
        "fun make() { var x = 0; fun inc() { x = x + 1; return x; } return inc; }"
        "class A { m() { return this; } }"
        "{ var y = 1; { print y; } }")
    assert Resolver().resolve(statements) == Resolver().resolve(statements)
