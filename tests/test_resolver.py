"""Tests for static scope resolution."""

import io

from lox.ast import (
    AssignExpression,
    BlockStatement,
    ExprStatement,
    FunDecl,
    PrintStatement,
    ReturnStatement,
    ThisExpression,
    VarExpression,
)
from lox.parser import Parser
from lox.reporter import ErrorKind, Reporter
from lox.resolver import Resolver, resolve


def parse(source: str):
    reporter = Reporter(stream=io.StringIO())
    prgm = Parser(reporter).parse(source)
    assert not reporter.errors, [str(e) for e in reporter.errors]
    return prgm.block, reporter


def resolved(source: str):
    prgm, reporter = parse(source)
    return prgm, Resolver(reporter).resolve(prgm), reporter


def test_globals_are_not_recorded():
    prgm, locals_, _ = resolved("var a = 1; print a;")
    assert locals_ == {}


def test_block_local_distance_zero():
    prgm, locals_, _ = resolved("{ var a = 1; print a; }")
    use = prgm[0].body[1].value
    assert locals_[use] == 0


def test_distance_counts_enclosing_scopes():
    prgm, locals_, _ = resolved("{ var a = 1; { { print a; } } }")
    use = prgm[0].body[1].body[0].body[0].value
    assert locals_[use] == 2


def test_shadowing_picks_innermost_declaration():
    prgm, locals_, _ = resolved(
        "{ var a = 1; { var a = 2; print a; } print a; }"
    )
    outer = prgm[0]
    inner_use = outer.body[1].body[1].value
    outer_use = outer.body[2].value
    assert locals_[inner_use] == 0
    assert locals_[outer_use] == 0


def test_assignment_target_is_resolved():
    prgm, locals_, _ = resolved("{ var a; { a = 2; } }")
    assign = prgm[0].body[1].body[0].expression
    assert isinstance(assign, AssignExpression)
    assert locals_[assign] == 1


def test_parameters_and_closures():
    prgm, locals_, _ = resolved(
        "fun outer(x) { fun inner() { return x; } return inner; }"
    )
    outer = prgm[0]
    inner = outer.body[0]
    use = inner.body[0].value
    assert isinstance(use, VarExpression)
    # inner's own frame, then outer's parameter frame
    assert locals_[use] == 1
    # `inner` is bound in outer's frame
    assert locals_[outer.body[1].value] == 0


def test_use_before_declaration_in_scope_falls_back_to_global():
    prgm, locals_, _ = resolved(
        "var a = 1; { fun show() { print a; } var a = 2; }"
    )
    show = prgm[1].body[0]
    use = show.body[0].value
    assert use not in locals_


def test_this_is_resolved_to_method_frame():
    prgm, locals_, _ = resolved(
        "class A { get() { return this; } nested() { fun f() { return this; } } }"
    )
    get, nested = prgm[0].methods
    this = get.body[0].value
    assert isinstance(this, ThisExpression)
    assert locals_[this] == 1
    inner_this = nested.body[0].body[0].value
    assert locals_[inner_this] == 2


def test_self_referential_initializer():
    prgm, reporter = parse("{ var a = a; }")
    assert resolve(prgm, reporter) is None
    assert [e.kind for e in reporter.errors] == [ErrorKind.USE_BEFORE_DEFINITION]
    assert reporter.errors[0].where == " at 'a'"


def test_global_self_reference_is_not_static():
    prgm, reporter = parse("var a = a;")
    assert resolve(prgm, reporter) == {}


def test_duplicate_declaration_in_local_scope():
    prgm, reporter = parse("{ var a = 1; var a = 2; } fun f(x, x) {}")
    resolve(prgm, reporter)
    assert [e.kind for e in reporter.errors] == [
        ErrorKind.DUPLICATE_DECLARATION,
        ErrorKind.DUPLICATE_DECLARATION,
    ]


def test_global_redeclaration_is_allowed():
    prgm, reporter = parse("var a = 1; var a = 2;")
    assert resolve(prgm, reporter) == {}


def test_return_outside_function():
    prgm, reporter = parse("return 1;")
    assert resolve(prgm, reporter) is None
    assert reporter.errors[0].kind is ErrorKind.RETURN_OUTSIDE_FUNCTION


def test_return_value_from_initializer():
    prgm, reporter = parse(
        "class A { init() { return 1; } } class B { init() { return; } }"
    )
    resolve(prgm, reporter)
    assert [e.kind for e in reporter.errors] == [ErrorKind.RETURN_FROM_INITIALIZER]


def test_this_outside_class():
    prgm, reporter = parse("fun f() { return this; }")
    resolve(prgm, reporter)
    assert reporter.errors[0].kind is ErrorKind.THIS_OUTSIDE_CLASS


def test_all_errors_are_reported_in_one_pass():
    prgm, reporter = parse("return; { var a = a; var b; var b; }")
    resolve(prgm, reporter)
    assert [e.kind for e in reporter.errors] == [
        ErrorKind.RETURN_OUTSIDE_FUNCTION,
        ErrorKind.USE_BEFORE_DEFINITION,
        ErrorKind.DUPLICATE_DECLARATION,
    ]


def test_resolution_is_idempotent():
    source = (
        "fun makeCounter() { var i = 0; fun inc() { i = i + 1; print i; }"
        " return inc; }"
        "class P { init(x) { this.x = x; } get() { return this.x; } }"
        "{ var a = 1; { var b = a; print a + b; } }"
    )
    prgm, reporter = parse(source)
    first = Resolver(reporter).resolve(prgm)
    second = Resolver(reporter).resolve(prgm)
    assert first == second
    assert first
    assert not reporter.errors
