"""Tests for the parser."""

import io

import pytest

from lox.ast import (
    AssignExpression,
    BinaryExpression,
    BlockStatement,
    CallExpression,
    ClassDecl,
    ExprStatement,
    FunDecl,
    GetExpression,
    GroupingExpression,
    IfStatement,
    LiteralExpression,
    LogicalExpression,
    PrintStatement,
    ReturnStatement,
    SetExpression,
    UnaryExpression,
    VarDeclStatement,
    VarExpression,
    WhileStatement,
)
from lox.parser import Parser
from lox.printer import pprint
from lox.reporter import ErrorKind, Reporter


def parse(source: str):
    reporter = Reporter(stream=io.StringIO())
    prgm = Parser(reporter).parse(source)
    return prgm, reporter


def expression(source: str):
    prgm, reporter = parse(source + ";")
    assert not reporter.errors, [str(e) for e in reporter.errors]
    stmt = prgm[0]
    assert isinstance(stmt, ExprStatement)
    return stmt.expression


@pytest.mark.parametrize(
    "source, expected",
    [
        ("1 + 2 * 3", "(+ 1.0 (* 2.0 3.0))"),
        ("(1 + 2) * 3", "(* (group (+ 1.0 2.0)) 3.0)"),
        ("1 - 2 - 3", "(- (- 1.0 2.0) 3.0)"),
        ("-a.b", "(- (. b a))"),
        ("!true == false", "(== (! true) false)"),
        ("a or b and c", "(or a (and b c))"),
        ("1 < 2 == 3 >= 4", "(== (< 1.0 2.0) (>= 3.0 4.0))"),
        ("a = b = c", "(= a (= b c))"),
        ("f(1)(2)", "(call (call f 1.0) 2.0)"),
        ('a.b.c = "x"', '(= . c (. b a) "x")'),
    ],
)
def test_precedence_and_associativity(source, expected):
    assert pprint(expression(source)) == expected


def test_expression_nodes():
    assert isinstance(expression("a = 1"), AssignExpression)
    assert isinstance(expression("a.b = 1"), SetExpression)
    assert isinstance(expression("a.b"), GetExpression)
    assert isinstance(expression("a and b"), LogicalExpression)
    assert isinstance(expression("a + b"), BinaryExpression)
    assert isinstance(expression("-a"), UnaryExpression)
    assert isinstance(expression("(a)"), GroupingExpression)
    assert isinstance(expression("nil"), LiteralExpression)


def test_call_keeps_closing_paren_and_arguments():
    call = expression("f(1, x)")
    assert isinstance(call, CallExpression)
    assert call.paren.kind == "RPAREN"
    assert len(call.arguments) == 2


def test_tokens_carry_lines():
    prgm, _ = parse("var a = 1;\n\nprint a;")
    assert prgm[0].name.line == 1
    assert prgm[1].value.name.line == 3


def test_declarations():
    prgm, reporter = parse(
        "var a; var b = 1;"
        "fun add(x, y) { return x + y; }"
        "class Point { init(x) { this.x = x; } norm() { return this.x; } }"
    )
    assert not reporter.errors
    a, b, add, point = prgm
    assert isinstance(a, VarDeclStatement) and a.init is None
    assert isinstance(b, VarDeclStatement) and b.init.value == 1.0
    assert isinstance(add, FunDecl)
    assert [p.lexeme for p in add.params] == ["x", "y"]
    assert isinstance(add.body[0], ReturnStatement)
    assert isinstance(point, ClassDecl)
    assert [m.name.lexeme for m in point.methods] == ["init", "norm"]


def test_dangling_else_binds_to_nearest_if():
    prgm, _ = parse("if (a) if (b) print 1; else print 2;")
    outer = prgm[0]
    assert isinstance(outer, IfStatement)
    assert outer.iffalse is None
    assert isinstance(outer.iftrue, IfStatement)
    assert isinstance(outer.iftrue.iffalse, PrintStatement)


def test_for_loop_desugars_to_while():
    prgm, reporter = parse("for (var i = 0; i < 3; i = i + 1) print i;")
    assert not reporter.errors
    block = prgm[0]
    assert isinstance(block, BlockStatement)
    init, loop = block.body
    assert isinstance(init, VarDeclStatement)
    assert isinstance(loop, WhileStatement)
    body, step = loop.body.body
    assert isinstance(body, PrintStatement)
    assert isinstance(step.expression, AssignExpression)


def test_empty_for_clauses():
    prgm, reporter = parse("for (;;) print 1;")
    assert not reporter.errors
    loop = prgm[0]
    assert isinstance(loop, WhileStatement)
    assert loop.condition.value is True
    assert isinstance(loop.body, PrintStatement)


def test_invalid_assignment_target():
    _, reporter = parse("1 + a = 3;")
    assert [e.message for e in reporter.errors] == ["Invalid assignment target."]
    assert reporter.errors[0].where == " at '='"


def test_syntax_error_recovers_at_semicolon():
    prgm, reporter = parse("print ;\nprint 2;")
    assert [e.kind for e in reporter.errors] == [ErrorKind.SYNTAX]
    assert reporter.errors[0].line == 1
    assert len(prgm) == 1
    assert isinstance(prgm[0], PrintStatement)


def test_unexpected_end_of_input():
    prgm, reporter = parse("print 1")
    assert prgm is None
    assert reporter.errors[-1].where == " at end"


def test_nodes_compare_by_identity():
    prgm, _ = parse("a; a;")
    first, second = prgm[0].expression, prgm[1].expression
    assert first != second
    assert len({first, second}) == 2


def test_too_many_arguments():
    arguments = ", ".join(["1"] * 256)
    _, reporter = parse(f"f({arguments});")
    assert reporter.errors[0].message == "Can't have more than 255 arguments."
