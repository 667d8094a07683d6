# --------------------------------------------------------------------
import contextlib as cl
import enum

from typing import Optional as Opt

from .ast      import *
from .reporter import Reporter, ErrorKind

# ====================================================================
Locals = dict[Expression, int]

class FunctionType(enum.Enum):
    NONE        = 0
    FUNCTION    = 1
    METHOD      = 2
    INITIALIZER = 3

class ClassType(enum.Enum):
    NONE  = 0
    CLASS = 1

# --------------------------------------------------------------------
class Resolver:
    """
    Static scope analysis.

    Walks the program once, keeping a stack of local scopes that map each
    name to whether its declaration is complete. Every variable, assignment
    and `this` expression that binds to a local scope gets its distance
    (0 = innermost) recorded in `locals`; names found in no local scope are
    left for the global environment.
    """
    def __init__(self, reporter: Reporter):
        self.reporter = reporter
        self.scopes   = []
        self.function = FunctionType.NONE
        self.klass    = ClassType.NONE
        self.locals   = {}

    def report(self, msg: str, token: Token, kind: ErrorKind):
        self.reporter(msg, token, kind = kind)

    @cl.contextmanager
    def in_scope(self):
        self.scopes.append({})
        try:
            yield self
        finally:
            self.scopes.pop()

    @cl.contextmanager
    def in_function(self, kind: FunctionType):
        enclosing, self.function = self.function, kind
        try:
            with self.in_scope():
                yield self
        finally:
            self.function = enclosing

    @cl.contextmanager
    def in_class(self):
        enclosing, self.klass = self.klass, ClassType.CLASS
        try:
            with self.in_scope():
                self.scopes[-1]['this'] = True
                yield self
        finally:
            self.klass = enclosing

    def declare(self, name: Token):
        if not self.scopes:
            return

        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.report(
                "Already a variable with this name in this scope.",
                name, ErrorKind.DUPLICATE_DECLARATION,
            )
        scope[name.lexeme] = False

    def define(self, name: Token):
        if self.scopes:
            self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr: Expression, name: Token):
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.locals[expr] = depth
                return

    def for_expression(self, expr: Expression):
        match expr:
            case VarExpression(name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self.report(
                        "Can't read local variable in its own initializer.",
                        name, ErrorKind.USE_BEFORE_DEFINITION,
                    )
                self.resolve_local(expr, name)

            case AssignExpression(name, value):
                self.for_expression(value)
                self.resolve_local(expr, name)

            case ThisExpression(keyword):
                if self.klass is ClassType.NONE:
                    self.report(
                        "Can't use 'this' outside of a class.",
                        keyword, ErrorKind.THIS_OUTSIDE_CLASS,
                    )
                    return
                self.resolve_local(expr, keyword)

            case LiteralExpression(_):
                pass

            case GroupingExpression(inner):
                self.for_expression(inner)

            case UnaryExpression(_, right):
                self.for_expression(right)

            case BinaryExpression(left, _, right) | LogicalExpression(left, _, right):
                self.for_expression(left)
                self.for_expression(right)

            case CallExpression(callee, _, arguments):
                self.for_expression(callee)
                for argument in arguments:
                    self.for_expression(argument)

            case GetExpression(target, _):
                self.for_expression(target)

            case SetExpression(target, _, value):
                self.for_expression(value)
                self.for_expression(target)

            case _:
                assert False, expr

    def for_statement(self, stmt: Statement):
        match stmt:
            case VarDeclStatement(name, init):
                self.declare(name)
                if init is not None:
                    self.for_expression(init)
                self.define(name)

            case FunDecl(name, _, _):
                self.declare(name)
                self.define(name)
                self.for_function(stmt, FunctionType.FUNCTION)

            case ClassDecl(name, methods):
                self.declare(name)
                self.define(name)
                with self.in_class():
                    for method in methods:
                        kind = FunctionType.METHOD
                        if method.name.lexeme == 'init':
                            kind = FunctionType.INITIALIZER
                        self.for_function(method, kind)

            case ExprStatement(expression):
                self.for_expression(expression)

            case PrintStatement(value):
                self.for_expression(value)

            case BlockStatement(body):
                self.for_block(body)

            case IfStatement(condition, iftrue, iffalse):
                self.for_expression(condition)
                self.for_statement(iftrue)
                if iffalse is not None:
                    self.for_statement(iffalse)

            case WhileStatement(condition, body):
                self.for_expression(condition)
                self.for_statement(body)

            case ReturnStatement(keyword, value):
                if self.function is FunctionType.NONE:
                    self.report(
                        "Can't return from top-level code.",
                        keyword, ErrorKind.RETURN_OUTSIDE_FUNCTION,
                    )

                if value is not None:
                    if self.function is FunctionType.INITIALIZER:
                        self.report(
                            "Can't return a value from an initializer.",
                            keyword, ErrorKind.RETURN_FROM_INITIALIZER,
                        )
                    self.for_expression(value)

            case _:
                assert False, stmt

    def for_block(self, block: Block):
        with self.in_scope():
            for stmt in block:
                self.for_statement(stmt)

    def for_function(self, decl: FunDecl, kind: FunctionType):
        with self.in_function(kind):
            for param in decl.params:
                self.declare(param)
                self.define(param)
            for stmt in decl.body:
                self.for_statement(stmt)

    def resolve(self, prgm: Block) -> Locals:
        for stmt in prgm:
            self.for_statement(stmt)
        return self.locals

# --------------------------------------------------------------------
def resolve(prgm: Block, reporter: Reporter) -> Opt[Locals]:
    with reporter.checkpoint() as checkpoint:
        locals_ = Resolver(reporter).resolve(prgm)
        return locals_ if checkpoint else None
