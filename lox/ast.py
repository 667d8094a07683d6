# --------------------------------------------------------------------
import dataclasses as dc

from typing import Optional as Opt

# ====================================================================
# Parse tree / Abstract Syntax Tree
#
# Nodes are frozen and compare by identity: the resolver keys its
# distance table on the node object itself.

# --------------------------------------------------------------------
@dc.dataclass(frozen = True)
class Token:
    kind    : str
    lexeme  : str
    literal : object = None
    line    : int    = 0

    def __str__(self):
        return f"{self.kind} {self.lexeme} {self.literal}"

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class AST:
    line: int = dc.field(kw_only = True, default = 0)

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class Expression(AST):
    pass

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class LiteralExpression(Expression):
    value: object

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class GroupingExpression(Expression):
    expression: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class UnaryExpression(Expression):
    operator: Token
    right: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class BinaryExpression(Expression):
    left: Expression
    operator: Token
    right: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class LogicalExpression(Expression):
    left: Expression
    operator: Token
    right: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class VarExpression(Expression):
    name: Token

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class AssignExpression(Expression):
    name: Token
    value: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class CallExpression(Expression):
    callee: Expression
    paren: Token
    arguments: tuple[Expression, ...]

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class GetExpression(Expression):
    target: Expression
    name: Token

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class SetExpression(Expression):
    target: Expression
    name: Token
    value: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class ThisExpression(Expression):
    keyword: Token

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class Statement(AST):
    pass

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class ExprStatement(Statement):
    expression: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class PrintStatement(Statement):
    value: Expression

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class VarDeclStatement(Statement):
    name: Token
    init: Opt[Expression] = None

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class BlockStatement(Statement):
    body: tuple[Statement, ...]

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class IfStatement(Statement):
    condition: Expression
    iftrue: Statement
    iffalse: Opt[Statement] = None

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class WhileStatement(Statement):
    condition: Expression
    body: Statement

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class ReturnStatement(Statement):
    keyword: Token
    value: Opt[Expression] = None

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class FunDecl(Statement):
    name: Token
    params: tuple[Token, ...]
    body: tuple[Statement, ...]

# --------------------------------------------------------------------
@dc.dataclass(frozen = True, eq = False)
class ClassDecl(Statement):
    name: Token
    methods: tuple[FunDecl, ...]

# --------------------------------------------------------------------
Block = tuple[Statement, ...]
