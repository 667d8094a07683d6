# --------------------------------------------------------------------
from .ast import *

# ====================================================================
# Parenthesised, lisp-like rendering of the tree, for `loxi --ast`

def parenthesize(name: str, *parts) -> str:
    return "(" + " ".join([name, *(pprint(x) for x in parts)]) + ")"

def literal(value) -> str:
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case str():
            return f'"{value}"'
        case _:
            return str(value)

def pprint(node: AST) -> str:
    match node:
        case LiteralExpression(value):
            return literal(value)

        case GroupingExpression(expression):
            return parenthesize("group", expression)

        case UnaryExpression(operator, right):
            return parenthesize(operator.lexeme, right)

        case BinaryExpression(left, operator, right) | \
             LogicalExpression(left, operator, right):
            return parenthesize(operator.lexeme, left, right)

        case VarExpression(name):
            return name.lexeme

        case ThisExpression(_):
            return "this"

        case AssignExpression(name, value):
            return parenthesize(f"= {name.lexeme}", value)

        case CallExpression(callee, _, arguments):
            return parenthesize("call", callee, *arguments)

        case GetExpression(target, name):
            return parenthesize(f". {name.lexeme}", target)

        case SetExpression(target, name, value):
            return parenthesize(f"= . {name.lexeme}", target, value)

        case ExprStatement(expression):
            return parenthesize(";", expression)

        case PrintStatement(value):
            return parenthesize("print", value)

        case VarDeclStatement(name, None):
            return f"(var {name.lexeme})"

        case VarDeclStatement(name, init):
            return parenthesize(f"var {name.lexeme}", init)

        case BlockStatement(body):
            return parenthesize("block", *body)

        case IfStatement(condition, iftrue, None):
            return parenthesize("if", condition, iftrue)

        case IfStatement(condition, iftrue, iffalse):
            return parenthesize("if-else", condition, iftrue, iffalse)

        case WhileStatement(condition, body):
            return parenthesize("while", condition, body)

        case ReturnStatement(_, None):
            return "(return)"

        case ReturnStatement(_, value):
            return parenthesize("return", value)

        case FunDecl(name, params, body):
            params = " ".join(x.lexeme for x in params)
            return parenthesize(f"fun {name.lexeme} ({params})", *body)

        case ClassDecl(name, methods):
            return parenthesize(f"class {name.lexeme}", *methods)

        case _:
            assert False, node
