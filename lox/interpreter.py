# --------------------------------------------------------------------
import contextlib as cl
import dataclasses as dc
import math
import operator as op
import sys

from typing import Optional as Opt

from .ast         import *
from .environment import Environment
from .errors      import *
from .resolver    import Locals
from .runtime     import Callable, Class, Function, Instance, Value

# ====================================================================
# Tree-walking evaluator

# --------------------------------------------------------------------
@dc.dataclass
class Returning:
    """Outcome of a statement that executed `return`."""
    value: Value = None

# None is normal completion
Outcome = Opt[Returning]

# --------------------------------------------------------------------
NUMERIC = {
    'DASH'      : op.sub,
    'STAR'      : op.mul,
    'SLASH'     : op.truediv,
    'BOOL_GT'   : op.gt,
    'BOOL_GEQ'  : op.ge,
    'BOOL_LT'   : op.lt,
    'BOOL_LEQ'  : op.le,
}

def is_truthy(value: Value) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True

def is_equal(a: Value, b: Value) -> bool:
    if a is None:
        return b is None
    if type(a) is not type(b):
        return False
    return a == b

def stringify(value: Value) -> str:
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case float() if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        case float() if math.isnan(value):
            return "NaN"
        case float():
            text = repr(value)
            return text[:-2] if text.endswith(".0") else text
        case _:
            return str(value)

def check_number_operands(operator: Token, *operands: Value):
    for operand in operands:
        if not isinstance(operand, float):
            if len(operands) == 1:
                raise OperandTypeError(operator, "Operand must be a number.")
            raise OperandTypeError(operator, "Operands must be numbers.")

# --------------------------------------------------------------------
class Interpreter:
    def __init__(self, stdout = None):
        self.stdout      = sys.stdout if stdout is None else stdout
        self.globals     = Environment()
        self.environment = self.globals
        self.locals      = {}

    def interpret(self, prgm: Block, locals_: Opt[Locals] = None):
        """
        Run the top level statements of one unit.

        Distances from `locals_` are kept: functions declared by this unit
        keep running after it returns. Runtime faults propagate.
        """
        if locals_ is not None:
            self.locals.update(locals_)

        for stmt in prgm:
            self.execute(stmt)

    @cl.contextmanager
    def in_environment(self, environment: Environment):
        enclosing, self.environment = self.environment, environment
        try:
            yield environment
        finally:
            self.environment = enclosing

    def execute_block(self, block: Block, environment: Environment) -> Outcome:
        with self.in_environment(environment):
            for stmt in block:
                outcome = self.execute(stmt)
                if outcome is not None:
                    return outcome
        return None

    def look_up_variable(self, expr: Expression, name: Token) -> Value:
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name)
        return self.globals.get(name)

    def assign_variable(self, expr: Expression, name: Token, value: Value):
        distance = self.locals.get(expr)
        if distance is not None:
            self.environment.assign_at(distance, name, value)
        else:
            self.globals.assign(name, value)

    # ----------------------------------------------------------------
    def execute(self, stmt: Statement) -> Outcome:
        match stmt:
            case ExprStatement(expression):
                self.evaluate(expression)

            case PrintStatement(value):
                print(stringify(self.evaluate(value)), file = self.stdout)

            case VarDeclStatement(name, init):
                value = None if init is None else self.evaluate(init)
                self.environment.define(name.lexeme, value)

            case BlockStatement(body):
                return self.execute_block(body, Environment(self.environment))

            case IfStatement(condition, iftrue, iffalse):
                if is_truthy(self.evaluate(condition)):
                    return self.execute(iftrue)
                if iffalse is not None:
                    return self.execute(iffalse)

            case WhileStatement(condition, body):
                while is_truthy(self.evaluate(condition)):
                    outcome = self.execute(body)
                    if outcome is not None:
                        return outcome

            case FunDecl(name, _, _):
                function = Function(stmt, self.environment)
                self.environment.define(name.lexeme, function)

            case ReturnStatement(_, value):
                return Returning(None if value is None else self.evaluate(value))

            case ClassDecl(name, methods):
                # defined first so methods can refer to the class by name
                self.environment.define(name.lexeme, None)

                table = {
                    method.name.lexeme: Function(
                        method,
                        self.environment,
                        is_initializer = method.name.lexeme == 'init',
                    )
                    for method in methods
                }

                self.environment.assign(name, Class(name.lexeme, table))

            case _:
                assert False, stmt

        return None

    # ----------------------------------------------------------------
    def evaluate(self, expr: Expression) -> Value:
        match expr:
            case LiteralExpression(value):
                return value

            case GroupingExpression(inner):
                return self.evaluate(inner)

            case UnaryExpression(operator, right):
                value = self.evaluate(right)
                if operator.kind == 'BOOL_NOT':
                    return not is_truthy(value)
                check_number_operands(operator, value)
                return -value

            case BinaryExpression(left, operator, right):
                return self.binary(
                    operator, self.evaluate(left), self.evaluate(right),
                )

            case LogicalExpression(left, operator, right):
                value = self.evaluate(left)
                if operator.kind == 'OR':
                    if is_truthy(value):
                        return value
                elif not is_truthy(value):
                    return value
                return self.evaluate(right)

            case VarExpression(name):
                return self.look_up_variable(expr, name)

            case ThisExpression(keyword):
                return self.look_up_variable(expr, keyword)

            case AssignExpression(name, value):
                value = self.evaluate(value)
                self.assign_variable(expr, name, value)
                return value

            case CallExpression(callee, paren, arguments):
                function  = self.evaluate(callee)
                arguments = [self.evaluate(argument) for argument in arguments]

                if not isinstance(function, Callable):
                    raise NotCallable(paren)

                if len(arguments) != function.arity():
                    raise ArityMismatch(paren, function.arity(), len(arguments))

                return function.call(self, arguments)

            case GetExpression(target, name):
                instance = self.evaluate(target)
                if not isinstance(instance, Instance):
                    raise NotAnInstance(name, "Only instances have properties.")
                return instance.get(name)

            case SetExpression(target, name, value):
                instance = self.evaluate(target)
                if not isinstance(instance, Instance):
                    raise NotAnInstance(name, "Only instances have fields.")
                value = self.evaluate(value)
                instance.set(name, value)
                return value

            case _:
                assert False, expr

    def binary(self, operator: Token, left: Value, right: Value) -> Value:
        match operator.kind:
            case 'PLUS':
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise OperandTypeError(
                    operator, "Operands must be two numbers or two strings.",
                )

            case 'BOOL_EQ':
                return is_equal(left, right)

            case 'BOOL_NEQ':
                return not is_equal(left, right)

            case 'SLASH':
                check_number_operands(operator, left, right)
                if right == 0:
                    raise DivisionByZero(operator)
                return left / right

            case kind:
                check_number_operands(operator, left, right)
                return NUMERIC[kind](left, right)
