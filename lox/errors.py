# --------------------------------------------------------------------
from .ast import Token

# ====================================================================
# Runtime faults
#
# Every fault carries the token it was raised at so the reporter can
# print a line number and location.

class RuntimeFault(Exception):
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token   = token
        self.message = message

    def __str__(self):
        return f"{self.message}\n[line {self.token.line}]"

class UndefinedVariable(RuntimeFault):
    def __init__(self, name: Token):
        super().__init__(name, f"Undefined variable '{name.lexeme}'.")

class OperandTypeError(RuntimeFault):
    pass

class DivisionByZero(RuntimeFault):
    def __init__(self, operator: Token):
        super().__init__(operator, "Division by zero.")

class NotCallable(RuntimeFault):
    def __init__(self, paren: Token):
        super().__init__(paren, "Can only call functions and classes.")

class ArityMismatch(RuntimeFault):
    def __init__(self, paren: Token, expected: int, actual: int):
        super().__init__(
            paren,
            f"Expected {expected} arguments but got {actual}.",
        )
        self.expected = expected
        self.actual   = actual

class NotAnInstance(RuntimeFault):
    pass

class UndefinedProperty(RuntimeFault):
    def __init__(self, name: Token):
        super().__init__(name, f"Undefined property '{name.lexeme}'.")
