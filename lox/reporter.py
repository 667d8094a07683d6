import contextlib as cl
import dataclasses as dc
import enum
import sys

from typing import Optional as Opt

from .ast import Token

class ErrorKind(enum.Enum):
    LEXICAL                 = 0
    SYNTAX                  = 1
    USE_BEFORE_DEFINITION   = 2
    DUPLICATE_DECLARATION   = 3
    RETURN_OUTSIDE_FUNCTION = 4
    RETURN_FROM_INITIALIZER = 5
    THIS_OUTSIDE_CLASS      = 6
    RUNTIME                 = 7

@dc.dataclass
class Error():
    """
    class allows to pass errors forward with all information
    """
    message     : str
    line        : int       = 0
    where       : str       = ""
    kind        : ErrorKind = ErrorKind.SYNTAX

    @staticmethod
    def location(token: Opt[Token]):
        if token is None:
            return ""
        if token.kind == "EOF":
            return " at end"
        return f" at '{token.lexeme}'"

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.message}"

class Checkpoint():
    """
    truthy while no error has been reported since it was taken
    """
    def __init__(self, reporter):
        self.reporter = reporter
        self.start    = len(reporter.errors)

    def __bool__(self):
        return len(self.reporter.errors) == self.start

class Reporter():
    """
    report errors
    """
    def __init__(self, stream = None):
        self.errors  = []
        self.section = None
        self.stream  = sys.stderr if stream is None else stream

    def __call__(
            self,
            message : str,
            token   : Opt[Token]    = None,
            kind    : ErrorKind     = ErrorKind.SYNTAX,
            line    : Opt[int]      = None,
    ):
        if line is None:
            line = token.line if token is not None else 0

        error = Error(message, line, Error.location(token), kind)
        self.errors.append(error)
        print(str(error), file = self.stream)
        return error

    def runtime_error(self, fault):
        return self(fault.message, fault.token, kind = ErrorKind.RUNTIME)

    @property
    def had_error(self):
        return len(self.errors) != 0

    @property
    def had_runtime_error(self):
        return any(err.kind is ErrorKind.RUNTIME for err in self.errors)

    def crash(self, errstr, status = 70):
        print("=== Error backlog ===", file = self.stream)

        for err in self.errors:
            print(f"[ Error ] {err}", file = self.stream)

        errstr = f"{{{self.section}}} \t| " + errstr if self.section else errstr
        print(f"[ Fatal Error ] | {errstr}", file = self.stream)

        sys.exit(status)

    @cl.contextmanager
    def checkpoint(self, section = None):
        enclosing, self.section = self.section, section or self.section
        try:
            yield Checkpoint(self)
        finally:
            self.section = enclosing

    def reset(self):
        self.errors  = []
        self.section = None
