"""Shared fixtures for the Lox test suite."""

import io

import pytest

from lox import natives
from lox.interpreter import Interpreter
from lox.parser import Parser
from lox.program import run_source
from lox.reporter import Reporter
from lox.resolver import resolve


class Session:
    """A parser, reporter and interpreter wired to in-memory streams."""

    def __init__(self):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.reporter = Reporter(stream=self.stderr)
        self.parser = Parser(self.reporter)
        self.interpreter = Interpreter(stdout=self.stdout)
        natives.install(self.interpreter)

    def run(self, source: str) -> bool:
        return run_source(source, self.parser, self.interpreter, self.reporter)

    def execute(self, source: str):
        """Parse, resolve and interpret, letting runtime faults escape."""
        prgm = self.parser.parse(source)
        assert not self.reporter.errors, [str(e) for e in self.reporter.errors]
        locals_ = resolve(prgm.block, self.reporter)
        assert locals_ is not None, [str(e) for e in self.reporter.errors]
        self.interpreter.interpret(prgm.block, locals_)

    @property
    def output(self) -> list[str]:
        return self.stdout.getvalue().splitlines()

    @property
    def kinds(self):
        return [e.kind for e in self.reporter.errors]


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def parser():
    return Parser(Reporter(stream=io.StringIO()))
