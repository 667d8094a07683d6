# --------------------------------------------------------------------
from typing import Optional as Opt

from .ast    import Token
from .errors import UndefinedVariable

# ====================================================================
# Scope frames

class Environment:
    """
    One frame of bindings plus a shared link to the enclosing frame.

    Frames are never copied: closures, bound methods and the declaring
    scope all hold the same object, so an assignment through one of them
    is seen by the others.
    """
    def __init__(self, parent: Opt["Environment"] = None):
        self.parent = parent
        self.values = {}

    def __contains__(self, name: str):
        env = self
        while env is not None:
            if name in env.values:
                return True
            env = env.parent
        return False

    def islocal(self, name: str):
        return name in self.values

    def define(self, name: str, value):
        self.values[name] = value

    def get(self, name: Token):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.parent
        raise UndefinedVariable(name)

    def assign(self, name: Token, value):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.parent
        raise UndefinedVariable(name)

    def ancestor(self, distance: int) -> "Environment":
        env = self
        for _ in range(distance):
            env = env.parent
        return env

    # the resolver guarantees the frame `distance` hops away holds the
    # binding: no walking past it
    def get_at(self, distance: int, name: Token):
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise UndefinedVariable(name)
        return values[name.lexeme]

    def assign_at(self, distance: int, name: Token, value):
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise UndefinedVariable(name)
        values[name.lexeme] = value
