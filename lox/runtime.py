# --------------------------------------------------------------------
import abc
import dataclasses as dc
import typing as tp

from .ast         import FunDecl, Token
from .environment import Environment
from .errors      import UndefinedProperty

# ====================================================================
# Runtime object model

THIS = Token('THIS', 'this')

# --------------------------------------------------------------------
class Callable(abc.ABC):
    @abc.abstractmethod
    def arity(self) -> int:
        ...

    @abc.abstractmethod
    def call(self, interpreter, arguments: list):
        ...

# --------------------------------------------------------------------
@dc.dataclass(eq = False)
class NativeFunction(Callable):
    """A host function exposed to scripts, e.g. `clock`."""
    name   : str
    params : int
    body   : tp.Callable

    def arity(self):
        return self.params

    def call(self, interpreter, arguments):
        return self.body(*arguments)

    def __str__(self):
        return "<native fn>"

# --------------------------------------------------------------------
@dc.dataclass(eq = False)
class Function(Callable):
    declaration    : FunDecl
    closure        : Environment
    is_initializer : bool = False

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        outcome = interpreter.execute_block(self.declaration.body, environment)

        # an initializer always hands back its instance
        if self.is_initializer:
            return self.closure.get_at(0, THIS)

        return None if outcome is None else outcome.value

    def bind(self, instance: "Instance") -> "Function":
        environment = Environment(self.closure)
        environment.define('this', instance)
        return Function(self.declaration, environment, self.is_initializer)

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

# --------------------------------------------------------------------
@dc.dataclass(eq = False)
class Class(Callable):
    name    : str
    methods : dict[str, Function] = dc.field(default_factory = dict)

    def find_method(self, name: str) -> tp.Optional[Function]:
        return self.methods.get(name)

    def arity(self):
        init = self.find_method('init')
        return 0 if init is None else init.arity()

    def call(self, interpreter, arguments):
        instance = Instance(self)

        init = self.find_method('init')
        if init is not None:
            init.bind(instance).call(interpreter, arguments)

        return instance

    def __str__(self):
        return f"<class {self.name}>"

# --------------------------------------------------------------------
@dc.dataclass(eq = False)
class Instance:
    klass  : Class
    fields : dict[str, object] = dc.field(default_factory = dict)

    def get(self, name: Token):
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise UndefinedProperty(name)

    def set(self, name: Token, value):
        self.fields[name.lexeme] = value

    def __str__(self):
        return f"<instance {self.klass.name}>"

# --------------------------------------------------------------------
Value = tp.Union[None, bool, float, str, Callable, Instance]
