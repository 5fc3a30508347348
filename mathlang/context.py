from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING, Dict, Iterable, Mapping, Union

from .ast import Span
from .errors import NotAFunction, NotAVariable, UnknownFunction, UnknownVariable

if TYPE_CHECKING:
    from .funcdef import FuncDef

SymbolValue = Union['FuncDef', Fraction]


class Context:
    """A symbol table mapping identifiers to numbers or function definitions.

    Unlike a nested scope, a Context has no parent: the evaluator builds a
    brand new one holding only the parameters for every function call, so a
    function body never sees the bindings of its caller.
    """
    def __init__(self, values: Mapping[str, SymbolValue] = None):
        self.values: Dict[str, SymbolValue] = {}
        for name, value in (values or {}).items():
            self[name] = value

    @classmethod
    def from_definitions(cls, *definitions: 'FuncDef', **variables) -> 'Context':
        ctx = cls()
        for definition in definitions:
            ctx.define(definition)
        for name, value in variables.items():
            ctx.set_variable(name, value)
        return ctx

    @classmethod
    def for_call(cls, names: Iterable[str], values: Iterable[Fraction]) -> 'Context':
        ctx = cls()
        for name, value in zip(names, values):
            ctx.values[name] = value
        return ctx

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, name: str) -> SymbolValue:
        return self.values[name]

    def __setitem__(self, name: str, value) -> None:
        from .funcdef import FuncDef
        if isinstance(value, FuncDef):
            self.values[name] = value
        else:
            self.set_variable(name, value)

    def define(self, definition: 'FuncDef') -> None:
        """Bind `definition` under its own name."""
        self.values[definition.name] = definition

    def set_variable(self, name: str, value) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, Fraction)):
            raise TypeError(f"expected an int or Fraction for {name}, got {type(value).__name__}")
        self.values[name] = Fraction(value)

    def get_variable(self, name: Span[str]) -> Fraction:
        from .funcdef import FuncDef
        if name.value not in self.values:
            raise UnknownVariable(name)
        value = self.values[name.value]
        if isinstance(value, FuncDef):
            raise NotAVariable(name)
        return value

    def get_function(self, name: Span[str]) -> 'FuncDef':
        from .funcdef import FuncDef
        if name.value not in self.values:
            raise UnknownFunction(name)
        value = self.values[name.value]
        if not isinstance(value, FuncDef):
            raise NotAFunction(name)
        return value
