"""Function definitions extracted from equations such as `f(x, y) = x + y`."""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import List, Optional, Sequence

from .ast import Cmp, Command, Comparison, Expr, Func, Ident, Span
from .errors import Arity, MathError, ParseError


@dataclass
class FuncDef:
    """A named function with ordered parameters and a body expression.

    `declaration` is the slice of source text covering the left side of the
    defining equation (e.g. `f(x, y)`); it is only known when the definition
    was built from text with `parse_func_def`.
    """
    name: str
    argument_names: List[str]
    value_expr: Expr
    declaration: Optional[str] = field(default=None, compare=False)

    def __repr__(self) -> str:
        return f"<function {self.name}({', '.join(self.argument_names)})>"

    @property
    def arity(self) -> int:
        return len(self.argument_names)

    @classmethod
    def from_command(cls, command: Command) -> 'FuncDef':
        return extract_func_def(command)

    def apply(self, values: Sequence[Fraction], on_call=None) -> Fraction:
        """Evaluate the body with each parameter bound to the matching value."""
        from .evaluator import Evaluator
        if len(values) != self.arity:
            declaration = self.declaration or f"{self.name}({', '.join(self.argument_names)})"
            raise Arity(
                Span(self.name, (0, len(self.name))),
                (len(self.name), len(declaration)),
                expected=self.arity,
                actual=len(values),
            )
        return Evaluator(on_call).apply(self, [Fraction(v) for v in values])


def _expected_equation(description: str, span=None) -> MathError:
    return MathError(f"expected an equation, got {description} instead", span)


def extract_func_def(command: Command) -> FuncDef:
    """Interpret `command` as the definition of a named function.

    Raises `MathError` describing the first reason the command does not
    qualify.
    """
    if isinstance(command, Expr):
        # The whole input is the mismatch, so there is nothing to point at.
        raise _expected_equation(command.describe())
    if not isinstance(command, Comparison):
        raise TypeError(f"not a command: {command!r}")
    if command.op.value is not Cmp.EQ:
        raise _expected_equation('a comparison', command.op.span)

    lhs = command.lhs.value
    if not isinstance(lhs, Func):
        raise MathError(
            "expected a function application on the left side of the equality, "
            f"got {lhs.describe()} instead",
            command.lhs.span,
        )

    names: List[str] = []
    for arg in lhs.args:
        if not isinstance(arg.value, Ident):
            raise MathError(
                f"expected an argument name, got {arg.value.describe()} instead",
                arg.span,
            )
        name = arg.value.name
        if name.value in names:
            raise MathError(f"duplicate argument name `{name.value}`", name.span)
        names.append(name.value)

    return FuncDef(lhs.name.value, names, command.rhs.value)


def parse_func_def(source: str) -> FuncDef:
    """Parse `source` as an equation and extract the function it defines.

    Parse failures are reported as `MathError` as well, so callers only have
    one exception type to handle.
    """
    from .parser import parse_command
    try:
        command = parse_command(source)
    except ParseError as e:
        raise e.to_math_error() from e
    definition = extract_func_def(command)
    if isinstance(command, Comparison):
        definition.declaration = command.lhs.slice(source)
    return definition
