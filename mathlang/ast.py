"""Abstract Syntax Tree (AST) definitions for mathlang.

The AST classes defined in this module represent the syntactic structure
of parsed formulas. Every sub-position of a node is wrapped in a `Span`
carrying the offsets it was parsed from, so that errors discovered later
(during evaluation or function-definition extraction) can point at the
exact piece of the user's input that caused them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Generic, Optional, Tuple, TypeVar, Union

T = TypeVar('T')
U = TypeVar('U')

Bounds = Tuple[int, int]


@dataclass(frozen=True)
class Span(Generic[T]):
    """A value together with the `(start, end)` offsets it came from."""
    value: T
    span: Bounds

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    def map(self, f: Callable[[T], U]) -> 'Span[U]':
        return Span(f(self.value), self.span)

    def slice(self, source: str) -> str:
        """Return the piece of `source` this span covers."""
        return source[self.start:self.end]


class BinOp(enum.Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'


class Cmp(enum.Enum):
    EQ = '='
    LT = '<'
    LE = '<='
    GT = '>'
    GE = '>='


_BINOP_KINDS = {
    BinOp.ADD: 'a sum',
    BinOp.SUB: 'a subtraction',
    BinOp.MUL: 'a product',
    BinOp.DIV: 'a quotient',
    BinOp.MOD: 'a remainder',
}


class Expr:
    """Base class for expression nodes."""

    def describe(self) -> str:
        """Human readable name of the expression kind, e.g. 'a sum'."""
        raise NotImplementedError

    def evaluate(self, context, on_call=None) -> Fraction:
        from .evaluator import evaluate
        return evaluate(self, context, on_call)


@dataclass(frozen=True)
class Func(Expr):
    name: Span[str]
    args: Tuple[Span[Expr], ...]
    # Bounds of the parenthesised argument list, used for arity errors.
    arglist: Optional[Bounds] = field(default=None, compare=False)

    def describe(self) -> str:
        return 'a function application'


@dataclass(frozen=True)
class Ident(Expr):
    name: Span[str]

    def describe(self) -> str:
        return 'a variable name'


@dataclass(frozen=True)
class If(Expr):
    cond: Span['Pred']
    then: Span[Expr]
    otherwise: Span[Expr]

    def describe(self) -> str:
        return 'a conditional expression'


@dataclass(frozen=True)
class BinaryOp(Expr):
    lhs: Span[Expr]
    op: Span[BinOp]
    rhs: Span[Expr]

    def describe(self) -> str:
        return _BINOP_KINDS[self.op.value]


@dataclass(frozen=True)
class Neg(Expr):
    operand: Span[Expr]

    def describe(self) -> str:
        return 'a negation'


@dataclass(frozen=True)
class Num(Expr):
    value: Span[int]  # never negative; see Neg

    def describe(self) -> str:
        return 'a number'


class Pred:
    """Base class for predicate nodes."""

    def evaluate(self, context, on_call=None) -> bool:
        from .evaluator import evaluate_pred
        return evaluate_pred(self, context, on_call)


@dataclass(frozen=True)
class Comparison(Pred):
    lhs: Span[Expr]
    op: Span[Cmp]
    rhs: Span[Expr]


# A single line of input parses as either an expression or a predicate.
Command = Union[Expr, Pred]

