"""Evaluator for mathlang expressions.

Expressions are evaluated over `fractions.Fraction`, so there is neither
overflow nor rounding anywhere. Function applications are reported to an
optional `on_call(name, values)` hook before the body runs, which callers
use to meter how many queries a user made.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import Callable, List, Optional, Sequence

from .ast import BinOp, BinaryOp, Cmp, Comparison, Expr, Func, Ident, If, Neg, Num, Pred
from .context import Context
from .errors import Arity, DivisionByZero, EvalError
from .types import to_string

logger = logging.getLogger(__name__)

OnCall = Callable[[str, List[Fraction]], None]


def _ignore_call(name: str, values: List[Fraction]) -> None:
    pass


def truncated_mod(a: Fraction, b: Fraction) -> Fraction:
    """Remainder of a / b whose sign follows the dividend, e.g. -7 % 2 == -1."""
    return a - b * math.trunc(a / b)


class Evaluator:
    """Walks expressions and predicates against a `Context`."""
    def __init__(self, on_call: Optional[OnCall] = None):
        self.on_call = on_call or _ignore_call

    def evaluate(self, node: Expr, ctx: Context) -> Fraction:
        if isinstance(node, Num):
            return Fraction(node.value.value)
        if isinstance(node, Ident):
            return ctx.get_variable(node.name)
        if isinstance(node, BinaryOp):
            return self.apply_binary_op(node, ctx)
        if isinstance(node, Neg):
            return -self.evaluate(node.operand.value, ctx)
        if isinstance(node, If):
            # Only the selected branch is ever evaluated.
            if self.test(node.cond.value, ctx):
                return self.evaluate(node.then.value, ctx)
            return self.evaluate(node.otherwise.value, ctx)
        if isinstance(node, Func):
            return self.call_function(node, ctx)
        raise TypeError(f"cannot evaluate {node!r}")

    def test(self, node: Pred, ctx: Context) -> bool:
        if not isinstance(node, Comparison):
            raise TypeError(f"cannot test {node!r}")
        lhs = self.evaluate(node.lhs.value, ctx)
        rhs = self.evaluate(node.rhs.value, ctx)
        op = node.op.value
        if op is Cmp.EQ:
            return lhs == rhs
        if op is Cmp.LT:
            return lhs < rhs
        if op is Cmp.LE:
            return lhs <= rhs
        if op is Cmp.GT:
            return lhs > rhs
        return lhs >= rhs

    def call_function(self, node: Func, ctx: Context) -> Fraction:
        func = ctx.get_function(node.name)
        # Arity only depends on the call's syntax, so check it before
        # evaluating (possibly nested) arguments.
        if len(node.args) != len(func.argument_names):
            arglist = node.arglist or (node.name.end, node.name.end)
            raise Arity(
                node.name,
                arglist,
                expected=len(func.argument_names),
                actual=len(node.args),
            )
        values = [self.evaluate(arg.value, ctx) for arg in node.args]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("call %s(%s)", node.name.value, ', '.join(to_string(v) for v in values))
        self.on_call(node.name.value, values)
        try:
            return self.apply(func, values)
        except EvalError as e:
            # Overwritten at every level on the way up, so the outermost
            # call site (the one in the user's input) wins.
            e.call_site = node.name
            raise

    def apply(self, func, values: Sequence[Fraction]) -> Fraction:
        """Evaluate the body of `func` with only its parameters in scope."""
        call_ctx = Context.for_call(func.argument_names, values)
        return self.evaluate(func.value_expr, call_ctx)

    def apply_binary_op(self, node: BinaryOp, ctx: Context) -> Fraction:
        a = self.evaluate(node.lhs.value, ctx)
        b = self.evaluate(node.rhs.value, ctx)
        op = node.op.value
        if op is BinOp.ADD:
            return a + b
        if op is BinOp.SUB:
            return a - b
        if op is BinOp.MUL:
            return a * b
        if b == 0:
            raise DivisionByZero(node.rhs.span)
        if op is BinOp.DIV:
            return a / b
        return truncated_mod(a, b)


def evaluate(expr: Expr, context: Context, on_call: Optional[OnCall] = None) -> Fraction:
    """Evaluate `expr` to an exact rational."""
    return Evaluator(on_call).evaluate(expr, context)


def evaluate_pred(pred: Pred, context: Context, on_call: Optional[OnCall] = None) -> bool:
    """Evaluate the comparison `pred`."""
    return Evaluator(on_call).test(pred, context)

