# mathlang package
# A small formula language over exact rationals: parser, evaluator and
# user-facing error model for "guess the function" puzzles.
from .ast import (
    Span, BinOp, Cmp, Expr, Func, Ident, If, BinaryOp, Neg, Num, Pred, Comparison, Command,
)
from .context import Context
from .errors import (
    MathlangError, MathError, ParseError, InvalidToken, UnrecognizedToken, ExtraToken,
    UnrecognizedEOF, InternalParseError, EvalError, UnknownVariable, UnknownFunction,
    NotAVariable, NotAFunction, Arity, DivisionByZero, to_math_error,
)
from .evaluator import Evaluator, evaluate, evaluate_pred
from .funcdef import FuncDef, extract_func_def, parse_func_def
from .parser import parse_command, parse_expr, parse_pred

__all__ = [
    'Span', 'BinOp', 'Cmp', 'Expr', 'Func', 'Ident', 'If', 'BinaryOp', 'Neg', 'Num',
    'Pred', 'Comparison', 'Command',
    'Context',
    'MathlangError', 'MathError', 'ParseError', 'InvalidToken', 'UnrecognizedToken',
    'ExtraToken', 'UnrecognizedEOF', 'InternalParseError', 'EvalError', 'UnknownVariable',
    'UnknownFunction', 'NotAVariable', 'NotAFunction', 'Arity', 'DivisionByZero',
    'to_math_error',
    'Evaluator', 'evaluate', 'evaluate_pred',
    'FuncDef', 'extract_func_def', 'parse_func_def',
    'parse_command', 'parse_expr', 'parse_pred',
]
