"""Parser for mathlang formulas.

The source text is fed into a Lark LALR parser configured with the grammar
below, and the resulting parse tree is transformed into the AST defined in
`mathlang.ast`. Every transformer callback returns a `Span` built from the
positions Lark propagates onto the tree, so each node and token in the
result knows where in the input it came from.

Lark's own exceptions never leave this module: they are translated into
the `ParseError` family from `mathlang.errors`.

Identifiers are ASCII `[A-Za-z_][A-Za-z0-9_]*` and case sensitive. The
words `if`, `then` and `else` are reserved.
"""

from __future__ import annotations

import logging

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import (
    LarkError, UnexpectedCharacters, UnexpectedEOF, UnexpectedToken, VisitError,
)

from .ast import (
    BinOp, BinaryOp, Cmp, Command, Comparison, Expr, Func, Ident, If, Neg, Num,
    Pred, Span,
)
from .errors import (
    ExtraToken, InternalParseError, InvalidToken, ParseError, UnrecognizedEOF,
    UnrecognizedToken,
)
from .types import digits_to_int

logger = logging.getLogger(__name__)


MATHLANG_GRAMMAR = r"""
    command: pred | expr

    pred: sum CMP expr

    // A conditional is never an arithmetic operand. It may be the whole
    // expression, the right side of a comparison or a function argument;
    // anywhere else it must be wrapped in parentheses.
    ?expr: cond | sum
    cond: "if" pred "then" expr "else" expr

    ?sum: product
        | sum (PLUS | MINUS) product -> binop
    ?product: unary
            | product (STAR | SLASH | PERCENT) unary -> binop
    ?unary: atom
          | MINUS unary -> neg
    ?atom: num | ident | call | paren

    num: NUMBER
    ident: IDENT
    call: IDENT "(" [args] ")"
    args: expr ("," expr)*
    paren: "(" expr ")"

    // Tokens
    CMP: "<=" | ">=" | "<" | ">" | "="
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    NUMBER: /[0-9]+/
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/

    %import common.WS
    %ignore WS
"""


MATHLANG_PARSER = Lark(
    MATHLANG_GRAMMAR,
    parser='lalr',
    lexer='basic',
    start=['command', 'expr', 'pred'],
    propagate_positions=True,
    maybe_placeholders=True,
)


_BINOPS = {
    'PLUS': BinOp.ADD,
    'MINUS': BinOp.SUB,
    'STAR': BinOp.MUL,
    'SLASH': BinOp.DIV,
    'PERCENT': BinOp.MOD,
}

_CMPS = {cmp.value: cmp for cmp in Cmp}


def _bounds(meta):
    return (meta.start_pos, meta.end_pos)


def _token_span(token: Token, value) -> Span:
    return Span(value, (token.start_pos, token.end_pos))


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into spanned AST nodes."""

    # Tokens
    def NUMBER(self, token):
        return _token_span(token, digits_to_int(token.value))

    def IDENT(self, token):
        return _token_span(token, str(token.value))

    def CMP(self, token):
        return _token_span(token, _CMPS[token.value])

    def _binop_token(self, token):
        return _token_span(token, _BINOPS[token.type])

    PLUS = MINUS = STAR = SLASH = PERCENT = _binop_token

    # Rules
    def command(self, items):
        return items[0]

    @v_args(meta=True)
    def pred(self, meta, items):
        lhs, op, rhs = items
        return Span(Comparison(lhs, op, rhs), _bounds(meta))

    @v_args(meta=True)
    def cond(self, meta, items):
        pred, then, otherwise = items
        return Span(If(pred, then, otherwise), _bounds(meta))

    @v_args(meta=True)
    def binop(self, meta, items):
        lhs, op, rhs = items
        return Span(BinaryOp(lhs, op, rhs), _bounds(meta))

    @v_args(meta=True)
    def neg(self, meta, items):
        _, operand = items
        return Span(Neg(operand), _bounds(meta))

    @v_args(meta=True)
    def num(self, meta, items):
        return Span(Num(items[0]), _bounds(meta))

    @v_args(meta=True)
    def ident(self, meta, items):
        return Span(Ident(items[0]), _bounds(meta))

    @v_args(meta=True)
    def call(self, meta, items):
        name, args = items
        arglist = (name.end, meta.end_pos)
        return Span(Func(name, tuple(args or ()), arglist), _bounds(meta))

    def args(self, items):
        return list(items)

    @v_args(meta=True)
    def paren(self, meta, items):
        # Re-anchor the inner expression so its span includes the parentheses.
        return Span(items[0].value, _bounds(meta))


def _translate(error: LarkError, source: str) -> ParseError:
    if isinstance(error, UnexpectedCharacters):
        return InvalidToken(error.pos_in_stream)
    if isinstance(error, UnexpectedToken):
        token = error.token
        expected = tuple(sorted(error.expected))
        if token.type == '$END':
            # Lark borrows the position of the last real token for $END.
            location = token.end_pos if token.end_pos is not None else (token.start_pos or 0)
            return UnrecognizedEOF(location, expected)
        span = Span(str(token.value), (token.start_pos, token.end_pos))
        if '$END' in error.expected:
            return ExtraToken(span, expected)
        return UnrecognizedToken(span, expected)
    if isinstance(error, UnexpectedEOF):
        return UnrecognizedEOF(len(source.rstrip()), tuple(sorted(error.expected)))
    logger.error("internal parser error on %r: %r", source, error)
    return InternalParseError(str(error))


def _parse(source: str, start: str):
    try:
        tree = MATHLANG_PARSER.parse(source, start=start)
        result = ASTTransformer().transform(tree)
    except VisitError as e:
        logger.error("internal error while building the AST for %r: %r", source, e.orig_exc)
        raise InternalParseError(str(e.orig_exc)) from e
    except LarkError as e:
        raise _translate(e, source) from e
    return result


def parse_expr_spanned(source: str) -> Span[Expr]:
    """Parse an expression, keeping the span of the whole expression."""
    return _parse(source, 'expr')


def parse_expr(source: str) -> Expr:
    """Parse a single expression.

    Raises a `ParseError` subclass if `source` is not a valid expression.
    """
    return parse_expr_spanned(source).value


def parse_pred(source: str) -> Pred:
    """Parse a single comparison such as `f(x) = x * x`."""
    return _parse(source, 'pred').value


def parse_command(source: str) -> Command:
    """Parse a line of input as either a comparison or an expression."""
    return _parse(source, 'command').value
