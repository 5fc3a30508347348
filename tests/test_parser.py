import pytest

from mathlang.ast import BinOp, BinaryOp, Cmp, Comparison, Func, Ident, If, Neg, Num, Span
from mathlang.errors import (
    ExtraToken, InvalidToken, ParseError, UnrecognizedEOF, UnrecognizedToken,
)
from mathlang.parser import parse_command, parse_expr, parse_expr_spanned, parse_pred


def num(n, start):
    return Span(Num(Span(n, (start, start + len(str(n))))), (start, start + len(str(n))))


def test_precedence_and_spans():
    expr = parse_expr('2 + 3 * 4')
    assert isinstance(expr, BinaryOp)
    assert expr.lhs == num(2, 0)
    assert expr.op == Span(BinOp.ADD, (2, 3))
    assert expr.rhs.span == (4, 9)
    product = expr.rhs.value
    assert product.op == Span(BinOp.MUL, (6, 7))
    assert product.lhs == num(3, 4)
    assert product.rhs == num(4, 8)


def test_additive_is_left_associative():
    expr = parse_expr('1 - 2 - 3')
    assert expr.op.value is BinOp.SUB
    assert expr.lhs.span == (0, 5)
    assert expr.lhs.value.op.value is BinOp.SUB
    assert expr.rhs == num(3, 8)


def test_multiplicative_is_left_associative():
    expr = parse_expr('8 / 4 % 3')
    assert expr.op.value is BinOp.MOD
    assert expr.lhs.value.op.value is BinOp.DIV


def test_negation_binds_tighter_than_product():
    expr = parse_expr('-2 * 3')
    assert expr.op.value is BinOp.MUL
    assert isinstance(expr.lhs.value, Neg)
    assert expr.lhs.span == (0, 2)
    assert expr.lhs.value.operand == num(2, 1)


def test_double_negation():
    expr = parse_expr('--x')
    assert isinstance(expr, Neg)
    assert isinstance(expr.operand.value, Neg)
    assert expr.operand.value.operand.value == Ident(Span('x', (2, 3)))


def test_parentheses_are_part_of_the_span():
    expr = parse_expr('(1 + 2) * 3')
    assert expr.lhs.span == (0, 7)
    assert isinstance(expr.lhs.value, BinaryOp)


def test_identifier_span():
    expr = parse_expr('3 * x')
    assert expr.rhs == Span(Ident(Span('x', (4, 5))), (4, 5))


def test_function_application():
    expr = parse_expr('f(1, y)')
    assert isinstance(expr, Func)
    assert expr.name == Span('f', (0, 1))
    assert expr.args == (num(1, 2), Span(Ident(Span('y', (5, 6))), (5, 6)))
    assert expr.arglist == (1, 7)


def test_function_application_without_arguments():
    expr = parse_expr('answer()')
    assert isinstance(expr, Func)
    assert expr.args == ()


def test_big_integer_literal():
    expr = parse_expr('123456789012345678901234567890')
    assert expr.value.value == 123456789012345678901234567890


def test_keywords_do_not_swallow_identifiers():
    expr = parse_expr('iffy + elsewhere')
    assert expr.lhs.value == Ident(Span('iffy', (0, 4)))
    assert expr.rhs.value.name.value == 'elsewhere'


def test_whole_expression_span():
    assert parse_expr_spanned(' 1 + 2 ').span == (1, 6)


def test_conditional():
    expr = parse_expr('if x < 2 then 1 else 0')
    assert isinstance(expr, If)
    assert expr.cond.span == (3, 8)
    assert expr.cond.value.op == Span(Cmp.LT, (5, 6))
    assert expr.then == num(1, 14)
    assert expr.otherwise == num(0, 21)


def test_else_if_chain():
    expr = parse_expr('if x = 0 then 0 else if x = 1 then 1 else 2')
    assert isinstance(expr.otherwise.value, If)


def test_conditional_is_not_an_operand():
    with pytest.raises(ParseError):
        parse_expr('2 + if 1 = 1 then 1 else 0')
    with pytest.raises(ParseError):
        parse_expr('-if 1 = 1 then 1 else 0')


def test_parenthesised_conditional_is_an_operand():
    expr = parse_expr('2 + (if 1 = 1 then 1 else 0)')
    assert isinstance(expr.rhs.value, If)
    assert expr.rhs.span == (4, 28)


def test_conditional_as_function_argument():
    expr = parse_expr('f(if 1 = 1 then 1 else 0)')
    assert isinstance(expr.args[0].value, If)


@pytest.mark.parametrize('text,op', [
    ('a = b', Cmp.EQ),
    ('a < b', Cmp.LT),
    ('a <= b', Cmp.LE),
    ('a > b', Cmp.GT),
    ('a >= b', Cmp.GE),
])
def test_comparison_operators(text, op):
    command = parse_command(text)
    assert isinstance(command, Comparison)
    assert command.op.value is op
    assert command.op.span == (2, 2 + len(op.value))


def test_command_may_be_an_expression():
    assert isinstance(parse_command('f(1, 2)'), Func)


def test_command_equation():
    command = parse_command('f(x, y) = x + y')
    assert isinstance(command, Comparison)
    assert command.lhs.span == (0, 7)
    assert command.rhs.span == (10, 15)


def test_predicates_do_not_nest():
    with pytest.raises(ParseError):
        parse_command('1 < 2 < 3')
    with pytest.raises(ParseError):
        parse_command('if 1 = 1 then 2 else 3 = 3')


def test_parse_pred_rejects_bare_expression():
    with pytest.raises(UnrecognizedEOF):
        parse_pred('f(2)')
    assert isinstance(parse_pred('f(2) = 4'), Comparison)


def test_invalid_token():
    with pytest.raises(InvalidToken) as info:
        parse_expr('2 $ 3')
    assert info.value.location == 2
    assert info.value.to_math_error().span == (2, 3)


def test_unexpected_token():
    with pytest.raises(UnrecognizedToken) as info:
        parse_expr('2 + )')
    assert not isinstance(info.value, ExtraToken)
    assert info.value.token == Span(')', (4, 5))


def test_extra_token():
    with pytest.raises(ExtraToken) as info:
        parse_expr('2 3')
    assert info.value.token.span == (2, 3)


def test_unexpected_end_of_input():
    with pytest.raises(UnrecognizedEOF) as info:
        parse_expr('2 +')
    assert info.value.location == 3
    assert info.value.to_math_error().span == (3, 4)


def test_empty_input():
    with pytest.raises(UnrecognizedEOF) as info:
        parse_command('')
    assert info.value.location == 0


def test_span_map_keeps_offsets():
    name = parse_expr('  foo').name
    assert name.map(str.upper) == Span('FOO', (2, 5))
    assert name.slice('  foo') == 'foo'


def test_conditional_on_right_of_comparison():
    command = parse_command('f(x) = if x < 0 then -x else x')
    assert isinstance(command, Comparison)
    assert isinstance(command.rhs.value, If)
    assert command.rhs.span == (7, 30)


def test_conditional_on_left_of_comparison_needs_parentheses():
    with pytest.raises(ParseError):
        parse_pred('if 1 = 1 then 2 else 3 = 3')
    assert isinstance(parse_pred('(if 1 = 1 then 2 else 3) = 3').lhs.value, If)


def test_literal_longer_than_int_conversion_limit():
    expr = parse_expr('7' * 5001)
    assert expr.value.span == (0, 5001)
    assert expr.value.value == 7 * (10 ** 5001 - 1) // 9
