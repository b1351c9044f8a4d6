from decimal import Decimal
import math

import pytest

from rpn import Expression, InsufficientOperands, InvalidTerm, UnbalancedParentheses


def test_from_infix_keeps_tokens():
    expression = Expression.from_infix('2 + 3 * 4')
    assert expression.tokens == ['2', '3', '4', '*', '+']
    assert str(expression) == '2 3 4 * +'
    assert len(expression) == 5


def test_tokens_are_copied():
    expression = Expression(['1', '2', '+'])
    expression.tokens.append('3')
    assert expression.tokens == ['1', '2', '+']


def test_from_postfix():
    expression = Expression.from_postfix('1 2 2 max')
    assert expression.evaluate() == 2
    assert expression.to_infix() == 'max(1, 2)'


def test_repr():
    assert repr(Expression(['1', '2', '+'])) == "Expression(['1', '2', '+'])"


@pytest.mark.parametrize("infix, value, rendered", [
    ('1 + 1', 2, '1 + 1'),
    ('0.01 + 1.1', Decimal('1.11'), '0.01 + 1.1'),
    ('30 - 10', 20, '30 - 10'),
    ('30.5 - 0.5', 30, '30.5 - 0.5'),
    ('30 * 10', 300, '30 * 10'),
    ('5.5 * 10.1', Decimal('55.55'), '5.5 * 10.1'),
    ('30 / 10', 3, '30 / 10'),
    ('30 / 1.5', 20, '30 / 1.5'),
    ('2 ^ 5', 32, '2 ^ 5'),
    ('1.5 ^ 5', Decimal('7.59375'), '1.5 ^ 5'),
    ('6 % 3', 0, '6 % 3'),
    ('6 % 4', 2, '6 % 4'),
    ('(0 - 7) % 3', 2, '(0 - 7) % 3'),
])
def test_basic_operators(outputs, infix, value, rendered):
    assert outputs(infix) == (value, rendered)


@pytest.mark.parametrize("infix, value, rendered", [
    ('sqrt(9)', 3, 'sqrt(9)'),
    ('sqrt(5+4)', 3, 'sqrt(5 + 4)'),
    ('sqrt(1+3.41)', Decimal('2.1'), 'sqrt(1 + 3.41)'),
    ('max(1, 2)', 2, 'max(1, 2)'),
    ('max(1+3, 2)', 4, 'max(1 + 3, 2)'),
    ('min(1, 2)', 1, 'min(1, 2)'),
    ('min(1+3, 2)', 2, 'min(1 + 3, 2)'),
    ('avg(1, 2, 3)', 2, 'avg(1, 2, 3)'),
    ('avg(1, 2, 3, 5)', Decimal('2.75'), 'avg(1, 2, 3, 5)'),
    ('median(5, 1, 3)', 3, 'median(5, 1, 3)'),
    ('mode(1, 2, 2, 3)', 2, 'mode(1, 2, 2, 3)'),
    ('max(max(1 + 1, 1e1), 5)', 10, 'max(max(1 + 1, 1e1), 5)'),
    ('(sqrt(4+5) + sqrt(3+6)) * 2', 12, '(sqrt(4 + 5) + sqrt(3 + 6)) * 2'),
    ('sqrt((4 + 5) * 4)', 6, 'sqrt((4 + 5) * 4)'),
])
def test_functions(outputs, infix, value, rendered):
    assert outputs(infix) == (value, rendered)


def test_sin():
    expression = Expression.from_infix('sin(180)')
    assert float(expression.evaluate()) == pytest.approx(math.sin(180))
    assert expression.to_infix() == 'sin(180)'


@pytest.mark.parametrize("infix, value, rendered", [
    ('2 + 3 * 4', 14, '2 + (3 * 4)'),
    ('2 + 4 / 2', 4, '2 + (4 / 2)'),
    ('2 + 2 ^ 3', 10, '2 + (2 ^ 3)'),
    ('5 - 4 % 3', 4, '5 - (4 % 3)'),
    ('(5 + 5) * 10', 100, '(5 + 5) * 10'),
    ('5 + (5 * 10)', 55, '5 + (5 * 10)'),
    ('4 - (1 + 1)', 2, '4 - (1 + 1)'),
    ('4 + (1 - 1)', 4, '4 + (1 - 1)'),
    ('4+1-1', 4, '4 + 1 - 1'),
    ('4-1+1', 4, '4 - 1 + 1'),
    ('(1/2)*3', Decimal('1.5'), '1 / 2 * 3'),
    ('(1+2)-3', 0, '1 + 2 - 3'),
    ('(2+3)*(4+5)', 45, '(2 + 3) * (4 + 5)'),
    ('1/(2*4)/(1*2)', Decimal('0.0625'), '1 / (2 * 4) / (1 * 2)'),
    ('1/((2*4)/(1*2))', Decimal('0.25'), '1 / (2 * 4 / (1 * 2))'),
    ('(1/1+2-0)*5^3', 375, '(1 / 1 + 2 - 0) * (5 ^ 3)'),
    ('  ( 1/ 1  +2 -  0   )*   5 ^   3', 375, '(1 / 1 + 2 - 0) * (5 ^ 3)'),
    (' 1+1  -5 ', -3, '1 + 1 - 5'),
    ('2 ^ 3 ^ 2', 512, '2 ^ (3 ^ 2)'),
    ('(2 ^ 3) ^ 2', 64, '(2 ^ 3) ^ 2'),
])
def test_precedence_and_parentheses(outputs, infix, value, rendered):
    assert outputs(infix) == (value, rendered)


@pytest.mark.parametrize("infix, value, rendered", [
    ('4+-(1+1)', 2, '4 + (0 - (1 + 1))'),
    ('4++1', 5, '4 + 1'),
    ('4+-1', 3, '4 + (0 - 1)'),
    ('4+--1', 5, '4 + (0 - (0 - 1))'),
    ('4+(--1)', 5, '4 + (0 - (0 - 1))'),
    ('4/-1', -4, '4 / (0 - 1)'),
    ('-1*-4', 4, '0 - (1 * (0 - 4))'),
    ('-1*(---4)', 4, '0 - (1 * (0 - (0 - (0 - 4))))'),
])
def test_unary_operators(outputs, infix, value, rendered):
    assert outputs(infix) == (value, rendered)


def test_documented_examples():
    expression = Expression.from_infix('max(1+3,2)')
    assert expression.tokens == ['1', '3', '+', '2', '2', 'max']
    assert expression.evaluate() == 4

    expression = Expression.from_infix('4+-1')
    assert expression.tokens == ['4', '0', '1', '-', '+']


@pytest.mark.parametrize("infix", [
    '1 + 2 * 3 - 4 / 5',
    '(1 + 2) * (3 - 4) / 5',
    '2 ^ 3 ^ 2',
    '(2 ^ 3) ^ 2',
    '10 - 4 - 3',
    '10 - (4 - 3)',
    '100 / 10 / 5',
    '100 / (10 / 5)',
    '7 % 4 * 3',
    '7 % (4 * 3)',
    '-2 ^ 2',
    '2 * -3 + 1',
    'max(1 + 3, 2 * 5, 7) - min(4, 2 ^ 3)',
    'sqrt((2 + 7) * 4) / (1 + 2)',
    'mean(1, 2, 3, 4) * median(4, 1, 9) - mode(2, 2, 5)',
    'max(1, -7) % -3',
])
def test_rendered_infix_preserves_value(infix):
    expression = Expression.from_infix(infix)
    reparsed = Expression.from_infix(expression.to_infix())
    assert reparsed.evaluate() == expression.evaluate()


def test_variables_with_bindings():
    expression = Expression.from_infix('$foo * 2 + $bar - $foo')
    assert expression.variables() == ['foo', 'bar']
    assert expression.evaluate({'$foo': 3, 'bar': '0.5'}) == Decimal('3.5')
    assert expression.to_infix() == '$foo * 2 + $bar - $foo'


def test_is_valid():
    assert Expression.from_infix('1 + 2').is_valid()
    assert not Expression(['1', '2']).is_valid()
    assert not Expression(['foo']).is_valid()


def test_unbalanced_parentheses():
    with pytest.raises(UnbalancedParentheses):
        Expression.from_infix('(1+3))')
    with pytest.raises(UnbalancedParentheses):
        Expression.from_infix('((1+3)')


def test_insufficient_function_arguments():
    with pytest.raises(InsufficientOperands):
        Expression.from_infix('sqrt()').evaluate()
    with pytest.raises(InsufficientOperands):
        Expression.from_infix('max()').evaluate()


def test_unknown_words_fail_at_evaluation():
    expression = Expression.from_infix('foo + 1')
    with pytest.raises(InvalidTerm):
        expression.evaluate()
    with pytest.raises(InvalidTerm):
        expression.to_infix()


@pytest.mark.parametrize("infix, value, rendered", [
    ('max(1, -7)', 1, 'max(1, 0 - 7)'),
    ('min(2 * 3, -8)', -8, 'min(2 * 3, 0 - 8)'),
    ('max(9 - 6, -8 ^ 3)', 3, 'max(9 - 6, 0 - (8 ^ 3))'),
])
def test_negative_arguments_after_comma(outputs, infix, value, rendered):
    assert outputs(infix) == (value, rendered)
