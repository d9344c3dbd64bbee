from fractions import Fraction

from pytest import fixture

from rcalc.calculator import Calculator
from rcalc.lexer import Lexer


@fixture
def lexer():
    return Lexer()


@fixture
def calculator():
    return Calculator()


@fixture
def loaded(calculator):
    '''
    Calculator with a few values already on the stack.
    '''
    calculator.evaluate('1 2 3 4')
    assert calculator.stack == tuple(map(Fraction, (1, 2, 3, 4)))
    return calculator
