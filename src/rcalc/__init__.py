'''
RPN calculator over exact rationals.

Whitespace separated integers (decimal, 0x hex, 0b binary), arithmetic and
bitwise operators, and a handful of stack commands:

    +  -  *  /    arithmetic; dividing by zero gives 0
    ^             divides too, for compatibility
    &  |          bitwise and/or on the operands rounded to integers
    <             duplicate the top of the stack
    !             drop the top of the stack
    %             clear the stack

Every line is checked for stack underflow before anything runs, so a bad line
never leaves the stack half evaluated.
'''

from .calculator import Calculator
from .lexer import Kind, Lexer, Token
from .machine import Machine, verify
from .util import (RPNError, TokenError, LexError, ExhaustionError,
                   EvaluationError, Span)


__all__ = ('Calculator', 'Lexer', 'Machine', 'Kind', 'Token', 'verify',
           'RPNError', 'TokenError', 'LexError', 'ExhaustionError',
           'EvaluationError', 'Span')
