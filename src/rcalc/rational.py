'''
Helpers around fractions.Fraction, our arbitrary-precision rational.
'''

from fractions import Fraction
import sys

import regex


# Decimal conversion of huge ints is capped at 4300 digits since 3.11; numbers
# here are arbitrary precision both ways.
if hasattr(sys, 'set_int_max_str_digits'):
    sys.set_int_max_str_digits(0)

ZERO = Fraction(0, 1)

# Digits accepted for each radix. Stricter than int(), which would also take
# signs, underscores and surrounding whitespace.
DIGITS = {
    2: regex.compile(r'[01]+'),
    10: regex.compile(r'[0-9]+'),
    16: regex.compile(r'[0-9a-fA-F]+'),
}


class RadixError(ValueError):
    pass


def parse_int(digits, radix):
    '''
    Parse an unsigned integer literal in radix 2, 10 or 16.

    :raises RadixError: on empty or invalid digits.
    '''
    if not digits:
        raise RadixError('cannot parse integer from empty string')
    if DIGITS[radix].fullmatch(digits) is None:
        raise RadixError('invalid digit found in string')
    return int(digits, radix)


def normalize(n):
    '''
    Reduce to lowest terms, denominator positive.

    Fraction already does this on construction; rebuilding from the parts
    keeps it true for anything Fraction-like that made it onto the stack.
    '''
    return Fraction(n.numerator, n.denominator)


def describe(n):
    '''
    Render as "num (0xhex)" or "num/den (0xhex/0xhex)".
    '''
    num, den = n.numerator, n.denominator
    if den == 1:
        return '{num} (0x{num:x})'.format(num=num)
    return '{num}/{den} (0x{num:x}/0x{den:x})'.format(num=num, den=den)
