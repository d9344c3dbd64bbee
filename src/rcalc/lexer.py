from enum import Enum
from fractions import Fraction
from functools import reduce
from typing import NamedTuple, Optional
import operator

import regex

from .rational import RadixError, parse_int
from .util import LexError, Span


class Kind(Enum):
    NUMBER = 'number'
    MINUS = 'minus'
    PLUS = 'plus'
    TIMES = 'times'
    DIVIDE = 'divide'
    EXPONENT = 'exponent'
    AND = 'and'
    OR = 'or'
    DUPLICATE = 'duplicate'
    DROP = 'drop'
    CLEAR_ALL = 'clear all'


class Token(NamedTuple):
    kind: Kind
    value: Optional[Fraction] = None

    def __repr__(self):
        if self.kind is Kind.NUMBER:
            return 'Token({}, {})'.format(self.kind.name, self.value)
        return 'Token({})'.format(self.kind.name)


class Lexer:
    '''
    Lexer for the whitespace separated RPN calculator language.

    Holds no state; one instance can lex any number of lines.
    '''

    # Single character operators and stack commands.
    SYMBOLS = {
        '%': Kind.CLEAR_ALL,
        '!': Kind.DROP,
        '<': Kind.DUPLICATE,
        '^': Kind.EXPONENT,
        '/': Kind.DIVIDE,
        '*': Kind.TIMES,
        '+': Kind.PLUS,
        '-': Kind.MINUS,
        '|': Kind.OR,
        '&': Kind.AND,
    }
    # Radix prefixes for integer literals. No prefix means decimal.
    PREFIXES = {
        '0x': 16,
        '0b': 2,
    }

    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.UNICODE},
                   0)
    # Whatever sits between whitespace, wherever it is on the line.
    FRAGMENT = regex.compile(r'\S+', flags=FLAGS)
    # Only ASCII digits start a number; str.isdigit() would take '٣' too.
    DIGIT = regex.compile(r'[0-9]', flags=FLAGS)

    def fragments(self, line):
        '''
        Yield (span, text) of each whitespace separated fragment of line.
        '''
        for match in type(self).FRAGMENT.finditer(line):
            yield Span(*match.span()), match.group(0)

    def scan(self, line):
        '''
        Yield a Token or a LexError for every fragment of line, left to right.

        Does not stop on errors. Error spans are relative to line.
        '''
        for span, fragment in self.fragments(line):
            try:
                yield self.token(fragment)
            except LexError as e:
                yield e.shift(span.start)

    def lex(self, line):
        '''
        Take a line and return all its tokens.

        :raises LexError: for the first bad fragment, span relative to line.
        '''
        tokens = []
        for result in self.scan(line):
            if isinstance(result, LexError):
                raise result
            tokens.append(result)
        return tokens

    def errors(self, line):
        '''
        Return every LexError on line, e.g., for highlighting.
        '''
        return [result
                for result
                in self.scan(line)
                if isinstance(result, LexError)]

    def token(self, fragment):
        '''
        Convert a single fragment into a Token.

        :raises LexError: span relative to fragment.
        '''
        if not fragment:
            raise LexError('unexpected empty token', (0, 0))
        first = fragment[0]
        kind = type(self).SYMBOLS.get(first)
        if kind is not None:
            if len(fragment) != 1:
                raise LexError('unexpected trailing characters',
                               (1, len(fragment)))
            return Token(kind)
        if type(self).DIGIT.match(first):
            return self._number(fragment)
        raise LexError('unexpected token', (0, len(fragment)))

    def _number(self, fragment):
        '''
        Parse an integer literal, with optional radix prefix, into a Number.
        '''
        radix = type(self).PREFIXES.get(fragment[:2])
        start = 0 if radix is None else 2
        try:
            n = parse_int(fragment[start:], radix or 10)
        except RadixError as e:
            raise LexError(str(e), (start, len(fragment))) from e
        return Token(Kind.NUMBER, Fraction(n, 1))
