from typing import NamedTuple


class Span(NamedTuple):
    '''
    Half-open [start, end) range of character (not byte) offsets into a line.

    Same as byte offsets for ASCII lines only.
    '''
    start: int
    end: int

    def shift(self, offset):
        '''
        Return this span moved right by offset, e.g., fragment to line.
        '''
        return Span(self.start + offset, self.end + offset)

    def of(self, line):
        '''
        Return the substring of line covered by this span.
        '''
        return line[self.start:self.end]


class RPNError(Exception):
    pass


class TokenError(RPNError):
    '''
    User error tied to a part of the input line.
    '''

    def __init__(self, message, span):
        super().__init__(message, Span(*span))
        self.message = message
        self.span = Span(*span)

    def shift(self, offset):
        '''
        Return the same error with its span moved right by offset.
        '''
        return type(self)(self.message, self.span.shift(offset))

    def __str__(self):
        return self.message

    def __eq__(self, other):
        return (type(self) is type(other) and
                (self.message, self.span) == (other.message, other.span))

    __hash__ = RPNError.__hash__


class LexError(TokenError):
    '''
    Malformed fragment: bad literal, unknown symbol, trailing characters.
    '''


class ExhaustionError(TokenError):
    '''
    Line would pop from an empty stack. Raised before anything runs.
    '''


class EvaluationError(TokenError):
    '''
    Stack underflow while running, despite the line having been verified.

    Means the verifier and the machine disagree; never the user's fault.
    '''
