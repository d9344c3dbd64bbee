import operator

from .lexer import Kind
from .rational import ZERO, normalize
from .util import EvaluationError, ExhaustionError


def _divide(left, right):
    '''
    Exact division, except that dividing by zero gives zero.
    '''
    if right == 0:
        return ZERO
    return left / right


def _bitwise(f):
    '''
    Lift an integer bitwise operator to rationals, rounding the operands.
    '''
    def wrapped(left, right):
        return normalize(f(round(left), round(right)))
    wrapped.__name__ = f.__name__
    return wrapped


# Binary operators, called as f(left, right) with right the former top.
BINARY = {
    Kind.PLUS: operator.__add__,
    Kind.MINUS: operator.__sub__,
    Kind.TIMES: operator.__mul__,
    Kind.DIVIDE: _divide,
    # Divides, like DIVIDE. Kept that way so existing input means the same.
    Kind.EXPONENT: _divide,
    Kind.AND: _bitwise(operator.__and__),
    Kind.OR: _bitwise(operator.__or__),
}

# Stack effects (pops, pushes) of everything but CLEAR_ALL, which empties the
# stack however deep it is.
EFFECTS = {kind: (2, 1) for kind in BINARY}
EFFECTS.update({
    Kind.NUMBER: (0, 1),
    # Pops one, pushes two.
    Kind.DUPLICATE: (1, 2),
    Kind.DROP: (1, 0),
})

EXHAUSTION = 'stack exhaustion would have occurred during evaluation; aborting'


def verify(depth, tokens, span=(0, 0)):
    '''
    Check that running tokens on a stack of depth elements never underflows.

    Pure simulation: no arithmetic, nothing mutated.

    :param span: where to point the error at, usually the whole line.
    :returns: predicted depth after running tokens.
    :raises ExhaustionError: on the first token that would underflow.
    '''
    for token in tokens:
        if token.kind is Kind.CLEAR_ALL:
            depth = 0
            continue
        pops, pushes = EFFECTS[token.kind]
        if depth < pops:
            raise ExhaustionError(EXHAUSTION, span)
        depth += pushes - pops
    return depth


class Machine:
    '''
    Arithmetic stack machine (RPN calculator).

    Runs tokens against a stack it is handed, without verifying them first.
    '''

    def __init__(self, stack=None):
        '''
        :param stack: list to run against, bottom first. Mutated in place.
        '''
        self.stack = [] if stack is None else stack

    def run(self, tokens, span=(0, 0)):
        '''
        Run each token in turn, then normalize the whole stack.

        :raises EvaluationError: if DUPLICATE finds the stack empty.
        '''
        for token in tokens:
            self.step(token, span)
        self.stack[:] = [normalize(n) for n in self.stack]

    def step(self, token, span=(0, 0)):
        kind = token.kind
        if kind is Kind.NUMBER:
            self.stack.append(token.value)
        elif kind is Kind.DUPLICATE:
            if not self.stack:
                raise EvaluationError('incomplete expression, dropped stack',
                                      span)
            top = normalize(self.stack.pop())
            self.stack.extend((top, top))
        elif kind is Kind.DROP:
            if self.stack:
                self.stack.pop()
        elif kind is Kind.CLEAR_ALL:
            self.stack.clear()
        else:
            self._binary(BINARY[kind])

    def _binary(self, f):
        '''
        Pop right then left and push f(left, right). Does nothing if short.
        '''
        # A lone operand is still consumed.
        right = self.stack.pop() if self.stack else None
        left = self.stack.pop() if self.stack else None
        if left is None or right is None:
            return
        self.stack.append(f(left, right))
