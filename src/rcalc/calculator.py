from .lexer import Lexer
from .machine import Machine, verify


class Calculator:
    '''
    RPN calculator session: one stack, fed a line at a time.

    A line either runs entirely or leaves the stack as it was.
    '''

    def __init__(self):
        self._stack = []
        self.lexer = Lexer()

    @property
    def stack(self):
        '''
        Snapshot of the stack, bottom first.
        '''
        return tuple(self._stack)

    def __len__(self):
        return len(self._stack)

    def evaluate(self, line):
        '''
        Lex, verify and run line against the stack.

        :raises LexError: on the first bad fragment.
        :raises ExhaustionError: if the line would underflow the stack.
        :raises EvaluationError: if it underflowed anyway.
        '''
        whole = (0, len(line))
        tokens = self.lexer.lex(line)
        verify(len(self._stack), tokens, whole)
        # Work on a copy so a failure halfway cannot leave a partial result.
        machine = Machine(list(self._stack))
        machine.run(tokens, whole)
        self._stack = machine.stack
