from os import isatty, path
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import traceback

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.lexers import Lexer as PromptLexer

from .calculator import Calculator
from .lexer import Lexer
from .machine import EFFECTS
from .rational import describe
from .util import TokenError


ERROR_STYLE = 'ansibrightred'
PROMPT_STYLE = 'ansimagenta'


class ErrorHighlighter(PromptLexer):
    '''
    Colour every fragment that would fail to lex, as it is typed.
    '''

    def __init__(self, lexer=None):
        self.lexer = lexer or Lexer()

    def highlight(self, line):
        '''
        Split line into (style, text) pairs, bad fragments in ERROR_STYLE.
        '''
        fragments = []
        last = 0
        for error in self.lexer.errors(line):
            start, end = error.span
            fragments.append(('', line[last:start]))
            fragments.append((ERROR_STYLE, line[start:end]))
            last = end
        fragments.append(('', line[last:]))
        return [fragment for fragment in fragments if fragment[1]]

    def lex_document(self, document):
        lines = document.lines

        def get_line(lineno):
            try:
                return self.highlight(lines[lineno])
            except IndexError:
                return []
        return get_line


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def _history(self):
        if self.history is None:
            return InMemoryHistory()
        return FileHistory(path.expanduser(self.history))

    def _message(self):
        '''
        Colour the prompt, but not the whitespace after it.
        '''
        bare = self.prompt.rstrip()
        return FormattedText([(PROMPT_STYLE, bare),
                              ('', self.prompt[len(bare):])])

    def __iter__(self):
        try:
            session = PromptSession(message=self._message(),
                                    lexer=ErrorHighlighter(),
                                    history=self._history(),
                                    # No completion: no names, and every
                                    # token is a character or a number.
                                    completer=None,
                                    enable_suspend=True,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class Renderer:
    '''
    Print the stack, and point at errors in the line that caused them.
    '''

    def __init__(self, indent=0, colour=False, echo=False):
        '''
        :param indent: columns before the line starts on screen, e.g., prompt.
        :param colour: colour error markers.
        :param echo: repeat the offending line above the marker, when it is
            not already on screen.
        '''
        self.indent = indent
        self.colour = colour
        self.echo = echo

    def stack(self, stack):
        for n in stack:
            print(describe(n))

    def marker(self, error):
        '''
        Return the caret line underlining error's span, with the message.
        '''
        start, end = error.span
        return '{}{} {}'.format(' ' * (self.indent + start),
                                '^' * max(end - start, 1),
                                error.message)

    def error(self, line, error):
        if self.echo:
            print(' ' * self.indent + line, file=sys.stderr)
        marker = self.marker(error)
        if self.colour:
            print_formatted_text(FormattedText([(ERROR_STYLE, marker)]),
                                 file=sys.stderr)
        else:
            print(marker, file=sys.stderr)


class CLI:
    '''
    Command line interface to RPN calculator.
    '''

    DEFAULT_PROMPT = '>> '
    HISTORY_FILE = '~/.rcalc_history'

    def dumper(self):
        '''
        Dump every fragment's kind, text, span, and stack effect.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(text)>\t<span>\t<pops,pushes>')
        for line in self.args.expressions:
            for span, fragment in lexer.fragments(line):
                try:
                    kind = lexer.token(fragment).kind
                except TokenError as e:
                    print('error', repr(fragment), tuple(span),
                          e.message, sep='\t')
                    continue
                effect = EFFECTS.get(kind, 'all')
                print(kind.name, repr(fragment), tuple(span), effect,
                      sep='\t')
        return 0

    def executor(self):
        '''
        Run calculator, printing the stack after every line.

        Returns number of lines rejected.
        '''
        calculator = Calculator()
        renderer = self._renderer()
        failures = 0
        for line in self.args.expressions:
            line = line.rstrip('\r\n')
            try:
                calculator.evaluate(line)
            # Abort entire line; the stack is untouched.
            except TokenError as e:
                failures += 1
                if self.args.verbose:
                    traceback.print_exception(type(e), e, e.__traceback__,
                                              file=sys.stderr)
                renderer.error(line, e)
            renderer.stack(calculator.stack)
        return failures

    def _renderer(self):
        if self._interactive():
            return Renderer(indent=len(self.args.expressions.prompt),
                            colour=True)
        return Renderer(echo=True)

    def _prompting_input(self):
        '''
        Return prompting input if either:

        - prompt explicitly specified.
        - both stdin/out are a tty

        Otherwise plain stdin.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            history = None if self.args.no_history else self.args.history
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='show tracebacks on errors')
        self.argument_parser.add_argument('-H', '--history',
                                          default=self.HISTORY_FILE,
                                          help='interactive history file')
        self.argument_parser.add_argument('--no-history',
                                          action='store_true',
                                          help='keep history in memory only')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Returns exit status: 1 if a non-interactive line was rejected.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        failures = self.args.action()
        if failures and not self._interactive():
            return 1
        return 0


def main():
    try:
        exit(CLI().run())
    except KeyboardInterrupt:
        exit(1)
