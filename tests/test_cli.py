'''
Command line interface tests, non-interactive only
'''

from fractions import Fraction

from rcalc.cli import CLI, ERROR_STYLE, ErrorHighlighter, Renderer
from rcalc.util import ExhaustionError, LexError


def test_expressions(capsys):
    assert CLI().run(args=['-e', '1 2 +', '4 0 /']) == 0
    out, err = capsys.readouterr()
    assert out == '3 (0x3)\n3 (0x3)\n0 (0x0)\n'
    assert err == ''


def test_fraction_output(capsys):
    CLI().run(args=['-e', '1 0x10 /'])
    out, _ = capsys.readouterr()
    assert out == '1/16 (0x1/0x10)\n'


def test_rejected_line(capsys):
    assert CLI().run(args=['-e', '7', '3 $ 5', '1 +']) == 1
    out, err = capsys.readouterr()
    assert out == '7 (0x7)\n7 (0x7)\n8 (0x8)\n'
    assert err == '3 $ 5\n  ^ unexpected token\n'


def test_exhaustion_underlines_line(capsys):
    CLI().run(args=['-e', '1 + +'])
    _, err = capsys.readouterr()
    assert err.splitlines()[-1].startswith('^^^^^ stack exhaustion')


def test_dump(capsys):
    assert CLI().run(args=['-D', '-e', '1 +x %']) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines()[1:] == [
        "NUMBER\t'1'\t(0, 1)\t(0, 1)",
        "error\t'+x'\t(2, 4)\tunexpected trailing characters",
        "CLEAR_ALL\t'%'\t(5, 6)\tall",
    ]


def test_marker():
    renderer = Renderer(indent=3)
    assert renderer.marker(LexError('oops', (2, 4))) == '     ^^ oops'
    # Empty spans still get a caret.
    assert renderer.marker(LexError('empty', (1, 1))) == '    ^ empty'
    assert Renderer().marker(ExhaustionError('no', (0, 3))) == '^^^ no'


def test_renderer_stack(capsys):
    Renderer().stack([Fraction(1), Fraction(-3, 4)])
    out, _ = capsys.readouterr()
    assert out == '1 (0x1)\n-3/4 (0x-3/0x4)\n'


def test_highlight():
    highlighter = ErrorHighlighter()
    assert highlighter.highlight('1 $ 2') == [
        ('', '1 '),
        (ERROR_STYLE, '$'),
        ('', ' 2'),
    ]
    assert highlighter.highlight('0xz') == [('', '0x'), (ERROR_STYLE, 'z')]
    assert highlighter.highlight('1 2 +') == [('', '1 2 +')]
    assert highlighter.highlight('') == []


def test_huge_numbers_keep_session_alive(capsys):
    assert CLI().run(args=['-e', '1' * 5000, '%', '1 2 +']) == 0
    out, err = capsys.readouterr()
    lines = out.splitlines()
    assert lines[0].startswith('1' * 5000 + ' (0x')
    assert lines[-1] == '3 (0x3)'
    assert err == ''
