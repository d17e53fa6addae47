import io

import pytest

from evanesque.config import Limits
from evanesque.cursor import tokenize
from evanesque.engine import Engine
from evanesque.errors import (
    CallStackOverflow,
    DataStackOverflow,
    DivisionByZero,
    EvanesqueError,
    LoopStackOverflow,
    SemicolonOutsideDefinition,
    StackUnderflow,
    UnknownWord,
    UnmatchedLoopControl,
    UnterminatedDefinition,
)
from evanesque.utils import CELL_MAX, CELL_MIN


class FixedRandom:

    def __init__(self, index):
        self.index = index

    def randrange(self, n):
        return min(self.index, n - 1)


def make_engine(input=b'', limits=None, rng=None, words=None):
    engine = Engine(limits=limits, rng=rng, input=io.BytesIO(input), output=io.BytesIO())
    for name, body in (words or {}).items():
        engine.dictionary.define(name, tokenize(body))
    return engine


def run(source, **kwargs):
    engine = make_engine(**kwargs)
    for line in source.splitlines():
        engine.run(line)
    return engine


def output(engine):
    return engine.output.getvalue()


@pytest.mark.parametrize(
    'source,                  expected', [
    ('1 2 +',                 [3]),
    ('10 3 -',                [7]),
    ('3 10 -',                [-7]),
    ('6 7 *',                 [42]),
    ('7 2 /',                 [3]),
    ('-7 2 /',                [-3]),
    ('7 -2 /',                [-3]),
    ('3 3 =',                 [1]),
    ('3 4 =',                 [0]),
    ('1 2 <',                 [1]),
    ('2 1 <',                 [0]),
    ('2 1 >',                 [1]),
    ('1 2 >',                 [0]),
    ('0x7fffffffffffffff 1 +', [CELL_MIN]),
    ('-0x7fffffffffffffff 2 -', [CELL_MAX]),
])
def test_arithmetic(source, expected):
    assert run(source).stack == expected


def test_division_by_zero():
    engine = make_engine()
    with pytest.raises(DivisionByZero):
        engine.run('1 0 /')
    assert engine.stack == [1, 0]


@pytest.mark.parametrize(
    'source,          expected', [
    ('1 dup',         [1, 1]),
    ('1 2 drop',      [1]),
    ('1 2 swap',      [2, 1]),
    ('1 2 3 rot',     [2, 3, 1]),
    ('1 2 3 -rot',    [3, 1, 2]),
    ('1 2 over',      [1, 2, 1]),
    ('1 2 tuck',      [2, 1, 2]),
    ('0 1 2 3 rot',   [0, 2, 3, 1]),
])
def test_stack_shuffling(source, expected):
    assert run(source).stack == expected


@pytest.mark.parametrize(
    'source', [
    'dup',
    'drop',
    '1 swap',
    '1 2 rot',
    '1 2 -rot',
    '1 over',
    '1 tuck',
    '1 +',
    '1 -',
    '1 *',
    '1 /',
    '1 =',
    '1 <',
    '1 >',
    '.',
    'emit',
])
def test_stack_underflow(source):
    engine = make_engine()
    with pytest.raises(StackUnderflow):
        engine.run(source)
    # failing operations leave the stack untouched
    assert engine.stack == [int(t) for t in source.split()[:-1]]


@pytest.mark.parametrize(
    'source', [
    '42 .',
    '0x2A .',
    '052 .',
])
def test_numeral_round_trip(source):
    assert output(run(source)) == b'42\n'


def test_print():
    engine = run('1 -2 3 . . .')
    assert output(engine) == b'3\n-2\n1\n'
    assert engine.stack == []


def test_emit():
    assert output(run('72 emit 105 emit')) == b'Hi'


def test_emit_low_byte():
    assert output(run('328 emit -1 emit')) == b'H\xff'


def test_key():
    engine = run('key key key', input=b'AB')
    assert engine.stack == [65, 66, -1]


def test_comments():
    engine = run('1 /* 2 3 */ 4 + .')
    assert output(engine) == b'5\n'


def test_unterminated_comment_ends_line():
    engine = run('1 /* 2 3\n4')
    assert engine.stack == [1, 4]


def test_state_persists_across_lines():
    engine = run('1 2\n+\n.')
    assert output(engine) == b'3\n'


def test_unknown_word_keeps_prior_output():
    engine = make_engine()
    with pytest.raises(UnknownWord) as e:
        engine.run('1 . foo 2 .')
    assert str(e.value) == 'unknown word: foo'
    assert output(engine) == b'1\n'


@pytest.mark.parametrize(
    'source', [
    '08',
    '0x',
    '1.5',
])
def test_not_a_numeral(source):
    with pytest.raises(UnknownWord):
        run(source)


def test_semicolon_outside_definition():
    with pytest.raises(SemicolonOutsideDefinition):
        run(';')


def test_word_call():
    engine = run('7 sq .', words={'sq': 'dup *'})
    assert output(engine) == b'49\n'


def test_nested_word_call():
    engine = run('2 quad .', words={'sq': 'dup *', 'quad': 'sq sq'})
    assert output(engine) == b'16\n'


def test_word_call_returns_to_caller():
    engine = run('1 greet 3 .', words={'greet': '2 .'})
    assert output(engine) == b'2\n3\n'
    assert engine.stack == [1]
    assert len(engine.calls) == 0


def test_shadowed_word_uses_first_definition():
    engine = run('x', words={'x': '1'})
    engine.dictionary.define('x', ['2'])
    engine.run('x')
    assert engine.stack == [1, 1]


def test_builtins_cannot_be_redefined():
    engine = run('3 dup', words={'dup': '99'})
    assert engine.stack == [3, 3]


def test_defined_word_vanishes_from_empty_dictionary():
    engine = make_engine()
    engine.run(': sq dup * ;')
    assert len(engine.dictionary) == 0
    with pytest.raises(UnknownWord):
        engine.run('3 sq')


def test_define_and_call():
    engine = make_engine(rng=FixedRandom(0), words={'spare': ''})
    engine.run(': count 0 begin dup 5 < while dup . 1 + repeat ; count')
    assert output(engine) == b'0\n1\n2\n3\n4\n'
    assert engine.stack == [5]
    assert engine.dictionary.names() == ['count']


def test_define_inside_word():
    engine = run('maker 4 sq .', rng=FixedRandom(0), words={'spare': '', 'maker': ': sq dup * ;'})
    assert output(engine) == b'16\n'


def test_unterminated_definition():
    with pytest.raises(UnterminatedDefinition):
        run(': w 1 2')


def test_loop():
    engine = run('3 begin dup while dup . 1 - repeat')
    assert output(engine) == b'3\n2\n1\n'
    assert engine.stack == [0]
    assert len(engine.loops) == 0


def test_loop_zero_iterations():
    engine = run('0 begin dup while 99 . repeat .')
    assert output(engine) == b'0\n'


def test_nested_loops():
    source = '0 begin dup 2 < while 0 begin dup 2 < while over . dup . 1 + repeat drop 1 + repeat drop'
    engine = run(source)
    assert output(engine) == b'0\n0\n0\n1\n1\n0\n1\n1\n'
    assert engine.stack == []
    assert len(engine.loops) == 0


def test_loop_exit_skips_commented_repeat():
    engine = run('0 begin dup while /* repeat */ 1 repeat .')
    assert output(engine) == b'0\n'


def test_while_without_begin():
    with pytest.raises(UnmatchedLoopControl) as e:
        run('1 while')
    assert str(e.value) == 'while without begin'


def test_repeat_without_begin():
    with pytest.raises(UnmatchedLoopControl) as e:
        run('repeat')
    assert str(e.value) == 'repeat without begin'


def test_while_missing_repeat():
    with pytest.raises(UnmatchedLoopControl) as e:
        run('begin 0 while 1 2')
    assert str(e.value) == "while: missing matching 'repeat'"


def test_unterminated_loop_abandoned_on_return():
    engine = run('half', words={'half': '1 begin 2'})
    assert engine.stack == [1, 2]
    assert len(engine.loops) == 0


def test_loop_marker_carries_over_lines():
    engine = run('begin')
    assert len(engine.loops) == 1
    engine.run('0 while 99 . repeat 7 .')
    assert output(engine) == b'7\n'
    assert len(engine.loops) == 0


def test_repeat_resumes_in_previous_line():
    # the marker points at the end of the first line, so repeat ends the second
    engine = run('5 begin\ndup 0 > while dup . 1 - repeat 99 .')
    assert output(engine) == b'5\n'
    assert engine.stack == [4]
    assert len(engine.loops) == 1


def test_data_stack_overflow():
    engine = make_engine(limits=Limits(stack_size=2))
    with pytest.raises(DataStackOverflow):
        engine.run('1 2 3')
    assert engine.stack == [1, 2]


def test_tuck_overflow_leaves_stack():
    engine = make_engine(limits=Limits(stack_size=2))
    with pytest.raises(DataStackOverflow):
        engine.run('1 2 tuck')
    assert engine.stack == [1, 2]


def test_loop_stack_overflow():
    with pytest.raises(LoopStackOverflow):
        run('begin begin begin', limits=Limits(loop_depth=2))


def test_recursion_overflows_call_stack():
    with pytest.raises(CallStackOverflow):
        run('forever', limits=Limits(call_depth=8), words={'forever': 'forever'})


def test_error_abandons_call_frames():
    engine = make_engine(words={'bad': 'begin nope'})
    engine.run('begin')
    with pytest.raises(UnknownWord):
        engine.run('bad')
    assert len(engine.calls) == 0
    assert len(engine.loops) == 1


def test_errors_share_base_class():
    with pytest.raises(EvanesqueError):
        run('nope')


def test_return_restores_callers_loop_marker():
    engine = run('begin leave', words={'leave': '0 while repeat'})
    assert len(engine.loops) == 1


def test_callers_loop_survives_inner_loop_exit():
    engine = run('2 begin leave dup while dup . 1 - repeat drop', words={'leave': '0 while repeat'})
    assert output(engine) == b'2\n1\n'
    assert engine.stack == []
    assert len(engine.loops) == 0


def test_failed_line_resets_loop_depth():
    engine = make_engine()
    with pytest.raises(UnknownWord):
        engine.run('begin nope')
    assert len(engine.loops) == 0
