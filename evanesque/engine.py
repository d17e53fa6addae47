import logging
import operator
import sys

from evanesque.compiler import TERMINATOR, compile_word
from evanesque.config import DEFAULT_LIMITS
from evanesque.cursor import COMMENT_OPEN, Cursor, skip_comment, tokenize
from evanesque.dictionary import Dictionary
from evanesque.errors import (
    CallStackOverflow,
    DataStackOverflow,
    DivisionByZero,
    LoopStackOverflow,
    SemicolonOutsideDefinition,
    UnknownWord,
    UnmatchedLoopControl,
)
from evanesque.stacks import CallFrame, LoopStack, Stack
from evanesque.utils import divide, is_number, parse_number, wrap

# Python Cookbook: Section 13.12
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

DEFINE = ':'
BEGIN = 'begin'
WHILE = 'while'
REPEAT = 'repeat'

CONTROL_WORDS = [DEFINE, TERMINATOR, BEGIN, WHILE, REPEAT]

BUILTIN_WORDS = [
    '+', '-', '*', '/', '=', '<', '>',
    '.', 'emit', 'key',
    'dup', 'drop', 'swap', 'rot', '-rot', 'over', 'tuck',
]


class Engine:
    """Interpreter state shared by every line read during a session.

    The data, call and loop stacks and the dictionary are created once
    and only ever mutated in place; run() starts a fresh cursor over each
    line it is given.
    """

    def __init__(self, limits=None, rng=None, input=None, output=None):
        self.limits = limits or DEFAULT_LIMITS
        self.data = Stack(self.limits.stack_size, DataStackOverflow)
        self.calls = Stack(self.limits.call_depth, CallStackOverflow)
        self.loops = LoopStack(self.limits.loop_depth, LoopStackOverflow)
        self.dictionary = Dictionary(self.limits.dict_size, self.limits.arena_size, rng)
        self.input = input if input is not None else sys.stdin.buffer
        self.output = output if output is not None else sys.stdout.buffer
        self.cursor = Cursor(())
        self.builtins = self._create_builtins()

    @property
    def stack(self):
        return list(self.data)

    def _create_builtins(self):
        return {
            '+':    self._binary(operator.add),
            '-':    self._binary(operator.sub),
            '*':    self._binary(operator.mul),
            '/':    self._word_divide,
            '=':    self._compare(operator.eq),
            '<':    self._compare(operator.lt),
            '>':    self._compare(operator.gt),
            '.':    self._word_print,
            'emit': self._word_emit,
            'key':  self._word_key,
            'dup':  self._word_dup,
            'drop': self._word_drop,
            'swap': self._word_swap,
            'rot':  self._word_rot,
            '-rot': self._word_neg_rot,
            'over': self._word_over,
            'tuck': self._word_tuck,
        }

    def run(self, line):
        """Execute one line of input.

        Returns once the line's tokens and every call frame pushed while
        running it are exhausted. Errors propagate to the caller.
        """
        self.cursor = Cursor(tokenize(line))
        loop_base = len(self.loops)
        try:
            self._dispatch()
        except Exception:
            # a failed line leaves no frames and the loop depth it started with
            self.calls.clear()
            self.loops.reset(loop_base)
            raise
        finally:
            self.output.flush()

    def _dispatch(self):
        cursor = self.cursor
        while True:
            token = cursor.next()

            # end of line or word body
            if token is None:
                if len(self.calls) == 0:
                    return
                frame = self.calls.pop()
                cursor.restore(frame.cursor)
                self.loops.reset(frame.loop_base)
                log.debug('return (depth {})'.format(len(self.calls)))
                continue

            if token == COMMENT_OPEN:
                skip_comment(cursor)
                continue

            builtin = self.builtins.get(token)
            if builtin is not None:
                builtin()
                continue

            if token == BEGIN:
                self.loops.push(cursor.save())
                continue

            if token == WHILE:
                self._word_while()
                continue

            if token == REPEAT:
                if len(self.loops) == 0:
                    raise UnmatchedLoopControl('repeat without begin')
                cursor.restore(self.loops.peek())
                continue

            if token == DEFINE:
                compile_word(cursor, self.dictionary)
                continue

            if token == TERMINATOR:
                raise SemicolonOutsideDefinition()

            if is_number(token):
                self.data.push(parse_number(token))
                continue

            word = self.dictionary.find(token)
            if word is None:
                raise UnknownWord(token)

            self.calls.push(CallFrame(cursor.save(), len(self.loops)))
            cursor.restore((word.body, 0))
            log.debug('call: {} (depth {})'.format(word.name, len(self.calls)))

    def _word_while(self):
        if len(self.loops) == 0:
            raise UnmatchedLoopControl('while without begin')
        if self.data.pop():
            return

        self.loops.pop()

        # skip past the matching repeat
        scan = self.cursor.copy()
        depth = 1
        for token in scan:
            if token == COMMENT_OPEN:
                skip_comment(scan)
            elif token == BEGIN:
                depth += 1
            elif token == REPEAT:
                depth -= 1
                if depth == 0:
                    self.cursor.restore(scan.save())
                    return

        raise UnmatchedLoopControl("while: missing matching 'repeat'")

    def _binary(self, func):
        # second operand is the one pushed earlier: (b a -- b op a)
        def inner():
            self.data.need(2)
            a = self.data.pop()
            b = self.data.pop()
            self.data.push(wrap(func(b, a)))
        return inner

    def _compare(self, func):
        def inner():
            self.data.need(2)
            a = self.data.pop()
            b = self.data.pop()
            self.data.push(1 if func(b, a) else 0)
        return inner

    def _word_divide(self):
        self.data.need(2)
        if self.data.peek() == 0:
            raise DivisionByZero()
        a = self.data.pop()
        b = self.data.pop()
        self.data.push(divide(b, a))

    def _word_print(self):
        value = self.data.pop()
        self.output.write('{}\n'.format(value).encode())

    def _word_emit(self):
        value = self.data.pop()
        self.output.write(bytes([value & 0xff]))
        self.output.flush()

    def _word_key(self):
        char = self.input.read(1)
        self.data.push(char[0] if char else -1)

    def _word_dup(self):
        self.data.push(self.data.peek())

    def _word_drop(self):
        self.data.pop()

    def _word_swap(self):
        # (b a -- a b)
        self.data.need(2)
        a = self.data.pop()
        b = self.data.pop()
        self.data.push(a)
        self.data.push(b)

    def _word_rot(self):
        # (a b c -- b c a)
        self.data.need(3)
        c = self.data.pop()
        b = self.data.pop()
        a = self.data.pop()
        self.data.push(b)
        self.data.push(c)
        self.data.push(a)

    def _word_neg_rot(self):
        # (a b c -- c a b)
        self.data.need(3)
        c = self.data.pop()
        b = self.data.pop()
        a = self.data.pop()
        self.data.push(c)
        self.data.push(a)
        self.data.push(b)

    def _word_over(self):
        # (b a -- b a b)
        self.data.push(self.data.peek(2))

    def _word_tuck(self):
        # (b a -- a b a)
        self.data.need(2)
        if len(self.data) >= self.data.capacity:
            raise DataStackOverflow()
        a = self.data.pop()
        b = self.data.pop()
        self.data.push(a)
        self.data.push(b)
        self.data.push(a)
