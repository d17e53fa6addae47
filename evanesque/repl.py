import argparse
import logging
import os
import random
import sys
import time

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.lexers import PygmentsLexer
from prompt_toolkit.styles import style_from_pygments_cls
from pygments.styles import get_style_by_name
import serial

from evanesque import __version__
from evanesque.config import Limits, ARENA_SIZE, CALL_DEPTH, DICT_SIZE, LOOP_DEPTH, STACK_SIZE
from evanesque.engine import Engine
from evanesque.errors import EvanesqueError
from evanesque.lexer import EvanesqueLexer

# Python Cookbook: Section 13.12
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

HISTORY_PATH = os.path.join(os.path.expanduser('~'), '.evanesque_history')
USART_BAUD = 115200


def decode(line):
    return line.decode('utf-8', 'surrogateescape')


def run_line(engine, line, keep_going=False, errors=None):
    try:
        engine.run(line)
    except EvanesqueError as e:
        if not keep_going:
            raise
        print(e, file=errors or sys.stderr)


def run_stream(engine, stream, keep_going=False, errors=None):
    """Feed a binary stream to the engine one line at a time.

    The engine's key word reads from the same stream, so it only sees
    bytes the line reader has not consumed yet.
    """
    for line in iter(stream.readline, b''):
        run_line(engine, decode(line), keep_going=keep_going, errors=errors)


def run_interactive(engine, keep_going=False, style='default'):
    # prompt_toolkit only holds the terminal during prompt(), so key reads
    # stdin in cooked mode and sees input a line at a time
    session = PromptSession(
        history=FileHistory(HISTORY_PATH),
        lexer=PygmentsLexer(EvanesqueLexer),
        style=style_from_pygments_cls(get_style_by_name(style)),
        include_default_pygments_style=False,
    )

    while True:
        try:
            line = session.prompt('> ')
        except (EOFError, KeyboardInterrupt):
            break
        run_line(engine, line, keep_going=keep_going)


def open_port(url, baud=USART_BAUD):
    # accepts device names as well as pyserial URLs (loop://, socket://, ...)
    log.info('opening port: {} at {} baud'.format(url, baud))
    return serial.serial_for_url(url, baudrate=baud, timeout=None)


def cli_main(argv=None):
    parser = argparse.ArgumentParser(
        description='Interpret a tiny stack language whose words vanish as new ones are defined',
        prog='evanesque',
    )
    parser.add_argument('input', type=str, nargs='?', help='input source file (default: standard input)')
    parser.add_argument('-s', '--seed', type=int, help='seed for the word erasure generator (default: current time)')
    parser.add_argument('-k', '--keep-going', action='store_true', help='report errors and continue with the next line')
    parser.add_argument('-p', '--port', type=str, help='serve the interpreter over a serial port or pyserial URL')
    parser.add_argument('-b', '--baud', type=int, default=USART_BAUD, help='serial baud rate (default {})'.format(USART_BAUD))
    parser.add_argument('--stack-size', type=int, default=STACK_SIZE, help='data stack size (default {})'.format(STACK_SIZE))
    parser.add_argument('--call-depth', type=int, default=CALL_DEPTH, help='call stack depth (default {})'.format(CALL_DEPTH))
    parser.add_argument('--loop-depth', type=int, default=LOOP_DEPTH, help='loop stack depth (default {})'.format(LOOP_DEPTH))
    parser.add_argument('--dict-size', type=int, default=DICT_SIZE, help='max number of user words (default {})'.format(DICT_SIZE))
    parser.add_argument('--arena-size', type=int, default=ARENA_SIZE, help='bytes of compiled word storage (default {})'.format(ARENA_SIZE))
    parser.add_argument('--style', type=str, default='default', help='pygments style for the interactive prompt')
    parser.add_argument('-v', '--verbose', action='store_true', help='log definitions and erasures to stderr')
    parser.add_argument('--version', action='store_true', help='print interpreter version and exit')
    args = parser.parse_args(argv)

    if args.version:
        version = 'evanesque {}'.format(__version__)
        raise SystemExit(version)

    # stdout carries program output
    log_fmt = '%(message)s'
    if args.verbose:
        logging.basicConfig(format=log_fmt, level=logging.INFO, stream=sys.stderr)

    if args.input and not os.path.exists(args.input):
        raise SystemExit('missing input file: {}'.format(args.input))

    limits = Limits(
        stack_size=args.stack_size,
        call_depth=args.call_depth,
        loop_depth=args.loop_depth,
        dict_size=args.dict_size,
        arena_size=args.arena_size,
    )

    # seeded once, before any input is processed
    seed = args.seed if args.seed is not None else time.time_ns()
    log.info('random seed: {}'.format(seed))
    rng = random.Random(seed)

    try:
        if args.port:
            with open_port(args.port, args.baud) as port:
                engine = Engine(limits, rng, input=port, output=port)
                run_stream(engine, port, keep_going=args.keep_going)
        elif args.input:
            with open(args.input, 'rb') as source:
                engine = Engine(limits, rng, input=source)
                run_stream(engine, source, keep_going=args.keep_going)
        elif sys.stdin.isatty():
            engine = Engine(limits, rng)
            run_interactive(engine, keep_going=args.keep_going, style=args.style)
        else:
            engine = Engine(limits, rng)
            run_stream(engine, sys.stdin.buffer, keep_going=args.keep_going)
    except EvanesqueError as e:
        raise SystemExit(e)


if __name__ == '__main__':
    cli_main()
