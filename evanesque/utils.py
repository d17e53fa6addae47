import re

from evanesque.config import CELL_BITS

CELL_MAX = (1 << (CELL_BITS - 1)) - 1
CELL_MIN = -(1 << (CELL_BITS - 1))

# optional sign, then hex (0x), octal (leading 0) or decimal digits
NUMERAL = re.compile(r'([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)\Z')


def sign_extend(value, bits):
    sign_bit = 1 << (bits - 1)
    return (value & (sign_bit - 1)) - (value & sign_bit)


def wrap(value):
    return sign_extend(value, CELL_BITS)


def clamp(value):
    return max(CELL_MIN, min(CELL_MAX, value))


def divide(a, b):
    """Integer division truncated toward zero, as C does it."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap(q)


def parse_number(token):
    match = NUMERAL.match(token)
    if match is None:
        raise ValueError('not a numeral: {}'.format(token))

    sign, digits = match.groups()
    if digits[:2] in ('0x', '0X'):
        value = int(digits, 16)
    elif len(digits) > 1 and digits[0] == '0':
        value = int(digits, 8)
    else:
        value = int(digits, 10)

    if sign == '-':
        value = -value

    # out of range numerals saturate
    return clamp(value)


def is_number(token):
    return NUMERAL.match(token) is not None
