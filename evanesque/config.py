from collections import namedtuple

# reference capacities
STACK_SIZE = 4096  # data stack size
CALL_DEPTH = 4096  # call stack depth (no recursion)
LOOP_DEPTH = 4096  # loop stack depth
DICT_SIZE = 256  # max number of user words
ARENA_SIZE = 64 * 1024  # compile-time storage for names / bodies

# cells are native register width on the reference platform
CELL_BITS = 64

Limits = namedtuple(
    'Limits',
    'stack_size call_depth loop_depth dict_size arena_size',
    defaults=(STACK_SIZE, CALL_DEPTH, LOOP_DEPTH, DICT_SIZE, ARENA_SIZE),
)

DEFAULT_LIMITS = Limits()
