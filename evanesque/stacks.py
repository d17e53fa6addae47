from collections import deque, namedtuple

from evanesque.errors import StackUnderflow

CallFrame = namedtuple('CallFrame', 'cursor loop_base')


class Stack:

    def __init__(self, capacity, overflow):
        self.capacity = capacity
        self.overflow = overflow
        self.items = deque()

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __repr__(self):
        return 'Stack({})'.format(list(self.items))

    def push(self, item):
        if len(self.items) >= self.capacity:
            raise self.overflow()
        self.items.append(item)

    def pop(self):
        if len(self.items) == 0:
            raise StackUnderflow()
        return self.items.pop()

    def need(self, n):
        if len(self) < n:
            raise StackUnderflow()

    def peek(self, n=1):
        """Return the n-th item from the top without removing it."""
        self.need(n)
        return self.items[-n]

    def truncate(self, depth):
        while len(self.items) > depth:
            self.items.pop()

    def clear(self):
        self.items.clear()


class LoopStack(Stack):
    """Loop markers kept in fixed slots below a movable top.

    Popping only lowers the top, so resetting a caller's depth on return
    exposes any marker the callee popped again.
    """

    def __init__(self, capacity, overflow):
        super().__init__(capacity, overflow)
        self.items = []
        self.top = 0

    def __len__(self):
        return self.top

    def __iter__(self):
        return iter(self.items[:self.top])

    def __repr__(self):
        return 'LoopStack({})'.format(self.items[:self.top])

    def push(self, item):
        if self.top >= self.capacity:
            raise self.overflow()
        if self.top < len(self.items):
            self.items[self.top] = item
        else:
            self.items.append(item)
        self.top += 1

    def pop(self):
        if self.top == 0:
            raise StackUnderflow()
        self.top -= 1
        return self.items[self.top]

    def peek(self, n=1):
        self.need(n)
        return self.items[self.top - n]

    def reset(self, depth):
        # slots above the old top keep their markers
        self.top = min(depth, len(self.items))

    def truncate(self, depth):
        self.top = min(self.top, depth)

    def clear(self):
        self.top = 0
