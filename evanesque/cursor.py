import re

COMMENT_OPEN = '/*'
COMMENT_CLOSE = '*/'

# same separators the reference tokenizer splits on
SEPARATORS = re.compile(r'[ \t\r\n]+')


def tokenize(text):
    return tuple(t for t in SEPARATORS.split(text) if t)


def encoded_size(token):
    # lines are decoded with surrogateescape, so this is the raw byte count
    return len(token.encode('utf-8', 'surrogateescape'))


class Cursor:
    """Resumable position within an immutable token sequence.

    A saved position carries the sequence it points into, so restoring
    it can move the cursor between a line and a word body.
    """

    def __init__(self, tokens, index=0):
        self.tokens = tokens
        self.index = index

    def __repr__(self):
        return 'Cursor({}, {})'.format(self.tokens, self.index)

    def __iter__(self):
        return self

    def __next__(self):
        token = self.next()
        if token is None:
            raise StopIteration
        return token

    def next(self):
        if self.index >= len(self.tokens):
            return None
        token = self.tokens[self.index]
        self.index += 1
        return token

    def exhausted(self):
        return self.index >= len(self.tokens)

    def save(self):
        return (self.tokens, self.index)

    def restore(self, position):
        self.tokens, self.index = position

    def copy(self):
        return Cursor(self.tokens, self.index)


def skip_comment(cursor):
    # not nesting-aware: the first close marker ends the comment
    for token in cursor:
        if token == COMMENT_CLOSE:
            return True
    return False
