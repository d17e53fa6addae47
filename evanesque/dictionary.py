from collections import namedtuple
import logging
import random

from evanesque.config import ARENA_SIZE, DICT_SIZE
from evanesque.errors import CompileArenaFull, DictionaryFull

# Python Cookbook: Section 13.12
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

Word = namedtuple('Word', 'name body')


class Dictionary:
    """Insertion-ordered, self-erasing collection of user words.

    Lookup returns the first match in the current order. The only way a
    word ever leaves is erase_random, which swaps the last word into the
    victim's slot, so order is not stable across definitions.
    """

    def __init__(self, capacity=DICT_SIZE, arena_size=ARENA_SIZE, rng=None):
        self.capacity = capacity
        self.arena_size = arena_size
        self.arena_used = 0
        self.rng = rng if rng is not None else random.Random()
        self.words = []

    def __len__(self):
        return len(self.words)

    def __iter__(self):
        return iter(self.words)

    def __contains__(self, name):
        return self.find(name) is not None

    def full(self):
        return len(self.words) >= self.capacity

    def names(self):
        return [word.name for word in self.words]

    def reserve(self, nbytes, headroom=0):
        # arena space is never given back, even when a word vanishes
        if self.arena_used + nbytes + headroom >= self.arena_size:
            raise CompileArenaFull()
        self.arena_used += nbytes

    def define(self, name, body):
        if self.full():
            raise DictionaryFull()
        word = Word(name, tuple(body))
        self.words.append(word)
        log.info('defined word: {} ({} tokens)'.format(name, len(word.body)))
        return word

    def find(self, name):
        for word in self.words:
            if word.name == name:
                return word
        return None

    def erase_random(self):
        if len(self.words) == 0:
            return None

        index = self.rng.randrange(len(self.words))
        victim = self.words[index]
        last = self.words.pop()
        if index < len(self.words):
            self.words[index] = last

        log.info('vanished word: {}'.format(victim.name))
        return victim
