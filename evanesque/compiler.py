from evanesque.cursor import COMMENT_OPEN, encoded_size, skip_comment
from evanesque.errors import DictionaryFull, EmptyDefinition, UnterminatedDefinition

TERMINATOR = ';'


def compile_word(cursor, dictionary):
    """Compile a definition following ':' and then erase a random word.

    Consumes the name and body tokens from cursor up to and including
    the terminating ';'. Returns a (defined, vanished) pair of words.
    """
    name = cursor.next()
    if name is None:
        raise EmptyDefinition()
    if dictionary.full():
        raise DictionaryFull()

    # name plus its NUL
    dictionary.reserve(encoded_size(name) + 1)

    body = []
    for token in cursor:
        if token == TERMINATOR:
            break
        if token == COMMENT_OPEN:
            skip_comment(cursor)
            continue

        # token plus separator, with room left for the terminator
        dictionary.reserve(encoded_size(token) + 1, headroom=1)
        body.append(token)
    else:
        raise UnterminatedDefinition(name)

    # body terminator
    dictionary.arena_used += 1

    word = dictionary.define(name, body)
    vanished = dictionary.erase_random()
    return word, vanished
