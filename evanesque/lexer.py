from pygments.lexer import RegexLexer, bygroups, words
from pygments.token import Comment, Keyword, Name, Number, Text

from evanesque.engine import BUILTIN_WORDS, CONTROL_WORDS

# References:
# https://pygments.org/docs/lexerdevelopment/
# https://pygments.org/docs/tokens/

# every rule must match a whole whitespace-delimited token
END = r'(?=[ \t\r\n]|$)'


class EvanesqueLexer(RegexLexer):
    name = 'Evanesque'
    aliases = ['evanesque']
    filenames = ['*.ev']

    tokens = {
        'root': [
            (r'[ \t\r\n]+', Text),  # whitespace
            (r'/\*' + END, Comment.Multiline, 'comment'),  # comments
            (r'(:)([ \t\r\n]+)([^ \t\r\n]+)', bygroups(Keyword, Text, Name.Function)),  # definitions
            (words(CONTROL_WORDS, suffix=END), Keyword),  # control flow
            (words(BUILTIN_WORDS, suffix=END), Name.Builtin),  # built-ins
            (r'[+-]?(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)' + END, Number),  # numbers
            (r'[^ \t\r\n]+', Name),  # user words
        ],
        'comment': [
            (r'[ \t\r\n]+', Comment.Multiline),
            (r'\*/' + END, Comment.Multiline, '#pop'),
            (r'[^ \t\r\n]+', Comment.Multiline),
        ],
    }
