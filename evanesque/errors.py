# low-level code raises these, the CLI turns them into SystemExit
class EvanesqueError(Exception):

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class StackUnderflow(EvanesqueError):

    def __init__(self, message='stack underflow'):
        super().__init__(message)


class StackOverflow(EvanesqueError):
    pass


class DataStackOverflow(StackOverflow):

    def __init__(self, message='stack overflow'):
        super().__init__(message)


class CallStackOverflow(StackOverflow):

    def __init__(self, message='call stack overflow'):
        super().__init__(message)


class LoopStackOverflow(StackOverflow):

    def __init__(self, message='loop stack overflow'):
        super().__init__(message)


class DivisionByZero(EvanesqueError):

    def __init__(self, message='division by zero'):
        super().__init__(message)


class UnknownWord(EvanesqueError):

    def __init__(self, word):
        super().__init__('unknown word: {}'.format(word))
        self.word = word


class DictionaryFull(EvanesqueError):

    def __init__(self, message='dictionary full'):
        super().__init__(message)


class CompileArenaFull(EvanesqueError):

    def __init__(self, message='compile arena full'):
        super().__init__(message)


class EmptyDefinition(EvanesqueError):

    def __init__(self, message='empty definition'):
        super().__init__(message)


class UnterminatedDefinition(EvanesqueError):

    def __init__(self, name):
        super().__init__('unterminated definition: {}'.format(name))
        self.name = name


class UnmatchedLoopControl(EvanesqueError):
    pass


class SemicolonOutsideDefinition(EvanesqueError):

    def __init__(self, message="';' outside definition"):
        super().__init__(message)
