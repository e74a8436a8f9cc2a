class BoggleError(Exception):
    """Base exception for the game and its search engine."""


class InvalidBoardError(BoggleError, ValueError):
    """Raised when a board is not an NxN grid of single upper-case letters."""


class InvalidWordError(BoggleError, ValueError):
    """Raised when a search word is empty or not normalized to A-Z."""


class SearchPreconditionError(BoggleError, ValueError):
    """Raised when a search is called with arguments outside its contract."""


class DictionaryLoadError(BoggleError):
    """Raised when the word list cannot be read."""


class GameOverError(BoggleError):
    """Raised when a finished game is asked to take another turn."""


class WordRejected(BoggleError):
    """A human word that does not count, with the reason code."""

    EMPTY = "EMPTY"
    TOO_SHORT = "TOO_SHORT"
    NOT_IN_DICTIONARY = "NOT_IN_DICTIONARY"
    ALREADY_FOUND = "ALREADY_FOUND"
    NOT_ON_BOARD = "NOT_ON_BOARD"

    def __init__(self, word: str, reason: str, message: str):
        super().__init__(message)
        self.word = word
        self.reason = reason
        self.message = message
