from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from boggle.errors import GameOverError, WordRejected
from boggle.grid import board_letters, check_board
from boggle.lexicon import Lexicon
from boggle.scoring import points, total_score
from boggle.search import OnVisit, find_all, rank_words, verify

logger = logging.getLogger("boggle")


class Outcome(str, Enum):
    HUMAN = "human"
    COMPUTER = "computer"
    DRAW = "draw"


@dataclass
class TurnResult:
    words: list[str] = field(default_factory=list)
    score: int = 0


class Game:
    """One board played by a human and then the computer."""

    def __init__(self, board: list[list[str]], lexicon: Lexicon, min_word_length: int = 4):
        self.size = check_board(board)
        self.board = [list(row) for row in board]
        self.lexicon = lexicon
        self.min_word_length = min_word_length
        self.human_words: list[str] = []
        self.human_score = 0
        self.computer: TurnResult | None = None

    @property
    def finished(self) -> bool:
        return self.computer is not None

    def submit(self, word: str) -> int:
        """Record a human word and return its points, or raise WordRejected."""
        if self.finished:
            raise GameOverError("The computer has already played this board")
        word = word.strip().upper()
        if not word:
            raise WordRejected(word, WordRejected.EMPTY, "No word entered.")
        if len(word) < self.min_word_length:
            raise WordRejected(
                word, WordRejected.TOO_SHORT,
                f"The word must have at least {self.min_word_length} letters.",
            )
        if not self.lexicon.contains(word):
            raise WordRejected(word, WordRejected.NOT_IN_DICTIONARY, "That word is not found in the dictionary.")
        if word in self.human_words:
            raise WordRejected(word, WordRejected.ALREADY_FOUND, "You have already found that word.")
        if not verify(self.board, word):
            raise WordRejected(word, WordRejected.NOT_ON_BOARD, "That word can't be formed on this board.")

        gained = points(word)
        self.human_words.append(word)
        self.human_score += gained
        logger.info("Human found %s (+%d, total %d)", word, gained, self.human_score)
        return gained

    def computer_turn(self, on_visit: OnVisit | None = None) -> TurnResult:
        if self.finished:
            raise GameOverError("The computer has already played this board")
        words = find_all(
            self.board, self.lexicon,
            exclusions=set(self.human_words),
            min_length=self.min_word_length,
            on_visit=on_visit,
        )
        self.computer = TurnResult(words=rank_words(words), score=total_score(words))
        logger.info("Computer found %d words (score %d)", len(words), self.computer.score)
        return self.computer

    @property
    def outcome(self) -> Outcome | None:
        if self.computer is None:
            return None
        if self.computer.score > self.human_score:
            return Outcome.COMPUTER
        if self.computer.score < self.human_score:
            return Outcome.HUMAN
        return Outcome.DRAW

    def summary(self) -> dict:
        return {
            "board": self.board,
            "letters": board_letters(self.board),
            "min_word_length": self.min_word_length,
            "human": {"words": list(self.human_words), "score": self.human_score},
            "computer": (
                {"words": self.computer.words, "score": self.computer.score}
                if self.computer is not None else None
            ),
            "outcome": self.outcome.value if self.outcome is not None else None,
        }
