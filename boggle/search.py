from __future__ import annotations

from typing import Callable, Collection

from boggle.errors import InvalidWordError, SearchPreconditionError
from boggle.grid import Position, adjacency, check_board

OnVisit = Callable[[Position], None]


def _check_word(word: str):
    if not word:
        raise InvalidWordError("Search word must not be empty")
    if not all("A" <= ch <= "Z" for ch in word):
        raise InvalidWordError(f"Search word {word!r} must be upper-case letters A-Z")


def verify(board: list[list[str]], word: str, on_visit: OnVisit | None = None) -> bool:
    """Return True if `word` can be traced on the board without reusing a cell.

    Each step moves to one of the 8 surrounding cells. Length policy is the
    caller's business: single letters are accepted and checked like any other
    word. `on_visit` is called with each (row, col) the search steps onto.
    """
    size = check_board(board)
    _check_word(word)

    cells = [board[r][c] for r in range(size) for c in range(size)]
    neighbors = adjacency(size)
    length = len(word)
    # A simple path visits each cell at most once
    if length > size * size:
        return False

    def search(idx: int, matched: int, used: int) -> bool:
        if on_visit is not None:
            on_visit(divmod(idx, size))
        if matched == length:
            return True
        want = word[matched]
        for nidx in neighbors[idx]:
            if not (used & (1 << nidx)) and cells[nidx] == want:
                if search(nidx, matched + 1, used | (1 << nidx)):
                    return True
        return False

    for start in range(size * size):
        if cells[start] == word[0] and search(start, 1, 1 << start):
            return True
    return False


def find_all(
    board: list[list[str]],
    dictionary,
    exclusions: Collection[str] = (),
    min_length: int = 4,
    on_visit: OnVisit | None = None,
) -> set[str]:
    """Every dictionary word of at least `min_length` letters traceable on the board.

    `dictionary` needs `contains(word)` and `contains_prefix(prefix)`. A branch
    is only followed while its letters are a prefix of some dictionary word.
    Words in `exclusions` are left out. Each word appears once no matter how
    many paths spell it.
    """
    size = check_board(board)
    if min_length < 1:
        raise SearchPreconditionError(f"min_length must be at least 1, got {min_length}")

    found: set[str] = set()
    cells = [board[r][c] for r in range(size) for c in range(size)]
    neighbors = adjacency(size)

    def explore(idx: int, potential: str, used: int):
        if on_visit is not None:
            on_visit(divmod(idx, size))
        if (
            len(potential) >= min_length
            and potential not in found
            and potential not in exclusions
            and dictionary.contains(potential)
        ):
            found.add(potential)

        for nidx in neighbors[idx]:
            if used & (1 << nidx):
                continue
            candidate = potential + cells[nidx]
            if dictionary.contains_prefix(candidate):
                explore(nidx, candidate, used | (1 << nidx))

    for start in range(size * size):
        if dictionary.contains_prefix(cells[start]):
            explore(start, cells[start], 1 << start)

    return found


def rank_words(words) -> list[str]:
    """Longest first, then alphabetical."""
    return sorted(words, key=lambda w: (-len(w), w))
