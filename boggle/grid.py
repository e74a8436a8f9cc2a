from __future__ import annotations

import random
from functools import lru_cache

from boggle.errors import InvalidBoardError

Position = tuple[int, int]

# Largest board the service and settings accept
MAX_BOARD_SIZE = 10

# Classic 4x4 cube set
LETTER_CUBES = [
    "AAEEGN", "ABBJOO", "ACHOPS", "AFFKPS",
    "AOOTTW", "CIMOTU", "DEILRX", "DELRVY",
    "DISTTY", "EEGHNW", "EEINSU", "EHRTVW",
    "EIOSST", "ELRTTY", "HIMNQU", "HLNNRZ",
]

# 5x5 "Big Boggle" cube set
BIG_LETTER_CUBES = [
    "AAAFRS", "AAEEEE", "AAFIRS", "ADENNN", "AEEEEM",
    "AEEGMU", "AEGMNN", "AFIRSY", "BJKQXZ", "CCENST",
    "CEIILT", "CEILPT", "CEIPST", "DDHNOT", "DHHLOR",
    "DHLNOR", "DHLNOR", "EIIITT", "EMOTTT", "ENSSSU",
    "FIPRSY", "GORRVW", "IPRRRY", "NOOTUW", "OOOTTU",
]


def neighbors(pos: Position, size: int) -> list[Position]:
    """Cells touching `pos` horizontally, vertically or diagonally.

    Order is row offset -1..1, then column offset -1..1.
    """
    row, col = pos
    adj = []
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            nr, nc = row + dr, col + dc
            if 0 <= nr < size and 0 <= nc < size:
                adj.append((nr, nc))
    return adj


@lru_cache(maxsize=None)
def adjacency(size: int) -> tuple[tuple[int, ...], ...]:
    """Precomputed neighbor lists over flat cell indices (row * size + col)."""
    table = []
    for idx in range(size * size):
        r, c = divmod(idx, size)
        table.append(tuple(nr * size + nc for nr, nc in neighbors((r, c), size)))
    return tuple(table)


def _is_letter(cell) -> bool:
    return isinstance(cell, str) and len(cell) == 1 and "A" <= cell <= "Z"


def check_board(board: list[list[str]]) -> int:
    """Return the board size, or raise InvalidBoardError if it is malformed."""
    size = len(board)
    if size == 0:
        raise InvalidBoardError("Board is empty")
    for r, row in enumerate(board):
        if len(row) != size:
            raise InvalidBoardError(f"Board is not square: row {r} has {len(row)} cells, expected {size}")
        for c, cell in enumerate(row):
            if not _is_letter(cell):
                raise InvalidBoardError(f"Invalid cell {cell!r} at ({r}, {c}); expected one letter A-Z")
    return size


def parse_board(text: str, size: int = 4) -> list[list[str]]:
    """Build a board from typed letters, row by row.

    Spaces and commas are ignored so "ABCD EFGH ..." and "A,B,C,..." both work.
    """
    letters = [ch.upper() for ch in text if not ch.isspace() and ch != ","]
    if len(letters) != size * size:
        raise InvalidBoardError(
            f"Invalid board string: expected {size * size} letters, got {len(letters)}"
        )
    for idx, letter in enumerate(letters):
        if not _is_letter(letter):
            raise InvalidBoardError(f"Invalid character {letter!r} at position {idx + 1}")
    return [letters[i * size:(i + 1) * size] for i in range(size)]


def random_board(size: int = 4, rng: random.Random | None = None) -> list[list[str]]:
    """Shuffle the cubes into the grid and roll each one."""
    if size < 1:
        raise InvalidBoardError(f"Board size must be positive, got {size}")
    rng = rng or random.Random()
    if size == 4:
        cubes = list(LETTER_CUBES)
    elif size == 5:
        cubes = list(BIG_LETTER_CUBES)
    else:
        cubes = rng.choices(LETTER_CUBES, k=size * size)
    rng.shuffle(cubes)
    faces = [rng.choice(cube) for cube in cubes]
    return [faces[i * size:(i + 1) * size] for i in range(size)]


def format_board(board: list[list[str]]) -> str:
    return "\n".join(" ".join(row) for row in board)


def board_letters(board: list[list[str]]) -> str:
    return "".join("".join(row) for row in board)
