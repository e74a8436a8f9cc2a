from typing import Iterable

#        1, 2, 3, 4, 5, 6, 7, 8+
SCORES = (0, 0, 0, 1, 2, 3, 5, 11)


def points(word: str) -> int:
    if not word:
        return 0
    return SCORES[min(len(word), len(SCORES)) - 1]


def total_score(words: Iterable[str]) -> int:
    return sum(points(w) for w in words)
