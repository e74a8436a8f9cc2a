import copy
import itertools
import time

import pytest

from boggle.errors import InvalidBoardError, InvalidWordError, SearchPreconditionError
from boggle.lexicon import Lexicon
from boggle.search import find_all, rank_words, verify

BOARD = [
    ["C", "A", "T", "S"],
    ["R", "E", "P", "O"],
    ["B", "O", "N", "E"],
    ["D", "I", "G", "S"],
]


def _make_lexicon(words: list[str]) -> Lexicon:
    return Lexicon.from_words(w.upper() for w in words)


class CountingLexicon(Lexicon):
    """Lexicon that records the prefix queries made against it."""

    def __init__(self):
        super().__init__()
        self.prefix_queries: list[str] = []

    def contains_prefix(self, prefix: str) -> bool:
        self.prefix_queries.append(prefix)
        return super().contains_prefix(prefix)


def test_verify_finds_adjacent_paths():
    assert verify(BOARD, "CAT")
    assert verify(BOARD, "CATS")
    assert verify(BOARD, "CARE")  # A -> R is a diagonal step
    assert verify(BOARD, "BONES")


def test_verify_rejects_untraceable_words():
    assert not verify(BOARD, "SING")
    assert not verify(BOARD, "CD")
    assert not verify(BOARD, "XYZ")


def test_verify_prefix_only_is_not_enough():
    # T has no neighbouring I
    assert verify(BOARD, "CAT")
    assert not verify(BOARD, "CATI")


def test_verify_single_letter():
    assert verify(BOARD, "C")
    assert not verify(BOARD, "Z")


def test_verify_never_reuses_a_cell():
    board = [
        ["A", "B", "A"],
        ["B", "B", "B"],
        ["B", "B", "B"],
    ]
    # The two A cells are not neighbours
    assert not verify(board, "AA")
    assert verify(board, "ABA")
    assert not verify(board, "ABABA")

    board = [
        ["A", "B", "B"],
        ["B", "A", "B"],
        ["B", "B", "B"],
    ]
    assert verify(board, "AA")
    assert not verify(board, "AAA")


def test_verify_two_by_two_scenario():
    board = [["A", "B"], ["C", "D"]]
    assert verify(board, "AB")
    assert verify(board, "ABDC")
    # Every cell touches every other cell on a 2x2 board, diagonals included
    assert verify(board, "AD")
    assert not verify(board, "ABA")


def test_verify_backtracks_out_of_dead_ends():
    board = [
        ["S", "E", "X"],
        ["E", "X", "X"],
        ["A", "T", "X"],
    ]
    # The E to the right of S is tried first and leads nowhere
    assert verify(board, "SEAT")


def test_verify_word_longer_than_board():
    board = [["A", "A"], ["A", "A"]]
    assert verify(board, "AAAA")
    assert not verify(board, "A" * 5)
    assert not verify(board, "A" * 5000)


def test_verify_calls_on_visit():
    visited = []
    assert verify(BOARD, "CAT", on_visit=visited.append)
    assert visited[0] == (0, 0)
    assert (0, 2) in visited
    assert all(0 <= r < 4 and 0 <= c < 4 for r, c in visited)


def test_verify_preconditions():
    with pytest.raises(InvalidWordError):
        verify(BOARD, "")
    with pytest.raises(InvalidWordError):
        verify(BOARD, "cat")
    with pytest.raises(InvalidBoardError):
        verify([["A", "B"], ["C"]], "AB")
    with pytest.raises(InvalidBoardError):
        verify([["A", "b"], ["C", "D"]], "AB")


def test_find_all_basic():
    words = ["CAT", "CATS", "CARE", "BONE", "BONES", "DIGS", "REPO", "OPEN",
             "STOP", "SING", "SIGN", "CACTI"]
    result = find_all(BOARD, _make_lexicon(words), min_length=4)
    assert result == {"CATS", "CARE", "BONE", "BONES", "DIGS", "REPO", "OPEN", "STOP"}


def test_find_all_respects_min_length():
    words = ["CAT", "CATS", "ONE", "BONE"]
    result = find_all(BOARD, _make_lexicon(words), min_length=3)
    assert result == {"CAT", "CATS", "ONE", "BONE"}
    result = find_all(BOARD, _make_lexicon(words), min_length=4)
    assert all(len(w) >= 4 for w in result)
    assert result == {"CATS", "BONE"}


def test_find_all_skips_exclusions():
    words = ["CATS", "BONE", "BONES"]
    result = find_all(BOARD, _make_lexicon(words), exclusions={"BONE"})
    assert result == {"CATS", "BONES"}


def test_find_all_two_by_two_scenario():
    board = [["A", "B"], ["C", "D"]]
    lexicon = _make_lexicon(["AB", "AC", "ABD", "ABDC"])
    assert find_all(board, lexicon, set(), 2) == {"AB", "AC", "ABD", "ABDC"}


def test_find_all_no_matches():
    board = [["Z", "Z"], ["Z", "Z"]]
    assert find_all(board, _make_lexicon(["CAT", "DOG"]), min_length=3) == set()


def test_find_all_word_reached_by_many_paths_counted_once():
    board = [
        ["A", "A", "A"],
        ["A", "A", "A"],
        ["A", "A", "A"],
    ]
    result = find_all(board, _make_lexicon(["AAAA", "AAAAB"]), min_length=4)
    assert result == {"AAAA"}


def test_find_all_no_cell_reuse():
    board = [["A", "B"], ["C", "D"]]
    result = find_all(board, _make_lexicon(["ABA", "ABC", "ABCDA"]), min_length=3)
    assert result == {"ABC"}


def test_find_all_prunes_on_prefix():
    lexicon = CountingLexicon()
    for w in ["QUIZ", "QUIT"]:
        lexicon.add(w)
    assert find_all(BOARD, lexicon, min_length=4) == set()
    # No cell starts a dictionary word, so nothing longer than one letter is ever asked about
    assert all(len(q) == 1 for q in lexicon.prefix_queries)


def test_find_all_on_visit_is_advisory():
    lexicon = _make_lexicon(["CATS", "BONE", "BONES", "DIGS"])
    visits = []
    with_hook = find_all(BOARD, lexicon, on_visit=visits.append)
    without_hook = find_all(BOARD, lexicon)
    assert with_hook == without_hook
    assert len(visits) > 0


def test_find_all_min_length_precondition():
    with pytest.raises(SearchPreconditionError):
        find_all(BOARD, _make_lexicon(["CAT"]), min_length=0)


def test_searches_leave_board_untouched_and_are_repeatable():
    board = copy.deepcopy(BOARD)
    lexicon = _make_lexicon(["CATS", "CARE", "BONE", "BONES", "STOP"])

    first = find_all(board, lexicon, {"CARE"}, 4)
    second = find_all(board, lexicon, {"CARE"}, 4)
    assert first == second
    assert verify(board, "BONES")
    assert verify(board, "BONES")
    assert board == BOARD


def test_rank_words():
    assert rank_words({"CAT", "BONES", "DIGS", "BONE"}) == ["BONES", "BONE", "DIGS", "CAT"]


def test_performance_with_generated_dictionary():
    """Solve a 4x4 board against a few thousand words in well under a second."""
    letters = "ABCDEFGHIJKLMNOPRSTUE"
    words = []
    for length in range(3, 6):
        for combo in itertools.combinations(letters, length):
            words.append("".join(combo))
            if len(words) > 5000:
                break
    lexicon = _make_lexicon(words)

    board = [
        ["T", "A", "P", "E"],
        ["I", "N", "S", "O"],
        ["E", "D", "R", "L"],
        ["K", "G", "H", "M"],
    ]

    start = time.perf_counter()
    result = find_all(board, lexicon, min_length=3)
    elapsed = time.perf_counter() - start

    assert elapsed < 1.0, f"Search took {elapsed:.3f}s (expected <1s)"
    assert all(verify(board, w) for w in result)
