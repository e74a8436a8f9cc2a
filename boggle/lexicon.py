from __future__ import annotations

import logging
from typing import Iterable

from boggle.errors import DictionaryLoadError

logger = logging.getLogger("boggle")


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Lexicon:
    """Upper-case word list with exact and prefix membership."""

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Lexicon:
        lexicon = cls()
        for word in words:
            lexicon.add(word)
        return lexicon

    def add(self, word: str) -> bool:
        """Insert `word` upper-cased. Anything but letters A-Z is skipped (returns False)."""
        word = word.upper()
        if not word or not all("A" <= ch <= "Z" for ch in word):
            return False
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1
        return True

    def _find(self, text: str) -> TrieNode | None:
        node = self.root
        for ch in text:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains(self, word: str) -> bool:
        node = self._find(word)
        return node is not None and node.is_word

    def contains_prefix(self, prefix: str) -> bool:
        """True if some word starts with `prefix` (a whole word counts)."""
        node = self._find(prefix)
        return node is not None and (node.is_word or bool(node.children))

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def __len__(self) -> int:
        return self._size


def load_lexicon(path, min_length: int = 1) -> Lexicon:
    """Read a one-word-per-line file, keeping alphabetic words of at least min_length."""
    lexicon = Lexicon()
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                word = line.strip().upper()
                if len(word) >= min_length:
                    lexicon.add(word)
    except OSError as e:
        logger.error("Could not read dictionary %s: %s", path, e)
        raise DictionaryLoadError(f"Could not read dictionary {path}: {e}") from e
    logger.info("Loaded %d words from %s", len(lexicon), path)
    return lexicon
