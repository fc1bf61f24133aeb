"""Word indexers: bidirectional mapping between words and dense integer ids"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Optional

START_SYMBOL = "<s>"
END_SYMBOL = "</s>"
UNK_SYMBOL = "<unk>"


class WordIndexer(ABC):
    """Base class for vocabularies used by the ARPA reader.

    The reader only needs get_or_add_index() while parsing and the three
    set_*_symbol() methods once parsing is done.
    """

    def __init__(self):
        self._start_symbol: Optional[str] = None
        self._end_symbol: Optional[str] = None
        self._unk_symbol: Optional[str] = None

    @abstractmethod
    def get_or_add_index(self, word: str) -> int:
        """Return the id of word, assigning a new one the first time it is seen."""
        pass

    @abstractmethod
    def get_index(self, word: str) -> int:
        """Return the id of word without adding it.

        Unseen words map to the unknown-word id, or -1 if no unknown symbol is set.
        """
        pass

    @abstractmethod
    def get_word(self, index: int) -> str:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __contains__(self, word: object) -> bool:
        pass

    @property
    def start_symbol(self) -> Optional[str]:
        return self._start_symbol

    @property
    def end_symbol(self) -> Optional[str]:
        return self._end_symbol

    @property
    def unk_symbol(self) -> Optional[str]:
        return self._unk_symbol

    def _register_symbol(self, word: str) -> None:
        """Make sure a special symbol has an id."""
        self.get_or_add_index(word)

    def set_start_symbol(self, word: str) -> None:
        self._register_symbol(word)
        self._start_symbol = word

    def set_end_symbol(self, word: str) -> None:
        self._register_symbol(word)
        self._end_symbol = word

    def set_unk_symbol(self, word: str) -> None:
        self._register_symbol(word)
        self._unk_symbol = word


class StringWordIndexer(WordIndexer):
    """Word indexer backed by a dict and a list.

    Ids are assigned densely from 0 in the order words are first seen.

    Example:
        indexer = StringWordIndexer()
        indexer.get_or_add_index("the")   # 0
        indexer.get_or_add_index("cat")   # 1
        indexer.get_or_add_index("the")   # 0
        indexer.get_word(1)               # "cat"
    """

    def __init__(self, words: Optional[list[str]] = None):
        super().__init__()
        self._ids: dict[str, int] = {}
        self._words: list[str] = []
        self.locked = False
        for word in words or []:
            self.get_or_add_index(word)

    def get_or_add_index(self, word: str) -> int:
        index = self._ids.get(word)
        if index is None:
            if self.locked:
                raise KeyError(f"Cannot add '{word}' to a locked indexer")
            index = self._add(word)
        return index

    def _add(self, word: str) -> int:
        index = len(self._words)
        self._ids[word] = index
        self._words.append(word)
        return index

    def _register_symbol(self, word: str) -> None:
        # Special symbols are added even to a locked vocabulary
        if word not in self._ids:
            self._add(word)

    def get_index(self, word: str) -> int:
        index = self._ids.get(word)
        if index is not None:
            return index
        if self._unk_symbol is None:
            return -1
        return self._ids[self._unk_symbol]

    def get_word(self, index: int) -> str:
        if not 0 <= index < len(self._words):
            raise IndexError(f"Word id {index} out of range (0, {len(self._words)})")
        return self._words[index]

    def lock(self) -> None:
        """Freeze the vocabulary; only special symbols can still be added."""
        self.locked = True

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)
