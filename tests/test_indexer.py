"""Tests for word indexers"""

import pytest

from arpareader import END_SYMBOL, START_SYMBOL, UNK_SYMBOL, StringWordIndexer, WordIndexer


class TestStringWordIndexer:
    """Test the dict-backed word indexer"""

    def test_dense_ids_in_first_seen_order(self):
        indexer = StringWordIndexer()
        assert indexer.get_or_add_index("the") == 0
        assert indexer.get_or_add_index("cat") == 1
        assert indexer.get_or_add_index("sat") == 2
        assert len(indexer) == 3

    def test_get_or_add_is_idempotent(self):
        indexer = StringWordIndexer()
        first = indexer.get_or_add_index("word")
        second = indexer.get_or_add_index("word")
        assert first == second
        assert len(indexer) == 1

    def test_get_word(self):
        indexer = StringWordIndexer(["a", "b"])
        assert indexer.get_word(0) == "a"
        assert indexer.get_word(1) == "b"

    def test_get_word_out_of_range(self):
        indexer = StringWordIndexer(["a"])
        with pytest.raises(IndexError):
            indexer.get_word(1)
        with pytest.raises(IndexError):
            indexer.get_word(-1)

    def test_get_index_does_not_add(self):
        indexer = StringWordIndexer(["a"])
        assert indexer.get_index("a") == 0
        assert indexer.get_index("b") == -1
        assert "b" not in indexer

    def test_unknown_words_map_to_unk(self):
        indexer = StringWordIndexer(["a"])
        indexer.set_unk_symbol(UNK_SYMBOL)
        assert indexer.get_index("never seen") == indexer.get_index(UNK_SYMBOL)

    def test_special_symbols_registered(self):
        indexer = StringWordIndexer()
        indexer.set_start_symbol(START_SYMBOL)
        indexer.set_end_symbol(END_SYMBOL)

        assert indexer.start_symbol == "<s>"
        assert indexer.end_symbol == "</s>"
        assert indexer.unk_symbol is None
        assert START_SYMBOL in indexer
        assert END_SYMBOL in indexer

    def test_lock(self):
        indexer = StringWordIndexer(["a"])
        indexer.lock()
        assert indexer.get_or_add_index("a") == 0
        with pytest.raises(KeyError):
            indexer.get_or_add_index("b")

    def test_iteration_in_id_order(self):
        indexer = StringWordIndexer(["x", "y", "x", "z"])
        assert list(indexer) == ["x", "y", "z"]

    def test_special_symbols_bypass_lock(self):
        indexer = StringWordIndexer(["a"])
        indexer.lock()
        indexer.set_start_symbol(START_SYMBOL)

        assert indexer.get_index(START_SYMBOL) == 1
        assert indexer.start_symbol == START_SYMBOL
        with pytest.raises(KeyError):
            indexer.get_or_add_index("b")


class TestWordIndexerContract:
    """Test the abstract word indexer"""

    def test_contains_is_required(self):
        class NoContains(WordIndexer):
            def get_or_add_index(self, word):
                return 0

            def get_index(self, word):
                return 0

            def get_word(self, index):
                return ""

            def __len__(self):
                return 0

        with pytest.raises(TypeError):
            NoContains()
