"""Consumers of ARPA reader events

The reader drives a callback through a fixed lifecycle:

    init_with_lengths(lengths)
    for each order:
        handle_ngram_order_started(order)
        call(ngram, start, end, value, line)   # once per entry
        handle_ngram_order_finished(order)
    cleanup()
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, TextIO

from arpareader.indexer import WordIndexer


class ProbBackoffPair(NamedTuple):
    """Log10 probability and backoff weight of one n-gram."""

    prob: float
    backoff: float = 0.0


class ArpaReaderCallback(ABC):
    """Base class for objects receiving n-grams from ArpaLmReader."""

    @abstractmethod
    def init_with_lengths(self, lengths: list[int]) -> None:
        """Receive the declared n-gram count of each order, lowest order first."""
        pass

    @abstractmethod
    def handle_ngram_order_started(self, order: int) -> None:
        pass

    @abstractmethod
    def call(self, ngram: list[int], start: int, end: int, value: ProbBackoffPair, line: str) -> None:
        """Receive one n-gram entry.

        Args:
            ngram: Scratch buffer of word ids, reused by the reader between calls.
                Copy ngram[start:end] if it must outlive this call.
            start: First word id position in ngram
            end: One past the last word id position
            value: Probability and backoff weight of the entry
            line: The raw ARPA line the entry came from
        """
        pass

    @abstractmethod
    def handle_ngram_order_finished(self, order: int) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass


class NgramCollector(ArpaReaderCallback):
    """Collects every n-gram into per-order dicts keyed by word id tuples.

    Example:
        collector = NgramCollector()
        ArpaLmReader("model.arpa", indexer, max_order=3).parse(collector)
        collector.get((indexer.get_index("the"), indexer.get_index("cat")))
    """

    def __init__(self):
        self.lengths: list[int] = []
        self.ngrams: list[dict[tuple[int, ...], ProbBackoffPair]] = []
        self.orders_finished: list[int] = []
        self.cleaned_up = False

    def init_with_lengths(self, lengths: list[int]) -> None:
        self.lengths = list(lengths)
        self.ngrams = [{} for _ in lengths]

    def handle_ngram_order_started(self, order: int) -> None:
        while len(self.ngrams) < order:
            self.ngrams.append({})

    def call(self, ngram: list[int], start: int, end: int, value: ProbBackoffPair, line: str) -> None:
        self.ngrams[end - start - 1][tuple(ngram[start:end])] = value

    def handle_ngram_order_finished(self, order: int) -> None:
        self.orders_finished.append(order)

    def cleanup(self) -> None:
        self.cleaned_up = True

    @property
    def max_order(self) -> int:
        return len(self.orders_finished)

    def num_ngrams(self, order: int) -> int:
        """Number of n-grams actually read for the given order (1-based)."""
        if not 1 <= order <= len(self.ngrams):
            return 0
        return len(self.ngrams[order - 1])

    def get(self, ngram_ids: tuple[int, ...]) -> Optional[ProbBackoffPair]:
        if not 1 <= len(ngram_ids) <= len(self.ngrams):
            return None
        return self.ngrams[len(ngram_ids) - 1].get(tuple(ngram_ids))


class ArpaWriter(ArpaReaderCallback):
    """Writes reader events back out as an ARPA file.

    Reading a model with a lower max_order through this callback truncates it
    to that order. Backoff weights are written for every order except the
    highest declared one. Values are written in their shortest exact form,
    so reading the output back gives the same floats.
    """

    def __init__(self, outfile: TextIO, word_indexer: WordIndexer):
        self.outfile = outfile
        self.word_indexer = word_indexer
        self.highest_order = 0

    def init_with_lengths(self, lengths: list[int]) -> None:
        self.highest_order = len(lengths)
        print("\\data\\", file=self.outfile)
        for order, count in enumerate(lengths, start=1):
            print(f"ngram {order}={count}", file=self.outfile)
        print(file=self.outfile)

    def handle_ngram_order_started(self, order: int) -> None:
        print(f"\\{order}-grams:", file=self.outfile)

    def call(self, ngram: list[int], start: int, end: int, value: ProbBackoffPair, line: str) -> None:
        words_str = " ".join(self.word_indexer.get_word(index) for index in ngram[start:end])
        if end - start < self.highest_order:
            print(f"{value.prob!r} {words_str} {value.backoff!r}", file=self.outfile)
        else:
            print(f"{value.prob!r} {words_str}", file=self.outfile)

    def handle_ngram_order_finished(self, order: int) -> None:
        print(file=self.outfile)

    def cleanup(self) -> None:
        print("\\end\\", file=self.outfile)


class NgramCounter(ArpaReaderCallback):
    """Counts the entries read per order without keeping them."""

    def __init__(self):
        self.lengths: list[int] = []
        self.counts: list[int] = []

    def init_with_lengths(self, lengths: list[int]) -> None:
        self.lengths = list(lengths)

    def handle_ngram_order_started(self, order: int) -> None:
        self.counts.append(0)

    def call(self, ngram: list[int], start: int, end: int, value: ProbBackoffPair, line: str) -> None:
        self.counts[-1] += 1

    def handle_ngram_order_finished(self, order: int) -> None:
        pass

    def cleanup(self) -> None:
        pass

    @property
    def max_order(self) -> int:
        return len(self.counts)


class TeeCallback(ArpaReaderCallback):
    """Forwards every event to several callbacks, in the order given."""

    def __init__(self, *callbacks: ArpaReaderCallback):
        self.callbacks = callbacks

    def init_with_lengths(self, lengths: list[int]) -> None:
        for callback in self.callbacks:
            callback.init_with_lengths(lengths)

    def handle_ngram_order_started(self, order: int) -> None:
        for callback in self.callbacks:
            callback.handle_ngram_order_started(order)

    def call(self, ngram: list[int], start: int, end: int, value: ProbBackoffPair, line: str) -> None:
        for callback in self.callbacks:
            callback.call(ngram, start, end, value, line)

    def handle_ngram_order_finished(self, order: int) -> None:
        for callback in self.callbacks:
            callback.handle_ngram_order_finished(order)

    def cleanup(self) -> None:
        for callback in self.callbacks:
            callback.cleanup()
