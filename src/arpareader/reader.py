"""Streaming parser for ARPA format language model files

Reads an ARPA file in a single forward pass and reports its contents to an
ArpaReaderCallback. Nothing is kept in memory beyond the current line:

    \\data\\
    ngram 1=3
    ngram 2=1

    \\1-grams:
    -1.0000 <s>    -0.3010
    -0.6990 hello  -0.2553
    -0.6990 </s>

    \\2-grams:
    -0.2553 <s> hello

    \\end\\
"""

import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from arpareader.callback import ArpaReaderCallback, NgramCollector, ProbBackoffPair
from arpareader.errors import ArpaIOError, EntryFormatError, HeaderFormatError, ParseCancelled
from arpareader.indexer import END_SYMBOL, START_SYMBOL, UNK_SYMBOL, StringWordIndexer, WordIndexer
from arpareader.line_source import LineSource, Source

DEFAULT_MAX_ORDER = 5
PROGRESS_INTERVAL = 100000  # data lines between progress messages

NGRAM_COUNT_PREFIX = "ngram "
UNIGRAM_SECTION_MARKER = "\\1-grams:"
BLOCK_DELIMITER = "\\"
END_MARKER = "\\end"


@dataclass
class ParserState:
    """Mutable state of one parse; reset at the start of every parse."""

    current_order: int = 1
    current_count: int = 0
    line_number: int = 0


class ArpaLmReader:
    """
    Reads ARPA language models and reports each n-gram to a callback.

    Orders above max_order are not reported: reading stops at the first
    section past it. Words are mapped to integer ids through the word
    indexer, which afterwards also holds the <s>, </s> and <unk> symbols
    whether or not the file mentions them.

    Example:
        indexer = StringWordIndexer()
        reader = ArpaLmReader("model.arpa", indexer, max_order=3)
        collector = reader.parse(NgramCollector())

    A reader instance holds the state of the parse in progress, so one
    instance must not be shared between concurrent parses.
    """

    def __init__(
        self,
        source: Source,
        word_indexer: WordIndexer,
        max_order: int = DEFAULT_MAX_ORDER,
        verbose: bool = False,
        encoding: str = "utf-8",
        cancel_event: Optional[Any] = None,
    ):
        if max_order < 1:
            raise ValueError(f"Max order {max_order} must be at least 1")

        self.source = source
        self.word_indexer = word_indexer
        self.max_order = max_order
        self.verbose = verbose
        self.encoding = encoding
        self.cancel_event = cancel_event

        self.logfile = sys.stderr
        self.state = ParserState()
        self._lines: Optional[LineSource] = None

    def parse(self, callback: ArpaReaderCallback) -> ArpaReaderCallback:
        """Parse the whole file, driving callback through its lifecycle.

        Returns:
            The callback, for chaining

        Raises:
            ArpaIOError: If the source cannot be opened or read
            HeaderFormatError: If the header is malformed
            EntryFormatError: If an n-gram line is malformed
            ParseCancelled: If cancel_event was set during the parse
        """
        self.state = ParserState()
        start_time = datetime.now()

        with LineSource(self.source, encoding=self.encoding) as lines:
            self._lines = lines
            try:
                if self.verbose:
                    print(f"Parsing ARPA language model file {lines.name}", file=self.logfile)

                lengths = self._parse_header()
                if self.verbose:
                    print(f"Declared n-gram counts: {lengths}", file=self.logfile)
                callback.init_with_lengths(lengths)
                self._parse_ngrams(callback)
            finally:
                self._lines = None

        callback.cleanup()
        self._add_special_symbols()

        if self.verbose:
            elapsed = datetime.now() - start_time
            print(f"Finished parsing (elapsed: {elapsed.total_seconds():.2f}s)", file=self.logfile)
        return callback

    def _parse_header(self) -> list[int]:
        """Read the \\data\\ section up to the start of the unigrams.

        Returns:
            Declared n-gram counts, one per order up to max_order
        """
        lengths: list[int] = []
        while (line := self._read_line()) is not None:
            if line.startswith(NGRAM_COUNT_PREFIX):
                count = self._parse_count(line)
                if len(lengths) < self.max_order:
                    lengths.append(count)
            if UNIGRAM_SECTION_MARKER in line:
                return lengths

        raise HeaderFormatError(
            f"End of input before {UNIGRAM_SECTION_MARKER} section", line_number=self.state.line_number
        )

    def _parse_count(self, line: str) -> int:
        _, equals, count_str = line.partition("=")
        if not equals:
            raise HeaderFormatError("Missing '=' in n-gram count", line_number=self.state.line_number, line=line)
        # int() would accept digit separators such as 1_000
        if "_" in count_str:
            raise HeaderFormatError("Bad n-gram count", line_number=self.state.line_number, line=line)
        try:
            count = int(count_str)
        except ValueError as e:
            raise HeaderFormatError("Bad n-gram count", line_number=self.state.line_number, line=line) from e
        if count < 0:
            raise HeaderFormatError("Negative n-gram count", line_number=self.state.line_number, line=line)
        return count

    def _parse_ngrams(self, callback: ArpaReaderCallback) -> None:
        """Read the n-gram sections that follow the header."""
        state = self.state
        data_lines = 0
        self._log_order_started()
        callback.handle_ngram_order_started(state.current_order)
        ngram = [0] * state.current_order

        while (line := self._read_line()) is not None:
            if not line.strip():
                continue

            if line.startswith(BLOCK_DELIMITER):
                self._log_order_finished()
                callback.handle_ngram_order_finished(state.current_order)
                if line.startswith(END_MARKER):
                    return

                state.current_order += 1
                if state.current_order > self.max_order:
                    return
                state.current_count = 0
                ngram = [0] * state.current_order
                self._log_order_started()
                callback.handle_ngram_order_started(state.current_order)
                continue

            if self.verbose and data_lines % PROGRESS_INTERVAL == 0:
                print(f"Read {data_lines} lines", file=self.logfile)
            data_lines += 1
            self.parse_line(callback, line, ngram)

        # No \end\ marker: keep what was read
        self._log_order_finished()
        callback.handle_ngram_order_finished(state.current_order)

    def parse_line(self, callback: ArpaReaderCallback, line: str, ngram: list[int]) -> None:
        """Parse one n-gram entry line and pass it to the callback.

        Entry format: <log10 prob> <word>{n} [<log10 backoff>]
        """
        order = len(ngram)
        elements = line.split()
        has_backoff = len(elements) == order + 2
        if not has_backoff and len(elements) != order + 1:
            raise EntryFormatError(
                f"Expected {order + 1} or {order + 2} fields for a {order}-gram, got {len(elements)}",
                line_number=self.state.line_number,
                line=line,
            )

        log_prob = self._parse_float(elements[0], "probability", line)
        if log_prob > 0.0:
            raise EntryFormatError("Bad ARPA line (probability)", line_number=self.state.line_number, line=line)
        # Backoff weights are not probabilities and may be positive
        backoff = self._parse_float(elements[-1], "backoff", line) if has_backoff else 0.0

        for index in range(order):
            try:
                ngram[index] = self.word_indexer.get_or_add_index(elements[index + 1])
            except KeyError as e:
                raise EntryFormatError(
                    f"Word '{elements[index + 1]}' not in vocabulary", line_number=self.state.line_number, line=line
                ) from e

        callback.call(ngram, 0, order, ProbBackoffPair(log_prob, backoff), line)
        self.state.current_count += 1

    def _parse_float(self, text: str, what: str, line: str) -> float:
        if "_" in text:
            raise EntryFormatError(f"Bad {what} '{text}'", line_number=self.state.line_number, line=line)
        try:
            return float(text)
        except ValueError as e:
            raise EntryFormatError(f"Bad {what} '{text}'", line_number=self.state.line_number, line=line) from e

    def _read_line(self) -> Optional[str]:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ParseCancelled("Parse cancelled", line_number=self.state.line_number)
        if self._lines is None:
            raise ArpaIOError("Source is not open; call parse()")
        line = self._lines.read_line()
        self.state.line_number = self._lines.line_number
        return line

    def _add_special_symbols(self) -> None:
        # Registered even in a locked indexer
        self.word_indexer.set_start_symbol(START_SYMBOL)
        self.word_indexer.set_end_symbol(END_SYMBOL)
        self.word_indexer.set_unk_symbol(UNK_SYMBOL)

    def _log_order_started(self) -> None:
        if self.verbose:
            print(f"Reading {self.state.current_order}-grams", file=self.logfile)

    def _log_order_finished(self) -> None:
        if self.verbose:
            print(f"{self.state.current_count} {self.state.current_order}-grams read", file=self.logfile)


def read_arpa_file(
    source: Source,
    max_order: int = DEFAULT_MAX_ORDER,
    word_indexer: Optional[WordIndexer] = None,
    verbose: bool = False,
) -> tuple[NgramCollector, WordIndexer]:
    """Load an ARPA model into memory.

    Args:
        source: Path (.gz allowed), "-" for stdin, or open text stream
        max_order: Highest n-gram order to keep
        word_indexer: Vocabulary to extend (default: a new StringWordIndexer)
        verbose: Print progress to stderr

    Returns:
        (collector holding the n-grams, word indexer)
    """
    if word_indexer is None:
        word_indexer = StringWordIndexer()
    reader = ArpaLmReader(source, word_indexer, max_order=max_order, verbose=verbose)
    collector = reader.parse(NgramCollector())
    return collector, word_indexer
