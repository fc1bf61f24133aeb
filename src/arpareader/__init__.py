"""arpareader - Stream ARPA format language models into your own model builder

The reader makes a single forward pass over an ARPA file and reports every
n-gram, as word ids plus log10 probability and backoff weight, to a callback.

Library Usage:
    from arpareader import ArpaLmReader, NgramCollector, StringWordIndexer

    indexer = StringWordIndexer()
    reader = ArpaLmReader("model.arpa.gz", indexer, max_order=3)
    collector = reader.parse(NgramCollector())

    # or, in one call
    from arpareader import read_arpa_file
    collector, indexer = read_arpa_file("model.arpa", max_order=3)

Command Line Usage:
    arpareader model.arpa
    arpareader model.arpa -m 2 -o model.2gram.arpa
    arpareader model.arpa --vocab words.txt
"""

from arpareader.callback import (
    ArpaReaderCallback,
    ArpaWriter,
    NgramCollector,
    NgramCounter,
    ProbBackoffPair,
    TeeCallback,
)
from arpareader.errors import (
    ArpaFormatError,
    ArpaIOError,
    ArpaReadError,
    EntryFormatError,
    ErrorKind,
    HeaderFormatError,
    ParseCancelled,
)
from arpareader.indexer import END_SYMBOL, START_SYMBOL, UNK_SYMBOL, StringWordIndexer, WordIndexer
from arpareader.line_source import LineSource
from arpareader.reader import DEFAULT_MAX_ORDER, ArpaLmReader, ParserState, read_arpa_file

__version__ = "0.1.0"
__all__ = [
    "ArpaFormatError",
    "ArpaIOError",
    "ArpaLmReader",
    "ArpaReadError",
    "ArpaReaderCallback",
    "ArpaWriter",
    "DEFAULT_MAX_ORDER",
    "END_SYMBOL",
    "EntryFormatError",
    "ErrorKind",
    "HeaderFormatError",
    "LineSource",
    "NgramCollector",
    "NgramCounter",
    "ParseCancelled",
    "ParserState",
    "ProbBackoffPair",
    "START_SYMBOL",
    "StringWordIndexer",
    "TeeCallback",
    "UNK_SYMBOL",
    "WordIndexer",
    "read_arpa_file",
]
