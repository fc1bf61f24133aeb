#!/usr/bin/env python

"""Command-line interface for arpareader"""

import argparse
import os
import sys
import tempfile

from arpareader.callback import ArpaWriter, NgramCounter, TeeCallback
from arpareader.errors import ArpaReadError
from arpareader.indexer import StringWordIndexer
from arpareader.reader import DEFAULT_MAX_ORDER, ArpaLmReader


def _create_parser():
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Read an ARPA language model and report its statistics",
        epilog="Truncate a model: arpareader model.arpa -m 2 -o model.2gram.arpa",
    )
    parser.add_argument("model", help="ARPA model file (.gz allowed, '-' for stdin)")
    parser.add_argument(
        "-m",
        "--max-order",
        type=int,
        default=DEFAULT_MAX_ORDER,
        help=f"highest n-gram order to read (default: {DEFAULT_MAX_ORDER})",
    )
    parser.add_argument("-o", "--output", type=str, help="write the model read (up to -m) as ARPA to this file")
    parser.add_argument("--vocab", type=str, metavar="FILE", help="write the vocabulary, one word per line")
    parser.add_argument("--encoding", type=str, default="utf-8", help="file encoding (default: utf-8)")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose output to stderr")
    return parser


def print_statistics(counter: NgramCounter, word_indexer: StringWordIndexer) -> None:
    """Print declared and read n-gram counts in formatted output."""
    print("\nModel Statistics")
    print("=" * 50)
    print(f"Order:      {counter.max_order}")
    print(f"Vocabulary: {len(word_indexer):,} words")
    print()
    print("N-gram counts:     declared         read")
    for order in range(1, counter.max_order + 1):
        declared = counter.lengths[order - 1] if order <= len(counter.lengths) else 0
        print(f"  {order}-grams: {declared:>16,} {counter.counts[order - 1]:>12,}")


def _read_model(args, word_indexer: StringWordIndexer) -> NgramCounter:
    """Read the model once, counting n-grams and writing -o output if requested."""
    reader = ArpaLmReader(
        args.model, word_indexer, max_order=args.max_order, verbose=args.verbose, encoding=args.encoding
    )
    counter = NgramCounter()

    if not args.output:
        reader.parse(counter)
        return counter

    # Write next to the target and move into place only once the whole model was read
    out_dir = os.path.dirname(os.path.abspath(args.output))
    with tempfile.NamedTemporaryFile(
        "w", encoding=args.encoding, dir=out_dir, prefix=".arpareader-", suffix=".tmp", delete=False
    ) as outfile:
        tmp_path = outfile.name
        try:
            reader.parse(TeeCallback(counter, ArpaWriter(outfile, word_indexer)))
        except BaseException:
            outfile.close()
            os.unlink(tmp_path)
            raise
    os.replace(tmp_path, args.output)
    if args.verbose:
        print(f"Wrote {args.output}", file=sys.stderr)
    return counter


def _write_vocab(path: str, word_indexer: StringWordIndexer, encoding: str) -> None:
    with open(path, "w", encoding=encoding) as f:
        for word in word_indexer:
            print(word, file=f)


def main():
    parser = _create_parser()
    args = parser.parse_args()

    if args.max_order < 1:
        parser.error(f"--max-order must be at least 1, got {args.max_order}")

    word_indexer = StringWordIndexer()
    try:
        counter = _read_model(args, word_indexer)
        if args.vocab:
            _write_vocab(args.vocab, word_indexer, args.encoding)
    except (ArpaReadError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print_statistics(counter, word_indexer)


if __name__ == "__main__":
    main()
