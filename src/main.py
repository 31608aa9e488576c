"""CLI entry point: follow the rabbit and see how deep the hole goes."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from src.anagram import BACKENDS, AnagramFinder, SearchConfig
from src.constants import (
    DEFAULT_DICTIONARY_PATH,
    DEFAULT_FAN_OUT_DEPTH,
    DEFAULT_HASHES,
    DEFAULT_MAX_WORDS,
    DEFAULT_MIN_WORD_LEN,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PHRASE,
)
from src.dictionary import load_dictionary
from src.display import print_summary, write_results
from src.trie import build_trie


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _depth(value: str) -> int | None:
    if value.lower() in ("none", "all"):
        return None
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Search for anagrams of a phrase matching known MD5 hashes",
    )
    parser.add_argument(
        "--dictionary", "-d",
        default=DEFAULT_DICTIONARY_PATH,
        metavar="FILE",
        help=f"Dictionary file, one word per line (default: {DEFAULT_DICTIONARY_PATH})",
    )
    parser.add_argument(
        "--output", "-o",
        default=DEFAULT_OUTPUT_FILE,
        metavar="FILE",
        help=f"Output file path (default: {DEFAULT_OUTPUT_FILE})",
    )
    parser.add_argument(
        "--words", "-w",
        type=_positive_int,
        default=DEFAULT_MAX_WORDS,
        help=f"Maximum number of words in an anagram (default: {DEFAULT_MAX_WORDS})",
    )
    parser.add_argument(
        "--length", "-l",
        type=_positive_int,
        default=DEFAULT_MIN_WORD_LEN,
        help=f"Minimum length of a word (default: {DEFAULT_MIN_WORD_LEN})",
    )
    parser.add_argument(
        "--phrase", "-p",
        default=DEFAULT_PHRASE,
        help=f'Phrase to find anagrams of (default: "{DEFAULT_PHRASE}")',
    )
    parser.add_argument(
        "--hash",
        dest="hashes",
        action="append",
        metavar="MD5",
        help="Accepted MD5 hex digest; repeat for several (default: the three targets)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="thread",
        help="Run branches on a thread pool or a process pool (default: thread)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Pool size (default: chosen by the executor)",
    )
    parser.add_argument(
        "--fan-out-depth",
        type=_depth,
        default=DEFAULT_FAN_OUT_DEPTH,
        help=f'Prefix length up to which branches go to the pool, "all" for every level '
             f"(default: {DEFAULT_FAN_OUT_DEPTH})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log progress and every match",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    phrase = args.phrase.lower()
    hashes = [h.lower() for h in args.hashes] if args.hashes else list(DEFAULT_HASHES)

    start = time.perf_counter()

    print(f"Loading dictionary from {args.dictionary}...")
    try:
        words = load_dictionary(args.dictionary, phrase, args.length)
    except FileNotFoundError as e:
        print(e)
        sys.exit(1)
    print(f"Kept {len(words)} words usable for \"{phrase}\".")

    trie = build_trie(words)
    config = SearchConfig(trie, phrase, frozenset(hashes), args.words)
    finder = AnagramFinder(
        config,
        workers=args.workers,
        backend=args.backend,
        fan_out_depth=args.fan_out_depth,
    )

    print(f"Searching anagrams of up to {args.words} words...")
    try:
        with open(args.output, "w", encoding="utf-8") as out:
            count = write_results(finder.search(), out, echo=True)
    except KeyboardInterrupt:
        print("\nInterrupted. Matches found so far are in " + args.output)
        sys.exit(130)

    print_summary(count, time.perf_counter() - start)


if __name__ == "__main__":
    main()
