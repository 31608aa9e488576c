"""Writing found anagrams and the end-of-run summary."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from src.anagram import Match


def format_match(match: Match) -> str:
    """One result line: ``<digest> <anagram>``."""
    return f"{match.digest} {match.text}"


def write_results(matches: Iterable[Match], out: TextIO, echo: bool = False) -> int:
    """Write each match as it arrives and return how many were written."""
    count = 0
    for match in matches:
        line = format_match(match)
        out.write(line + "\n")
        out.flush()
        if echo:
            print(line)
        count += 1
    return count


def print_summary(count: int, elapsed: float) -> None:
    print(f"\nFound {count} matching anagram{'s' if count != 1 else ''}")
    print(f"executed in: {elapsed:.3f}s")
