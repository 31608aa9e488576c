"""Word list loading and filtering down to the words usable for a phrase."""

from __future__ import annotations

import logging
from pathlib import Path

from src.anagram import phrase_contains

logger = logging.getLogger(__name__)


def load_file(path: str | Path) -> str:
    """Read the dictionary file (one word per line)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Dictionary not found at {path}. "
            "Pass a word list with --dictionary or place it at ./wordlist"
        )
    return path.read_text(encoding="utf-8", errors="ignore")


def filter_words(content: str, phrase: str, min_word_len: int) -> list[str]:
    """Turn raw word list content into the sorted, deduplicated words of *phrase*.

    Lines that are empty or contain anything but letters are dropped. The
    rest are lower-cased and kept only if they fit in the phrase's letters
    and are at least *min_word_len* long. The result is ordered by length,
    then alphabetically.
    """
    stripped = (line.strip() for line in content.splitlines())
    lowered = {line.lower() for line in stripped if line and line.isalpha()}
    words = [w for w in lowered
             if len(w) >= min_word_len and phrase_contains(w, phrase)]
    words.sort(key=lambda w: (len(w), w))
    logger.info("Kept %d of %d dictionary words for %r",
                len(words), len(lowered), phrase)
    return words


def load_dictionary(path: str | Path, phrase: str, min_word_len: int) -> list[str]:
    return filter_words(load_file(path), phrase, min_word_len)
