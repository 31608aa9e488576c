"""Shared fixtures for anagram search tests."""

from __future__ import annotations

from collections import Counter

import pytest

from src.anagram import SearchConfig
from src.trie import TrieNode, build_trie


def brute_force_anagrams(words: list[str], phrase: str, max_words: int) -> set[str]:
    """Every ordered word sequence using exactly the letters of *phrase*."""
    target = Counter(ch for ch in phrase if not ch.isspace())
    unique = sorted(set(words))
    found: set[str] = set()

    def _extend(sequence: list[str], used: Counter[str]) -> None:
        if used == target:
            found.add(" ".join(sequence))
            return
        if len(sequence) == max_words:
            return
        for word in unique:
            combined = used + Counter(word)
            if all(combined[ch] <= target[ch] for ch in combined):
                _extend(sequence + [word], combined)

    _extend([], Counter())
    return found


@pytest.fixture
def tinsel_words() -> list[str]:
    """Small word list with plenty of one- and multi-word anagrams of "tinsel"."""
    return [
        "in", "is", "it", "el", "en", "es", "et", "li", "ti",
        "nil", "set", "sit", "ten", "tin", "lit", "let", "lie", "sin", "ens",
        "isle", "lent", "lien", "line", "lint", "nest", "nets", "silt", "site",
        "tile", "tine", "inlet", "stein", "islet", "inset",
        "enlist", "inlets", "listen", "silent", "tinsel",
    ]


@pytest.fixture
def tinsel_trie(tinsel_words: list[str]) -> TrieNode:
    return build_trie(tinsel_words)


@pytest.fixture
def make_config():
    """Factory building a SearchConfig straight from a word list."""

    def _make(words: list[str], phrase: str, hashes: list[str],
              max_words: int) -> SearchConfig:
        return SearchConfig(build_trie(words), phrase, frozenset(hashes), max_words)

    return _make


@pytest.fixture
def wordlist_file(tmp_path):
    """A raw dictionary file with the noise the loader has to filter out."""
    path = tmp_path / "wordlist"
    path.write_text(
        "\n".join([
            "Tea", "eat", "ate", "ATE", "a", "et", "",
            "tea's", "e-a", "teas", "beat", "zzz", "  eta  ",
        ]) + "\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def brute_force():
    return brute_force_anagrams
