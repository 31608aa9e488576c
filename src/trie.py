"""Letter trie over the filtered word list."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from src.constants import HEAD_CHARACTER

logger = logging.getLogger(__name__)


class TrieNode:
    """One letter of the trie.

    ``children`` is keyed by character, so siblings never repeat a letter and
    iteration follows insertion order.
    """

    __slots__ = ("character", "children", "is_word")

    def __init__(self, character: str) -> None:
        self.character = character
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False

    def child(self, character: str) -> TrieNode | None:
        return self.children.get(character)

    def find_or_insert(self, character: str) -> TrieNode:
        node = self.children.get(character)
        if node is None:
            node = TrieNode(character)
            self.children[character] = node
        return node

    def __repr__(self) -> str:
        return (f"TrieNode({self.character!r}, children={len(self.children)}, "
                f"is_word={self.is_word})")


def build_trie(words: Iterable[str]) -> TrieNode:
    """Build the trie and return its head.

    Words are expected to be lowercase and alphabetic already; nothing is
    validated here. Inserting a word twice leaves the tree unchanged.
    """
    head = TrieNode(HEAD_CHARACTER)
    count = 0
    for word in words:
        _insert(head, word)
        count += 1
    logger.debug("Built trie from %d words", count)
    return head


def _insert(head: TrieNode, word: str) -> None:
    node = head
    for ch in word:
        node = node.find_or_insert(ch)
    if node is not head:
        node.is_word = True


def is_valid_word(head: TrieNode, word: str) -> bool:
    if not word:
        return False
    node: TrieNode | None = head
    for ch in word:
        node = node.child(ch)
        if node is None:
            return False
    return node.is_word


def iter_words(head: TrieNode) -> Iterator[str]:
    """Yield every word stored under ``head`` in depth-first insertion order."""
    stack: list[tuple[TrieNode, str]] = [(head, "")]
    while stack:
        node, prefix = stack.pop()
        if node.is_word:
            yield prefix
        for ch in reversed(list(node.children)):
            stack.append((node.children[ch], prefix + ch))


def node_count(head: TrieNode) -> int:
    """Number of nodes below ``head``, not counting the head itself."""
    total = 0
    stack = list(head.children.values())
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children.values())
    return total
