"""Unit tests for the letter trie."""

from __future__ import annotations

from src.constants import HEAD_CHARACTER
from src.trie import TrieNode, build_trie, is_valid_word, iter_words, node_count


def _shape(node: TrieNode) -> tuple:
    return (node.character, node.is_word,
            tuple(_shape(child) for child in node.children.values()))


class TestBuildTrie:
    def test_single_word(self) -> None:
        head = build_trie(["abalone"])
        assert len(head.children) == 1
        assert node_count(head) == 7

    def test_multiple_words(self) -> None:
        head = build_trie(["abalone", "convene"])
        assert len(head.children) == 2

    def test_shared_prefix(self) -> None:
        head = build_trie(["a", "an", "ant"])
        assert list(head.children) == ["a"]
        a = head.children["a"]
        assert a.is_word
        assert a.children["n"].is_word
        assert a.children["n"].children["t"].is_word
        assert node_count(head) == 3

    def test_head_is_sentinel(self) -> None:
        head = build_trie(["tea"])
        assert head.character == HEAD_CHARACTER
        assert not head.is_word

    def test_empty_word_list(self) -> None:
        head = build_trie([])
        assert head.children == {}
        assert not head.is_word

    def test_intermediate_nodes_not_words(self) -> None:
        head = build_trie(["ant"])
        assert not head.children["a"].is_word
        assert not head.children["a"].children["n"].is_word

    def test_children_keep_insertion_order(self) -> None:
        head = build_trie(["tea", "eat", "ate"])
        assert list(head.children) == ["t", "e", "a"]

    def test_children_characters_distinct(self) -> None:
        head = build_trie(["tea", "ten", "tin", "to"])
        assert list(head.children) == ["t"]
        assert list(head.children["t"].children) == ["e", "i", "o"]


class TestIdempotentBuild:
    def test_duplicate_insert_same_shape(self) -> None:
        once = build_trie(["ant", "an", "tea"])
        twice = build_trie(["ant", "an", "ant", "tea", "an"])
        assert _shape(once) == _shape(twice)

    def test_duplicate_keeps_flag_boolean(self) -> None:
        head = build_trie(["ant", "ant"])
        assert head.children["a"].children["n"].children["t"].is_word is True


class TestLookup:
    def test_every_inserted_word_found(self) -> None:
        words = ["ate", "eat", "tea", "a", "et"]
        head = build_trie(words)
        for w in words:
            assert is_valid_word(head, w)

    def test_missing_words(self) -> None:
        head = build_trie(["ant", "tea"])
        assert not is_valid_word(head, "an")
        assert not is_valid_word(head, "ants")
        assert not is_valid_word(head, "zebra")
        assert not is_valid_word(head, "")

    def test_iter_words_round_trip(self, tinsel_words: list[str]) -> None:
        head = build_trie(tinsel_words)
        assert sorted(iter_words(head)) == sorted(set(tinsel_words))

    def test_iter_words_only_marked_paths(self) -> None:
        head = build_trie(["ant"])
        assert list(iter_words(head)) == ["ant"]
