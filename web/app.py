"""Anagram search web API, Flask backend."""
from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

# Ensure project root is on sys.path so `src.*` imports work
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from flask import Flask, jsonify, request

from src.anagram import AnagramFinder, SearchConfig, phrase_contains
from src.constants import (
    DEFAULT_DICTIONARY_PATH,
    DEFAULT_MAX_WORDS,
    DEFAULT_MIN_WORD_LEN,
)
from src.dictionary import filter_words, load_file
from src.trie import build_trie

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["DICTIONARY_PATH"] = DEFAULT_DICTIONARY_PATH

# Raw dictionary content keyed by path, read on first use
_CONTENT: dict[str, str] = {}


def _dictionary_content() -> str:
    path = str(app.config["DICTIONARY_PATH"])
    if path not in _CONTENT:
        _CONTENT[path] = load_file(path)
    return _CONTENT[path]


def _int_field(data: dict, name: str, default: int) -> int:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    if value < 1:
        raise ValueError(f"{name} must be at least 1")
    return value


@app.route("/search", methods=["POST"])
def search_route():
    data = request.get_json(silent=True) or {}
    phrase = str(data.get("phrase", "")).lower()
    hashes = data.get("hashes") or []
    if not phrase.strip():
        return jsonify({"error": "No phrase provided"}), 400
    if not isinstance(hashes, list) or not hashes:
        return jsonify({"error": "No hashes provided"}), 400

    try:
        max_words = _int_field(data, "max_words", DEFAULT_MAX_WORDS)
        min_length = _int_field(data, "min_length", DEFAULT_MIN_WORD_LEN)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    try:
        content = _dictionary_content()
    except FileNotFoundError as e:
        logger.error("Dictionary unavailable: %s", e)
        return jsonify({"error": str(e)}), 500

    start = time.perf_counter()
    words = filter_words(content, phrase, min_length)
    config = SearchConfig(
        build_trie(words), phrase, frozenset(str(h).lower() for h in hashes), max_words,
    )
    finder = AnagramFinder(config)
    try:
        matches = list(finder.search())
    except Exception as e:
        logger.exception("Search failed for %r", phrase)
        return jsonify({"error": f"Search error: {e}"}), 500

    return jsonify({
        "matches": [{"anagram": m.text, "hash": m.digest} for m in matches],
        "word_count": len(words),
        "elapsed": round(time.perf_counter() - start, 3),
    })


@app.route("/contains", methods=["POST"])
def contains_route():
    data = request.get_json(silent=True) or {}
    word = data.get("word")
    phrase = data.get("phrase")
    if not isinstance(word, str) or not isinstance(phrase, str):
        return jsonify({"error": "word and phrase are required"}), 400
    return jsonify({"contains": phrase_contains(word.lower(), phrase.lower())})


if __name__ == "__main__":
    app.run(debug=True)
