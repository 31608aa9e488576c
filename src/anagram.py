"""Parallel trie walk that finds anagrams of a phrase with a known MD5 hash."""

from __future__ import annotations

import hashlib
import logging
import queue
import threading
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import NamedTuple

from src.constants import DEFAULT_FAN_OUT_DEPTH
from src.trie import TrieNode

logger = logging.getLogger(__name__)

BACKENDS = ("thread", "process")


class Match(NamedTuple):
    """An anagram whose hash is one of the accepted ones."""
    text: str
    digest: str


class SearchState(NamedTuple):
    """Where a branch stands: the node to extend, the text so far, the unused letters."""
    parent: TrieNode
    prefix: str
    remaining: str


@dataclass(frozen=True)
class SearchConfig:
    """What to search for. Shared by every branch, never modified."""
    trie_root: TrieNode
    phrase: str
    accepted_hashes: frozenset[str]
    max_words: int

    def __post_init__(self) -> None:
        if self.max_words < 1:
            raise ValueError(f"max_words must be at least 1, got {self.max_words}")
        if not isinstance(self.accepted_hashes, frozenset):
            object.__setattr__(self, "accepted_hashes", frozenset(self.accepted_hashes))


# ---------------------------------------------------------------------------
# Letter bookkeeping
# ---------------------------------------------------------------------------

def try_consume(character: str, remaining: str) -> str | None:
    """Remove the first occurrence of *character* from *remaining*.

    Non-alphabetic characters cost nothing and leave *remaining* as is.
    Returns ``None`` when the letter is not available.
    """
    if not character.isalpha():
        return remaining
    index = remaining.find(character)
    if index < 0:
        return None
    return remaining[:index] + remaining[index + 1:]


def phrase_contains(word: str, phrase: str) -> bool:
    """True if the letters of *word* are a sub-multiset of those of *phrase*."""
    remaining: str | None = phrase
    for ch in word:
        if not ch.isalpha():
            continue
        remaining = try_consume(ch, remaining)
        if remaining is None:
            return False
    return True


def md5_hex(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Result channels
# ---------------------------------------------------------------------------

_DONE = object()


class _PoolSession:
    """Fan-out bookkeeping for one thread-pool search.

    Every submitted branch holds a reference on the session; the branch that
    drops the last reference closes the result queue.
    """

    def __init__(self, executor: Executor, cancel: threading.Event | None) -> None:
        self.results: queue.Queue = queue.Queue()
        self.abort = threading.Event()
        self._executor = executor
        self._cancel = cancel
        self._lock = threading.Lock()
        self._pending = 0

    def stopped(self) -> bool:
        return self.abort.is_set() or (self._cancel is not None and self._cancel.is_set())

    def emit(self, match: Match) -> None:
        self.results.put(match)

    def spawn(self, fn: Callable[..., None], *args: object) -> None:
        with self._lock:
            self._pending += 1
        try:
            self._executor.submit(self._run, fn, args)
        except RuntimeError:
            # Pool already shut down by an aborted consumer
            self._release()
            if not self.abort.is_set():
                raise

    def _run(self, fn: Callable[..., None], args: tuple) -> None:
        try:
            if not self.stopped():
                fn(self, *args)
        except Exception as exc:
            self.abort.set()
            self.results.put(exc)
        finally:
            self._release()

    def _release(self) -> None:
        with self._lock:
            self._pending -= 1
            last = self._pending == 0
        if last:
            self.results.put(_DONE)


class _Collector:
    """Sequential session: branches run inline and matches go to a list."""

    def __init__(self) -> None:
        self.matches: list[Match] = []

    def stopped(self) -> bool:
        return False

    def emit(self, match: Match) -> None:
        self.matches.append(match)

    def spawn(self, fn: Callable[..., None], *args: object) -> None:
        fn(self, *args)


# ---------------------------------------------------------------------------
# Search engine
# ---------------------------------------------------------------------------

class AnagramFinder:
    """Search the trie for anagrams of ``config.phrase`` with an accepted hash.

    ``fan_out_depth`` limits how deep branches are handed to the pool: a
    branch whose prefix is at least that long recurses on the worker that
    reached it. ``None`` fans out at every level, which queues the whole
    search frontier on the pool and only suits small tries. ``cancel`` is
    an optional event that stops the search early when set.
    """

    def __init__(self, config: SearchConfig, workers: int | None = None,
                 backend: str = "thread",
                 fan_out_depth: int | None = DEFAULT_FAN_OUT_DEPTH,
                 cancel: threading.Event | None = None) -> None:
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}, expected one of {BACKENDS}")
        if fan_out_depth is not None and fan_out_depth < 0:
            raise ValueError(f"fan_out_depth must be >= 0, got {fan_out_depth}")
        self.config = config
        self.workers = workers
        self.backend = backend
        self.fan_out_depth = fan_out_depth
        self.cancel = cancel

    def initial_state(self) -> SearchState:
        phrase = "".join(ch for ch in self.config.phrase if not ch.isspace())
        return SearchState(self.config.trie_root, "", phrase)

    def verify(self, candidate: str) -> str | None:
        """Return the MD5 of *candidate* if it is an accepted hash, else None."""
        digest = md5_hex(candidate)
        if digest in self.config.accepted_hashes:
            return digest
        return None

    def search(self) -> Iterator[Match]:
        """Stream every match. Order depends on scheduling and is not stable.

        Nothing starts until the first item is requested. Closing the
        generator, or dropping it, aborts the remaining branches.
        """
        if self.backend == "process":
            return self._search_processes()
        return self._search_threads()

    def search_all(self) -> list[Match]:
        """Walk the whole trie on the calling thread and return the matches."""
        collector = _Collector()
        self._combine(collector, self.initial_state())
        return collector.matches

    # -- traversal ---------------------------------------------------------

    def _fans_out(self, prefix: str) -> bool:
        return self.fan_out_depth is None or len(prefix) < self.fan_out_depth

    def _combine(self, session, state: SearchState) -> None:
        """Try every child of ``state.parent`` as the next letter."""
        fan_out = self._fans_out(state.prefix)
        for node in state.parent.children.values():
            if session.stopped():
                return
            if fan_out:
                session.spawn(self._branch, node, state)
            else:
                self._branch(session, node, state)

    def _branch(self, session, node: TrieNode, state: SearchState) -> None:
        remaining = try_consume(node.character, state.remaining)
        if remaining is None:
            return

        candidate = state.prefix + node.character

        if not remaining:
            if node.is_word:
                digest = self.verify(candidate)
                if digest is not None:
                    logger.info("Found %s %s", digest, candidate)
                    session.emit(Match(candidate, digest))
            return

        # Keep growing the current word
        self._combine(session, SearchState(node, candidate, remaining))

        # and, independently, close it here and start the next one
        if node.is_word and len(candidate.split()) < self.config.max_words:
            self._combine(session, SearchState(self.config.trie_root, candidate + " ", remaining))

    # -- backends ----------------------------------------------------------

    def _log_start(self) -> None:
        logger.info("Searching anagrams of %r (max %d words, %d hashes, %s backend)",
                    self.config.phrase, self.config.max_words,
                    len(self.config.accepted_hashes), self.backend)

    def _log_end(self, finished: bool, found: int) -> None:
        if finished:
            logger.info("Search finished with %d matches", found)
        else:
            logger.warning("Search aborted after %d matches", found)

    def _search_threads(self) -> Iterator[Match]:
        self._log_start()
        executor = ThreadPoolExecutor(max_workers=self.workers,
                                      thread_name_prefix="anagram")
        session = _PoolSession(executor, self.cancel)
        found = 0
        finished = False
        try:
            session.spawn(self._combine, self.initial_state())
            while True:
                item = session.results.get()
                if item is _DONE:
                    finished = True
                    break
                if isinstance(item, Exception):
                    raise item
                found += 1
                yield item
        finally:
            if finished:
                executor.shutdown(wait=True)
            else:
                session.abort.set()
                executor.shutdown(wait=False, cancel_futures=True)
            self._log_end(finished, found)

    def _search_processes(self) -> Iterator[Match]:
        self._log_start()
        state = self.initial_state()
        executor = ProcessPoolExecutor(max_workers=self.workers,
                                       initializer=_init_worker,
                                       initargs=(self.config,))
        found = 0
        finished = False
        try:
            futures = [executor.submit(_walk_root_branch, ch, state.remaining)
                       for ch in state.parent.children]
            for future in as_completed(futures):
                if self._cancelled():
                    break
                for match in future.result():
                    found += 1
                    yield match
            else:
                finished = True
        finally:
            executor.shutdown(wait=finished, cancel_futures=not finished)
            self._log_end(finished, found)

    def _cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()


# Per-process finder, set by the pool initializer
_worker_finder: AnagramFinder | None = None


def _init_worker(config: SearchConfig) -> None:
    global _worker_finder
    _worker_finder = AnagramFinder(config)


def _walk_root_branch(character: str, remaining: str) -> list[Match]:
    """Explore every anagram whose first letter is *character*."""
    if _worker_finder is None:
        raise RuntimeError("Worker process was started without a search config")
    root = _worker_finder.config.trie_root
    collector = _Collector()
    _worker_finder._branch(collector, root.children[character],
                           SearchState(root, "", remaining))
    return collector.matches


def search(config: SearchConfig, **options) -> Iterator[Match]:
    """Shortcut for ``AnagramFinder(config, **options).search()``."""
    return AnagramFinder(config, **options).search()


def find_anagrams(trie_root: TrieNode, phrase: str, hashes: Iterable[str],
                  max_words: int, **options) -> list[Match]:
    """Run a complete search and collect the matches."""
    config = SearchConfig(trie_root, phrase, frozenset(hashes), max_words)
    return list(search(config, **options))
