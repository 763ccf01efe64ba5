from __future__ import annotations
import logging
import threading
import time
import uuid
from collections import deque
from typing import Callable, Deque, Iterable, List, Optional, Set

from ..schemas import Word

logger = logging.getLogger(__name__)

MAX_WORDS = 200
WORD_TTL_SEC = 30 * 60


def normalize(text: str) -> str:
    return text.strip().upper()


class WordStore:
    """Live buzzwords shown on the shared screen.

    Words are kept in insertion order with a parallel set of their texts for
    constant-time duplicate checks. Both structures are only ever touched
    through the ``_append``/``_evict_oldest``/``_sweep_expired``/``_reset``
    helpers, and every public operation holds ``_lock`` for its full duration,
    so readers never see one updated without the other.

    Expiry is lazy: each ``list``/``add`` first drops words older than the TTL.
    """

    def __init__(
        self,
        max_words: int = MAX_WORDS,
        ttl_sec: float = WORD_TTL_SEC,
        clock: Callable[[], float] = time.time,
    ):
        if max_words < 1:
            raise ValueError(f"max_words must be >= 1, got {max_words}")
        self.max_words = max_words
        self.ttl_ms = int(ttl_sec * 1000)
        self._clock = clock
        self._lock = threading.Lock()
        self._words: Deque[Word] = deque()
        self._texts: Set[str] = set()

    def list(self) -> List[Word]:
        with self._lock:
            self._sweep_expired()
            return list(self._words)

    def add(self, text: str) -> Optional[Word]:
        """Add one word. Returns the created Word, or None if it is already live."""
        with self._lock:
            return self._add(text)

    def add_batch(self, texts: Iterable[str]) -> List[Word]:
        with self._lock:
            added = []
            for text in texts:
                word = self._add(text)
                if word is not None:
                    added.append(word)
            return added

    def clear(self) -> None:
        with self._lock:
            self._reset()

    def texts(self) -> List[str]:
        with self._lock:
            self._sweep_expired()
            return [w.text for w in self._words]

    # -- helpers below assume _lock is held

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _add(self, text: str) -> Optional[Word]:
        self._sweep_expired()
        normalized = normalize(text)
        if normalized in self._texts:
            logger.debug("Duplicate word rejected: %s", normalized)
            return None
        if len(self._words) >= self.max_words:
            self._evict_oldest()
        word = Word(id=str(uuid.uuid4()), text=normalized, timestamp=self._now_ms())
        self._append(word)
        return word

    def _append(self, word: Word) -> None:
        self._words.append(word)
        self._texts.add(word.text)

    def _evict_oldest(self) -> None:
        removed = self._words.popleft()
        self._texts.discard(removed.text)
        logger.info("Removed oldest word due to capacity: %s", removed.text)

    def _sweep_expired(self) -> int:
        now = self._now_ms()
        # age == ttl already counts as expired
        expired = [w for w in self._words if now - w.timestamp >= self.ttl_ms]
        if not expired:
            return 0
        gone = {w.id for w in expired}
        self._words = deque(w for w in self._words if w.id not in gone)
        for w in expired:
            self._texts.discard(w.text)
        logger.info("Cleaned %d expired words", len(expired))
        return len(expired)

    def _reset(self) -> None:
        self._words = deque()
        self._texts = set()
