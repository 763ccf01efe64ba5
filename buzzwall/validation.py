"""Checks applied to submitted words before they reach the word store.

The store trusts its input length, so anything oversized, empty or not a
string has to be stopped here.
"""
from __future__ import annotations
from typing import Any, Iterable, List

MAX_WORD_LENGTH = 50
MAX_BATCH_SIZE = 80


class SubmissionError(ValueError):
    """Client sent something we cannot put on the wall."""


def _fits(text: str, max_length: int) -> bool:
    return 0 < len(text) <= max_length


def clean_word(value: Any, max_length: int = MAX_WORD_LENGTH) -> str:
    if not value or not isinstance(value, str):
        raise SubmissionError('Word is required')
    trimmed = value.strip()
    if not _fits(trimmed, max_length):
        raise SubmissionError(f'Word must be 1-{max_length} characters')
    return trimmed


def clean_batch(
    values: Iterable[Any],
    max_length: int = MAX_WORD_LENGTH,
    max_batch: int = MAX_BATCH_SIZE,
) -> List[str]:
    """Keep the usable entries of a batch, capped at ``max_batch``.

    Non-strings and out-of-range entries are dropped quietly; only a batch
    with nothing left is an error.
    """
    words = [v.strip() for v in values if isinstance(v, str)]
    words = [w for w in words if _fits(w, max_length)]
    if not words:
        raise SubmissionError('No valid words provided')
    return words[:max_batch]
