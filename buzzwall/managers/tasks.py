from __future__ import annotations
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from ..schemas import TaskResult

logger = logging.getLogger(__name__)

TASK_TTL_SEC = 60 * 60


class TaskStatusStore:
    """Music generation results pushed to us by the provider's webhook."""

    def __init__(self, ttl_sec: float = TASK_TTL_SEC, clock: Callable[[], float] = time.time):
        self.ttl_ms = int(ttl_sec * 1000)
        self._clock = clock
        self._lock = threading.Lock()
        self._results: Dict[str, TaskResult] = {}

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def set(self, task_id: str, **fields: Any) -> TaskResult:
        with self._lock:
            existing = self._results.get(task_id) or TaskResult(taskId=task_id)
            merged = TaskResult.model_validate({
                **existing.model_dump(),
                **fields,
                'taskId': task_id,
                'updatedAt': self._now_ms(),
            })
            self._results[task_id] = merged
            return merged

    def get(self, task_id: str) -> Optional[TaskResult]:
        with self._lock:
            return self._results.get(task_id)

    def sweep(self) -> int:
        now = self._now_ms()
        with self._lock:
            stale = [tid for tid, r in self._results.items() if now - r.updatedAt >= self.ttl_ms]
            for tid in stale:
                del self._results[tid]
        if stale:
            logger.info("Dropped %d stale music tasks", len(stale))
        return len(stale)
