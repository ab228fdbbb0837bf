"""Delayed AI steps and their cancellation."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Tuple

LOGGER = logging.getLogger(__name__)

Callback = Callable[[], None]


class CancellationToken:
    """Shared flag checked by a scheduled step before it runs."""

    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


def guarded(token: CancellationToken, callback: Callback, label: str = "step") -> Callback:
    """Wrap ``callback`` so it does nothing once ``token`` is cancelled."""

    def run() -> None:
        if token.cancelled:
            LOGGER.debug("Dropped stale %s", label)
            return
        callback()

    return run


class Scheduler(ABC):
    """Runs a callback after a delay on the single game thread."""

    @abstractmethod
    def schedule(self, delay_ms: int, callback: Callback) -> None:
        raise NotImplementedError


class ImmediateScheduler(Scheduler):
    """Runs callbacks synchronously, optionally sleeping ``delay_ms`` first for pacing."""

    def __init__(self, pause: bool = False) -> None:
        self.pause = pause

    def schedule(self, delay_ms: int, callback: Callback) -> None:
        if self.pause and delay_ms > 0:
            time.sleep(delay_ms / 1000.0)
        callback()


class ManualScheduler(Scheduler):
    """Queues callbacks until ``run_next``/``run_all`` is called."""

    def __init__(self) -> None:
        self.pending: Deque[Tuple[int, Callback]] = deque()

    def schedule(self, delay_ms: int, callback: Callback) -> None:
        self.pending.append((delay_ms, callback))

    def run_next(self) -> bool:
        if not self.pending:
            return False
        _, callback = self.pending.popleft()
        callback()
        return True

    def run_all(self) -> int:
        count = 0
        while self.run_next():
            count += 1
        return count
