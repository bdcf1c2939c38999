"""Debounced autosave for a BlockStore."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

from article_block_store.config import DEFAULT_AUTOSAVE_DELAY

from .block_store import BlockStore, SaveError, StoreEvent

logger = logging.getLogger(__name__)


class TimerLike(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerLike]


def _thread_timer(delay: float, callback: Callable[[], None]) -> TimerLike:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class Autosave:
    """Saves the store once ``delay`` seconds pass without a further mutation."""

    def __init__(
        self,
        store: BlockStore,
        delay: float = DEFAULT_AUTOSAVE_DELAY,
        *,
        timer_factory: TimerFactory = _thread_timer,
    ):
        self._store = store
        self._delay = delay
        self._timer_factory = timer_factory
        self._timer: TimerLike | None = None
        self._lock = threading.Lock()
        self._unsubscribe = store.subscribe(self._on_event)

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def flush(self) -> bool:
        """Manual save: skip the debounce and write now. Raises ``SaveError``."""
        self.cancel()
        return self._store.save_blocks()

    def cancel(self) -> None:
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def close(self) -> None:
        self.cancel()
        self._unsubscribe()

    def _on_event(self, event: StoreEvent) -> None:
        if event is StoreEvent.CHANGED and self._store.is_dirty:
            self._restart()

    def _restart(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = self._timer_factory(self._delay, self._fire)
            self._timer = timer
        timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        if not self._store.is_dirty:
            return
        try:
            self._store.save_blocks()
        except SaveError as exc:
            logger.warning("Autosave failed; changes stay unsaved: %s", exc)


__all__ = ["Autosave", "TimerFactory", "TimerLike"]
