import itertools
import logging
import threading
from typing import Callable, Dict


class CountdownScheduler:
    """Run a callback after a delay, at most one pending task per key.

    Scheduling the same key again replaces the pending task, and ``cancel``
    revokes it. Revocation is by token: the background task still wakes up
    but finds its token gone and returns without calling back.

    When ``inline`` is true (TESTING mode) callbacks run immediately, which
    keeps socket tests deterministic.
    """

    def __init__(self, socketio, inline: bool = False, logger: logging.Logger = None):
        self._socketio = socketio
        self._inline = inline
        self._logger = logger or logging.getLogger(__name__)
        self._tokens: Dict[str, int] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def schedule(self, key: str, delay: float, callback: Callable, *args) -> None:
        with self._lock:
            token = next(self._counter)
            self._tokens[key] = token
        self._logger.info(f"[timer-set] key={key} delay={delay}s")
        if self._inline:
            self._fire(key, token, callback, args)
            return
        self._socketio.start_background_task(self._worker, key, token, delay, callback, args)

    def cancel(self, key: str) -> bool:
        with self._lock:
            return self._tokens.pop(key, None) is not None

    def pending(self, key: str) -> bool:
        return key in self._tokens

    def _worker(self, key, token, delay, callback, args):
        if delay > 0:
            self._socketio.sleep(delay)
        self._fire(key, token, callback, args)

    def _fire(self, key, token, callback, args):
        with self._lock:
            if self._tokens.get(key) != token:
                self._logger.info(f"[timer-abort] key={key} cancelled or replaced")
                return
            del self._tokens[key]
        self._logger.info(f"[timer-fire] key={key}")
        callback(*args)
