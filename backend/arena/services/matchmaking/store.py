import logging
import threading

from .connections import ConnectionRegistry
from .queue import MatchmakingQueue
from .sessions import SessionManager


class ArenaStore:
    """All matchmaking state for one server process.

    Created by the application factory and handed to the router; cleared
    only when the process exits. Handlers and timer callbacks hold ``lock``
    while they touch the registry, queue or sessions.
    """

    def __init__(self, transport, scheduler, countdown: int = 5, max_health: int = 100,
                 logger: logging.Logger = None):
        self.lock = threading.RLock()
        self.max_health = max_health
        self.connections = ConnectionRegistry()
        self.queue = MatchmakingQueue()
        self.sessions = SessionManager(
            transport, scheduler, countdown=countdown, lock=self.lock, logger=logger
        )

    def stats(self):
        with self.lock:
            return {
                'playersConnected': len(self.connections),
                'playersWaiting': len(self.queue),
                'activeSessions': len(self.sessions),
            }
