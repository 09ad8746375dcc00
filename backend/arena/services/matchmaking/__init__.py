"""Matchmaking and session relay services.

This package holds the connection registry, the FIFO matchmaking queue,
session lifecycle and the relay router. None of it imports Flask; socket
handlers in ``arena.socketio_events`` bind these services to Socket.IO,
keeping transport concerns separated from matchmaking rules.
"""

from .connections import Connection, ConnectionRegistry
from .queue import MatchmakingQueue
from .sessions import Session, SessionManager
from .relay import RelayRouter
from .store import ArenaStore

__all__ = [
    'ArenaStore',
    'Connection',
    'ConnectionRegistry',
    'MatchmakingQueue',
    'RelayRouter',
    'Session',
    'SessionManager',
]
