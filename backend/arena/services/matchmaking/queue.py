from collections import deque
from typing import Deque, Optional, Tuple

from .connections import Connection, TEAM_A, TEAM_B


class MatchmakingQueue:
    """First-in, first-matched waiting list.

    A connection appears at most once. It leaves either through
    ``pop_pair`` (matched) or ``cancel`` (explicit cancel or disconnect).
    """

    def __init__(self):
        self._waiting: Deque[Connection] = deque()

    def enqueue(self, conn: Connection) -> Tuple[int, int]:
        """Append ``conn`` and return ``(position, players_waiting)``.

        Position is 1-based. The team handed out here is provisional,
        alternating by queue length; pairing confirms the final team.
        """
        if conn.queued:
            return self.position_of(conn), len(self._waiting)
        conn.team = TEAM_A if len(self._waiting) % 2 == 0 else TEAM_B
        conn.queued = True
        self._waiting.append(conn)
        return len(self._waiting), len(self._waiting)

    def cancel(self, conn: Connection) -> bool:
        if not conn.queued:
            return False
        try:
            self._waiting.remove(conn)
        except ValueError:
            pass
        conn.queued = False
        return True

    def pop_pair(self) -> Optional[Tuple[Connection, Connection]]:
        """Dequeue the two longest-waiting connections, or None."""
        if len(self._waiting) < 2:
            return None
        first = self._waiting.popleft()
        second = self._waiting.popleft()
        first.queued = False
        second.queued = False
        return first, second

    def position_of(self, conn: Connection) -> int:
        for idx, waiting in enumerate(self._waiting):
            if waiting is conn:
                return idx + 1
        return 0

    def __contains__(self, conn) -> bool:
        return any(waiting is conn for waiting in self._waiting)

    def __len__(self) -> int:
        return len(self._waiting)

    def ids(self):
        return [conn.id for conn in self._waiting]
