import logging
import random
import string
import threading
import time
from typing import Dict, Iterator, List, Optional

from .connections import Connection, TEAM_A, TEAM_B

STARTING = 'starting'
ACTIVE = 'active'
ENDED = 'ended'

REASON_OPPONENT_LEFT = 'opponent_left'

SESSION_ID_ALPHABET = string.ascii_lowercase + string.digits


class Session:
    """A two-player match and its broadcast scope."""

    def __init__(self, session_id: str, players: List[Connection]):
        self.id = session_id
        self.players = list(players)
        self.state = STARTING
        self.created_at = time.time()

    def member_ids(self) -> List[str]:
        return [p.id for p in self.players]

    def others(self, conn: Connection) -> List[Connection]:
        return [p for p in self.players if p is not conn]

    def find(self, sid: str) -> Optional[Connection]:
        for p in self.players:
            if p.id == sid:
                return p
        return None

    def __contains__(self, conn) -> bool:
        return any(p is conn for p in self.players)

    def to_dict(self):
        return {
            'id': self.id,
            'state': self.state,
            'created_at': self.created_at,
            'players': [{'id': p.id, 'team': p.team, 'health': p.health} for p in self.players],
        }


class SessionManager:
    """Owns the set of live sessions and drives their lifecycle.

    starting -> active happens on a countdown timer; starting|active -> ended
    happens as soon as membership drops below two, and the session is then
    removed from the live set.
    """

    def __init__(self, transport, scheduler, countdown: int = 5, lock=None, logger: logging.Logger = None):
        self._transport = transport
        self._scheduler = scheduler
        self.countdown = countdown
        self._lock = lock or threading.RLock()
        self._logger = logger or logging.getLogger(__name__)
        self._sessions: Dict[str, Session] = {}

    def generate_id(self, length: int = 7) -> str:
        """Generate a session id that no live session is using."""
        while True:
            session_id = ''.join(random.choices(SESSION_ID_ALPHABET, k=length))
            if session_id not in self._sessions:
                return session_id

    def create(self, first: Connection, second: Connection) -> Session:
        session = Session(self.generate_id(), [first, second])
        # Teams are confirmed here, in pairing order
        first.team = TEAM_A
        second.team = TEAM_B
        for conn in session.players:
            conn.queued = False
            conn.session_id = session.id
        self._sessions[session.id] = session
        self._logger.info(f"[match] session={session.id} players={first.id},{second.id}")

        self.broadcast(session, 'gameMatched', {
            'gameId': session.id,
            'countdown': self.countdown,
            'players': [{'id': p.id, 'team': p.team} for p in session.players],
        })
        self._scheduler.schedule(session.id, self.countdown, self.activate, session.id)
        return session

    def activate(self, session_id: str) -> bool:
        """Countdown callback; a session torn down in the meantime is skipped."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session.state != STARTING:
                self._logger.info(f"[timer-abort] session={session_id} no longer starting")
                return False
            session.state = ACTIVE
            self._logger.info(f"[session-start] session={session_id}")
            self.broadcast(session, 'gameStart')
            return True

    def leave(self, conn: Connection) -> Optional[Session]:
        """Remove ``conn`` from its session, then tear the session down."""
        session = self._sessions.get(conn.session_id) if conn.session_id else None
        conn.session_id = None
        if session is None or conn not in session:
            return None
        self.broadcast(session, 'playerLeft', conn.id, exclude=conn)
        session.players = session.others(conn)
        self.teardown(session)
        return session

    def teardown(self, session: Session) -> None:
        """End ``session`` and drop it from the live set.

        ``leave`` always calls this with one player left, who is named
        winner. A session emptied any other way is removed without
        notifying anyone; a second disconnect after ``gameEnded`` never
        gets here, since the winner's session link is already cleared.
        """
        session.state = ENDED
        self._scheduler.cancel(session.id)
        self._sessions.pop(session.id, None)
        if len(session.players) == 1:
            winner = session.players[0]
            winner.session_id = None
            self._transport.send(winner.id, 'gameEnded', {
                'reason': REASON_OPPONENT_LEFT,
                'winnerId': winner.id,
            })
            self._logger.info(f"[session-end] session={session.id} reason={REASON_OPPONENT_LEFT} winner={winner.id}")
        else:
            self._logger.info(f"[session-end] session={session.id} no players left")

    def broadcast(self, session: Session, event: str, *args, exclude: Connection = None) -> None:
        for conn in session.players:
            if conn is exclude:
                continue
            self._transport.send(conn.id, event, *args)

    def get(self, session_id) -> Optional[Session]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def session_for(self, conn: Connection) -> Optional[Session]:
        session = self.get(conn.session_id)
        if session is None or conn not in session:
            return None
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))
