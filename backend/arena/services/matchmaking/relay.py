import logging
from functools import wraps
from typing import Optional, Tuple

from .connections import Connection
from .payloads import PayloadError, parse_hit, parse_shot, parse_state
from .sessions import Session


def _locked(handler):
    @wraps(handler)
    def wrapper(self, *args, **kwargs):
        with self.store.lock:
            return handler(self, *args, **kwargs)
    return wrapper


class RelayRouter:
    """One method per inbound client event.

    Every lookup may fail (unknown sid, no session, foreign target); a
    failed lookup drops the event quietly. Nothing is ever sent back as an
    error, so a misbehaving client can only affect its own session.
    """

    def __init__(self, store, transport, logger: logging.Logger = None):
        self.store = store
        self._transport = transport
        self._logger = logger or logging.getLogger(__name__)

    # ---- connection lifecycle ----

    @_locked
    def connect(self, sid: str) -> Connection:
        self._logger.info(f"[connect] sid={sid}")
        return self.store.connections.add(sid)

    @_locked
    def disconnect(self, sid: str) -> None:
        conn = self.store.connections.remove(sid)
        self._logger.info(f"[disconnect] sid={sid}")
        if conn is None:
            return
        if self.store.queue.cancel(conn):
            self._logger.info(f"[matchmaking] removed {sid} from queue")
        self.store.sessions.leave(conn)

    # ---- matchmaking ----

    @_locked
    def join_matchmaking(self, sid: str) -> None:
        conn = self.store.connections.get(sid)
        if conn is None:
            return
        if conn.session_id:
            self._drop(sid, 'joinMatchmaking', 'already in a session')
            return
        position, waiting = self.store.queue.enqueue(conn)
        self._logger.info(f"[matchmaking] {sid} joined queue position={position} waiting={waiting}")
        self._transport.send(sid, 'matchmakingStatus', {
            'position': position,
            'playersWaiting': waiting,
        })
        self.try_pair()

    @_locked
    def cancel_matchmaking(self, sid: str) -> None:
        conn = self.store.connections.get(sid)
        if conn is not None and self.store.queue.cancel(conn):
            self._logger.info(f"[matchmaking] {sid} left queue")

    def try_pair(self) -> Optional[Session]:
        pair = self.store.queue.pop_pair()
        if pair is None:
            return None
        return self.store.sessions.create(*pair)

    # ---- in-game relay ----

    @_locked
    def player_join(self, sid: str, data) -> None:
        found = self._member(sid, 'playerJoin')
        if found is None:
            return
        conn, session = found
        try:
            conn.position, conn.rotation = parse_state(data)
        except PayloadError as exc:
            self._malformed(sid, 'playerJoin', exc)
            return
        conn.health = self.store.max_health

        self._transport.send(sid, 'playerInitialized', conn.to_dict())
        current = {other.id: other.to_dict() for other in session.others(conn) if other.has_state}
        self._transport.send(sid, 'currentPlayers', current)
        self.store.sessions.broadcast(session, 'playerJoined', conn.to_dict(), exclude=conn)

    @_locked
    def player_move(self, sid: str, data) -> None:
        found = self._member(sid, 'playerMove')
        if found is None:
            return
        conn, session = found
        try:
            conn.position, conn.rotation = parse_state(data)
        except PayloadError as exc:
            self._malformed(sid, 'playerMove', exc)
            return
        self.store.sessions.broadcast(session, 'playerMoved', {
            'id': conn.id,
            'position': conn.position,
            'rotation': conn.rotation,
        }, exclude=conn)

    @_locked
    def player_shoot(self, sid: str, data) -> None:
        found = self._member(sid, 'playerShoot')
        if found is None:
            return
        conn, session = found
        try:
            shot = parse_shot(data)
        except PayloadError as exc:
            self._malformed(sid, 'playerShoot', exc)
            return
        self.store.sessions.broadcast(session, 'playerShoot', {'id': conn.id, **shot}, exclude=conn)

    @_locked
    def player_hit(self, sid: str, data) -> None:
        found = self._member(sid, 'playerHit')
        if found is None:
            return
        conn, session = found
        try:
            target_id, damage = parse_hit(data)
        except PayloadError as exc:
            self._malformed(sid, 'playerHit', exc)
            return
        target = session.find(target_id)
        if target is None:
            self._drop(sid, 'playerHit', f'target {target_id} not in session {session.id}')
            return
        if target.health is None:
            self._drop(sid, 'playerHit', f'target {target_id} has not joined yet')
            return

        was_alive = target.health > 0
        target.health = max(0, target.health - damage)
        self.store.sessions.broadcast(session, 'healthUpdate', {'id': target.id, 'health': target.health})
        if was_alive and target.health == 0:
            self._logger.info(f"[death] session={session.id} target={target.id} killer={conn.id}")
            self.store.sessions.broadcast(session, 'playerDeath', {'id': target.id, 'killerId': conn.id})

    # ---- helpers ----

    def _member(self, sid: str, event: str) -> Optional[Tuple[Connection, Session]]:
        conn = self.store.connections.get(sid)
        if conn is None:
            self._drop(sid, event, 'unknown connection')
            return None
        session = self.store.sessions.session_for(conn)
        if session is None:
            self._drop(sid, event, 'not in a session')
            return None
        return conn, session

    def _drop(self, sid, event, why):
        self._logger.debug(f"[drop] event={event} sid={sid} {why}")

    def _malformed(self, sid, event, exc):
        self._logger.warning(f"[drop] event={event} sid={sid} malformed payload: {exc}")
