from typing import Dict, Iterator, List, Optional

TEAM_A = 'A'
TEAM_B = 'B'


class Connection:
    """A live client socket and the game state it has reported."""

    def __init__(self, sid: str):
        self.id = sid
        self.position: Optional[List[float]] = None
        self.rotation: Optional[float] = None
        self.health: Optional[int] = None
        self.team: Optional[str] = None
        self.session_id: Optional[str] = None
        self.queued = False

    @property
    def has_state(self) -> bool:
        # Set once the client has sent playerJoin
        return self.position is not None

    def to_dict(self):
        return {
            'id': self.id,
            'position': self.position,
            'rotation': self.rotation,
            'health': self.health,
            'team': self.team,
        }

    def __repr__(self):
        return f'<Connection {self.id} team={self.team} session={self.session_id}>'


class ConnectionRegistry:
    def __init__(self):
        self._connections: Dict[str, Connection] = {}

    def add(self, sid: str) -> Connection:
        conn = self._connections.get(sid)
        if conn is None:
            conn = Connection(sid)
            self._connections[sid] = conn
        return conn

    def get(self, sid) -> Optional[Connection]:
        if not isinstance(sid, str):
            return None
        return self._connections.get(sid)

    def remove(self, sid: str) -> Optional[Connection]:
        return self._connections.pop(sid, None)

    def __contains__(self, sid) -> bool:
        return sid in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def __iter__(self) -> Iterator[Connection]:
        return iter(list(self._connections.values()))
