import os
import sys
import pytest

# Ensure the backend root (containing the `arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arena import create_app, socketio
from arena.services.matchmaking import ArenaStore, RelayRouter


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    HOST = '127.0.0.1'
    PORT = 0
    DEBUG = False
    LOG_LEVEL = 'DEBUG'
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    CLIENT_DIR = None
    MATCH_COUNTDOWN_SEC = 5
    MAX_HEALTH = 100
    ENABLE_SCHEDULER_IN_TESTS = False


class RecordingTransport:
    """Collects (sid, event, payload) instead of emitting."""

    def __init__(self):
        self.sent = []

    def send(self, sid, event, *args):
        self.sent.append((sid, event, args[0] if args else None))

    def events_for(self, sid):
        return [(event, payload) for to, event, payload in self.sent if to == sid]

    def names_for(self, sid):
        return [event for event, _ in self.events_for(sid)]

    def payloads(self, sid, event):
        return [payload for name, payload in self.events_for(sid) if name == event]

    def clear(self):
        self.sent.clear()


class ManualScheduler:
    """Holds scheduled callbacks until a test fires them."""

    def __init__(self):
        self.tasks = {}

    def schedule(self, key, delay, callback, *args):
        self.tasks[key] = (delay, callback, args)

    def cancel(self, key):
        return self.tasks.pop(key, None) is not None

    def pending(self, key):
        return key in self.tasks

    def fire(self, key):
        _, callback, args = self.tasks.pop(key)
        return callback(*args)


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def store(transport, scheduler):
    return ArenaStore(transport, scheduler, countdown=5, max_health=100)


@pytest.fixture()
def router(store, transport):
    return RelayRouter(store, transport)


@pytest.fixture()
def connect(router):
    """Register connections by sid and return them."""
    def _connect(*sids):
        conns = [router.connect(sid) for sid in sids]
        return conns[0] if len(conns) == 1 else conns
    return _connect


@pytest.fixture()
def client_dir(tmp_path):
    bundle = tmp_path / 'client'
    (bundle / 'js').mkdir(parents=True)
    (bundle / 'index.html').write_text('<!doctype html><title>Arena</title>')
    (bundle / 'js' / 'main.js').write_text('console.log("arena");')
    return str(bundle)


@pytest.fixture()
def flask_app(client_dir):
    config = type('BundleTestConfig', (TestConfig,), {'CLIENT_DIR': client_dir})
    application = create_app(config)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/'
        )
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass
