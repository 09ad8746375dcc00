import os

BACKEND_ROOT = os.path.abspath(os.path.dirname(__file__))


def _origins(raw):
    origins = [o.strip() for o in raw.split(',') if o.strip()]
    if origins == ['*']:
        return '*'
    return origins


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    DEBUG = os.environ.get('FLASK_DEBUG', '0').lower() in ('1', 'true', 'yes')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Origins allowed to open a socket; comma-separated, '*' for any
    CORS_ALLOWED_ORIGINS = _origins(os.environ.get('CORS_ALLOWED_ORIGINS', '*'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Directory holding the browser bundle (index.html, js/, assets)
    CLIENT_DIR = os.environ.get('CLIENT_DIR') or os.path.join(os.path.dirname(BACKEND_ROOT), 'client')
    # Seconds between gameMatched and gameStart
    MATCH_COUNTDOWN_SEC = int(os.environ.get('MATCH_COUNTDOWN_SEC', '5'))
    MAX_HEALTH = int(os.environ.get('MAX_HEALTH', '100'))
    # In TESTING mode countdowns fire inline unless this is set
    ENABLE_SCHEDULER_IN_TESTS = False
