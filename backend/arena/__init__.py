from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Matchmaking state lives for the life of the process, one store per app
    from arena.services.matchmaking import ArenaStore, RelayRouter
    from arena.services.matchmaking.scheduler import CountdownScheduler
    from arena.services.matchmaking.transport import SocketIOTransport

    testing = flask_app.config.get('TESTING', False)
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    transport = SocketIOTransport(socketio, namespace=namespace, logger=flask_app.logger)
    scheduler = CountdownScheduler(
        socketio,
        inline=testing and not flask_app.config.get('ENABLE_SCHEDULER_IN_TESTS'),
        logger=flask_app.logger,
    )
    store = ArenaStore(
        transport,
        scheduler,
        countdown=flask_app.config.get('MATCH_COUNTDOWN_SEC', 5),
        max_health=flask_app.config.get('MAX_HEALTH', 100),
        logger=flask_app.logger,
    )
    router = RelayRouter(store, transport, logger=flask_app.logger)
    flask_app.extensions['arena'] = store

    # Register blueprints
    from arena.main import main
    flask_app.register_blueprint(main)

    from arena.api.status import status
    flask_app.register_blueprint(status, url_prefix='/api')

    from arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(router, namespace=namespace)

    return flask_app
