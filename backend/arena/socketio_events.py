from flask import current_app, request
from arena import socketio


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_socket_error(exc):
    # Keeps one client's bad event from surfacing beyond its own handler
    current_app.logger.exception(f"[socket-error] sid={_get_sid()} event={request.event.get('message')}: {exc}")


def register_socketio_handlers(router, namespace: str = '/') -> None:
    """Bind Socket.IO events on ``namespace`` to ``router``.

    Handlers accept an optional payload so a client emitting with or
    without data reaches the same code path.
    """

    def handle_connect(auth=None):
        router.connect(_get_sid())

    def handle_disconnect(reason=None):
        router.disconnect(_get_sid())

    def handle_join_matchmaking(data=None):
        router.join_matchmaking(_get_sid())

    def handle_cancel_matchmaking(data=None):
        router.cancel_matchmaking(_get_sid())

    def handle_player_join(data=None):
        router.player_join(_get_sid(), data)

    def handle_player_move(data=None):
        router.player_move(_get_sid(), data)

    def handle_player_shoot(data=None):
        router.player_shoot(_get_sid(), data)

    def handle_player_hit(data=None):
        router.player_hit(_get_sid(), data)

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinMatchmaking', handle_join_matchmaking, namespace=namespace)
    socketio.on_event('cancelMatchmaking', handle_cancel_matchmaking, namespace=namespace)
    socketio.on_event('playerJoin', handle_player_join, namespace=namespace)
    socketio.on_event('playerMove', handle_player_move, namespace=namespace)
    socketio.on_event('playerShoot', handle_player_shoot, namespace=namespace)
    socketio.on_event('playerHit', handle_player_hit, namespace=namespace)
    socketio.on_error(namespace)(handle_socket_error)
