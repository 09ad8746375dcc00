import logging


class SocketIOTransport:
    """Fire-and-forget delivery of one event to one connection.

    Fan-out is the caller's job: sessions iterate their member ids and
    send to each, so no Socket.IO room bookkeeping is needed.
    """

    def __init__(self, socketio, namespace: str = '/', logger: logging.Logger = None):
        self._socketio = socketio
        self.namespace = namespace
        self._logger = logger or logging.getLogger(__name__)

    def send(self, sid: str, event: str, *args) -> None:
        # No ack and no retry; a lost update is superseded by the next one
        try:
            self._socketio.emit(event, *args, to=sid, namespace=self.namespace)
        except Exception:
            self._logger.exception(f"[send-fail] event={event} sid={sid}")
