from flask import Blueprint, current_app, jsonify

status = Blueprint('status', __name__)


def _store():
    return current_app.extensions['arena']


@status.route('/status', methods=['GET'])
def server_status():
    """Counts of connected players, queued players and live sessions."""
    return jsonify(_store().stats()), 200


@status.route('/sessions/<string:session_id>', methods=['GET'])
def get_session(session_id):
    store = _store()
    with store.lock:
        session = store.sessions.get(session_id)
        if session is None:
            return jsonify({'error': 'Session not found'}), 404
        return jsonify(session.to_dict()), 200
