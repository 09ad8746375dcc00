from flask import Blueprint, current_app, send_from_directory

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return send_from_directory(current_app.config['CLIENT_DIR'], 'index.html')


@main.route('/<path:filename>')
def client_asset(filename):
    """Serve the browser bundle (scripts, models, textures) as-is."""
    # send_from_directory rejects paths escaping CLIENT_DIR and 404s on missing files
    return send_from_directory(current_app.config['CLIENT_DIR'], filename)
