"""
Flask Application Factory with SocketIO initialization.
"""

from flask import Flask
from flask_socketio import SocketIO

from config import SECRET_KEY, SOCKETIO_ASYNC_MODE, HISTORY_MAX_LENGTH

socketio = SocketIO()

# Handlers must be queued on the SocketIO object before the first init_app
# so every app created later gets them registered on its own server.
from ruletanaliz import socketio_handlers  # noqa: E402,F401


def create_app(max_length=HISTORY_MAX_LENGTH, async_mode=SOCKETIO_ASYNC_MODE):
    app = Flask(__name__)

    app.config['SECRET_KEY'] = SECRET_KEY
    app.json.sort_keys = False

    from ruletanaliz.session.spin_session import SpinSession
    app.extensions['spin_session'] = SpinSession(max_length=max_length)

    from ruletanaliz.routes import main_bp
    app.register_blueprint(main_bp)

    socketio.init_app(app, cors_allowed_origins="*", async_mode=async_mode)

    return app
