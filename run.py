#!/usr/bin/env python3
"""
European Roulette Spin Predictor - Entry Point
Start the Flask + SocketIO server.
"""

import os
import sys

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import HOST, PORT, DEBUG, HISTORY_MAX_LENGTH, SOCKETIO_ASYNC_MODE

from ruletanaliz import create_app, socketio

app = create_app()

if __name__ == '__main__':
    print("=" * 60)
    print("  Ruletanaliz Spin Predictor v1.0")
    print("=" * 60)
    print(f"  Server:       http://localhost:{PORT}")
    print(f"  History cap:  {HISTORY_MAX_LENGTH} spins")
    print(f"  Async mode:   {SOCKETIO_ASYNC_MODE}")
    print(f"  Debug:        {DEBUG}")
    print("=" * 60)
    print()

    socketio.run(app, host=HOST, port=PORT, debug=DEBUG, use_reloader=False,
                 allow_unsafe_werkzeug=True)
