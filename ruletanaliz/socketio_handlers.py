"""
SocketIO Event Handlers - Real-time spin input and predictions for the dashboard.
"""

from flask import current_app
from flask_socketio import emit

from ruletanaliz import socketio
from ruletanaliz.ml.errors import InvalidOutcome, InsufficientHistory
from ruletanaliz.routes import INVALID_NUMBER_MESSAGE, INSUFFICIENT_HISTORY_MESSAGE


def _spin_session():
    return current_app.extensions['spin_session']


@socketio.on('connect')
def handle_connect():
    emit('connected', {
        'message': 'Connected to Ruletanaliz Spin Predictor',
        'total_spins': len(_spin_session().ledger),
    })


@socketio.on('spin')
def handle_spin(data):
    number = data.get('number') if isinstance(data, dict) else None

    try:
        prediction = _spin_session().submit(number)
    except InvalidOutcome:
        emit('spin_error', {'error': INVALID_NUMBER_MESSAGE, 'code': InvalidOutcome.code})
        return
    except InsufficientHistory:
        emit('spin_error', {
            'error': INSUFFICIENT_HISTORY_MESSAGE,
            'code': InsufficientHistory.code,
            'number': number,
        })
        return
    except Exception as e:
        print(f"[Error] spin failed for {number}: {e!r}")
        emit('spin_error', {'error': 'Internal server error', 'code': 'internal_error'})
        return

    print(f"[Spin] {number} → {prediction.to_dict()} (socket)")
    emit('prediction_result', {
        'number': number,
        'prediction': prediction.to_dict(),
    })


@socketio.on('reset')
def handle_reset():
    _spin_session().reset()
    print("[Reset] Spin history cleared (socket)")
    emit('session_reset', {'total_spins': 0})
