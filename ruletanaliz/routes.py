"""
HTTP Routes - Spin ingestion and dashboard API endpoints.
"""

from flask import Blueprint, current_app, jsonify, request

from config import LAST_SPINS_DISPLAY, is_valid_number
from ruletanaliz.ml.errors import InvalidOutcome, InsufficientHistory

main_bp = Blueprint('main', __name__)

INVALID_NUMBER_MESSAGE = 'Invalid number (must be 0-36)'
INSUFFICIENT_HISTORY_MESSAGE = 'At least two numbers are required for prediction'


def get_spin_session():
    return current_app.extensions['spin_session']


@main_bp.route('/health')
def health():
    return jsonify({'status': 'ok', 'service': 'Ruletanaliz Spin Predictor'})


@main_bp.route('/api/spin', methods=['POST'])
def spin():
    payload = request.get_json(silent=True) or {}
    number = payload.get('number') if isinstance(payload, dict) else None
    if not is_valid_number(number):
        return jsonify({'error': INVALID_NUMBER_MESSAGE, 'code': InvalidOutcome.code}), 400

    try:
        prediction = get_spin_session().submit(number)
    except InvalidOutcome:
        return jsonify({'error': INVALID_NUMBER_MESSAGE, 'code': InvalidOutcome.code}), 400
    except InsufficientHistory:
        return jsonify({
            'error': INSUFFICIENT_HISTORY_MESSAGE,
            'code': InsufficientHistory.code,
        }), 400
    except Exception as e:
        print(f"[Error] /api/spin failed for {number}: {e!r}")
        return jsonify({'error': 'Internal server error'}), 500

    print(f"[Spin] {number} → {prediction.to_dict()}")
    return jsonify(prediction.to_dict())


@main_bp.route('/api/history')
def history():
    limit = request.args.get('limit', LAST_SPINS_DISPLAY, type=int)
    return jsonify(get_spin_session().history(limit=limit))


@main_bp.route('/api/stats')
def stats():
    return jsonify(get_spin_session().stats())


@main_bp.route('/api/reset', methods=['POST'])
def reset():
    get_spin_session().reset()
    print("[Reset] Spin history cleared")
    return jsonify({'status': 'reset', 'total_spins': 0})
