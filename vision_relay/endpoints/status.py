from flask import Blueprint, current_app, jsonify

from ..config.constants import API_KEY_CONFIGURED, API_KEY_MISSING, MSG_BACKEND_OK, ORIGIN_UNRESTRICTED
from ..utils.time_utils import utc_timestamp

status_bp = Blueprint('status', __name__)


@status_bp.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'timestamp': utc_timestamp()})


@status_bp.route('/api/test', methods=['POST'])
def test_configuration():
    """
    Echoes whether the vision API key is set and which origin CORS is restricted to.
    """
    config = current_app.config
    return jsonify({
        'message': MSG_BACKEND_OK,
        'apiKey': API_KEY_CONFIGURED if config.get('OPENAI_API_KEY') else API_KEY_MISSING,
        'bubbleDomain': config.get('BUBBLE_DOMAIN') or ORIGIN_UNRESTRICTED,
    })
