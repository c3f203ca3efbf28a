import structlog
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .config.constants import MAX_CONTENT_LENGTH, MSG_INTERNAL_ERROR, MSG_NOT_FOUND, MSG_TOO_LARGE
from .config.env_config import env_settings
from .endpoints.image_analysis import image_analysis_bp
from .endpoints.status import status_bp
from .utils.logging_utils import configure_logging

logger = structlog.get_logger()


def create_app(test_config=None):
    """
    Builds the relay's Flask app.
    Args:
        test_config (dict | None): Values overriding the environment-derived config.
    Returns:
        app (Flask): Configured application with all blueprints registered.
    """
    app = Flask(__name__)
    app.config.update(env_settings())
    app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH
    app.config['MAX_FORM_MEMORY_SIZE'] = MAX_CONTENT_LENGTH
    if test_config:
        app.config.update(test_config)

    configure_logging(app.config['LOG_LEVEL'])

    origin = app.config.get('BUBBLE_DOMAIN')
    if origin:
        CORS(app, resources={r"/*": {"origins": origin}}, supports_credentials=True)
    else:
        CORS(app, resources={r"/*": {"origins": "*"}}, send_wildcard=True)

    # Register Blueprints
    app.register_blueprint(status_bp)
    app.register_blueprint(image_analysis_bp)

    register_error_handlers(app)

    return app


def register_error_handlers(app):
    # Wrong method on a known path is reported like an unknown path
    @app.errorhandler(404)
    @app.errorhandler(405)
    def endpoint_not_found(e):
        return jsonify({'error': MSG_NOT_FOUND}), 404

    @app.errorhandler(RequestEntityTooLarge)
    def request_too_large(e):
        return jsonify({'success': False, 'error': MSG_TOO_LARGE}), 413

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'success': False, 'error': e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        logger.exception("Unhandled error:\n")
        return jsonify({'success': False, 'error': str(e) or MSG_INTERNAL_ERROR}), 500
