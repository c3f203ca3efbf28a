import structlog
from flask import Blueprint, current_app, jsonify, request

from ..config.constants import BASE64_FIELD, IMAGE_FIELD, MSG_PROCESSING_FAILED, PROMPT_FIELD
from ..errors import ValidationError
from ..services.vision_service import AnalysisRequest, AnalysisResult, analyze_image
from ..utils.image_utils import request_from_base64, request_from_upload
from ..utils.time_utils import utc_timestamp

logger = structlog.get_logger()
image_analysis_bp = Blueprint('image_analysis', __name__)


def run_analysis(analysis_request: AnalysisRequest) -> AnalysisResult:
    """
    Forwards an `AnalysisRequest` to the vision service using the app's settings.
    """
    config = current_app.config
    return analyze_image(
        analysis_request.image_bytes,
        analysis_request.prompt,
        analysis_request.mime_type,
        api_key=config.get('OPENAI_API_KEY'),
        model=config['VISION_MODEL'],
        api_url=config['VISION_API_URL'],
        timeout=config.get('VISION_API_TIMEOUT'),
        image_base64=analysis_request.image_base64,
    )


def error_response(message: str, status: int):
    return jsonify({'success': False, 'error': message}), status


@image_analysis_bp.route('/api/process-image', methods=['POST'])
def process_image():
    """
    Analyzes a multipart upload.
    Expects form data with:
        - 'image': The image file (JPEG, PNG, WebP or GIF, up to 20 MB).
        - 'prompt': Optional instruction for the model.
    Returns:
        response: The description, token usage and completion time, or an error message.
    """
    # Parsed outside the try block so body-size errors reach the app-level 413 handler
    file = request.files.get(IMAGE_FIELD)
    prompt = request.form.get(PROMPT_FIELD)
    try:
        analysis_request = request_from_upload(file, prompt)
        logger.info(f"Processing image: {file.filename}")

        result = run_analysis(analysis_request)

        return jsonify({
            'success': True,
            'filename': file.filename,
            'description': result.description,
            'usage': result.usage,
            'processedAt': utc_timestamp(),
        })
    except ValidationError as e:
        return error_response(e.message, 400)
    except Exception as e:
        logger.exception("Error processing image:\n")
        return error_response(str(e) or MSG_PROCESSING_FAILED, 500)


@image_analysis_bp.route('/api/process-base64', methods=['POST'])
def process_base64():
    """
    Analyzes a base64 image sent as JSON (`imageBase64`, optional `prompt`).
    A leading data-URI header such as `data:image/png;base64,` is stripped.
    URL-encoded form bodies with the same fields are accepted too.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = request.form
    image_base64 = body.get(BASE64_FIELD)
    prompt = body.get(PROMPT_FIELD)
    try:
        analysis_request = request_from_base64(image_base64, prompt)
        logger.info(f"Processing base64 image ({len(analysis_request.image_bytes)} bytes)")

        result = run_analysis(analysis_request)

        return jsonify({
            'success': True,
            'description': result.description,
            'usage': result.usage,
            'processedAt': utc_timestamp(),
        })
    except ValidationError as e:
        return error_response(e.message, 400)
    except Exception as e:
        logger.exception("Error processing base64 image:\n")
        return error_response(str(e) or MSG_PROCESSING_FAILED, 500)
