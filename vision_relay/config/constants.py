MiB = 1024 * 1024

DEFAULT_VISION_MODEL = "gpt-4o"
DEFAULT_VISION_API_URL = "https://api.openai.com/v1/chat/completions"
VISION_MAX_TOKENS = 1500
VISION_TEMPERATURE = 0.7
VISION_IMAGE_DETAIL = "high"

DEFAULT_PROMPT = """Analyze this image from a building inspection. Provide:
1. A detailed description of what you observe
2. Any potential safety concerns or issues
3. Risk assessment (Low/Medium/High)
4. Recommended actions"""

# Inbound limits
MAX_CONTENT_LENGTH = 50 * MiB
MAX_UPLOAD_BYTES = 20 * MiB

ALLOWED_MIME_TYPES = ('image/jpeg', 'image/png', 'image/webp', 'image/gif')
DEFAULT_MIME_TYPE = 'image/jpeg'

# Form / JSON field names
IMAGE_FIELD = 'image'
PROMPT_FIELD = 'prompt'
BASE64_FIELD = 'imageBase64'

# Error messages
MSG_NO_IMAGE_FILE = "No image file provided"
MSG_NO_IMAGE_DATA = "No image data provided"
MSG_INVALID_FILE_TYPE = "Invalid file type. Only JPEG, PNG, WebP, and GIF allowed."
MSG_FILE_TOO_LARGE = "File too large. Maximum size is 20 MB."
MSG_EMPTY_IMAGE = "Image data is empty"
MSG_INVALID_BASE64 = "Invalid base64 image data"
MSG_API_KEY_MISSING = "OPENAI_API_KEY is not configured"
MSG_UPSTREAM_FALLBACK = "Failed to process image with OpenAI Vision"
MSG_PROCESSING_FAILED = "Failed to process image"
MSG_NOT_FOUND = "Endpoint not found"
MSG_TOO_LARGE = "Request entity too large"
MSG_INTERNAL_ERROR = "Internal server error"

# /api/test echo
MSG_BACKEND_OK = "Backend is working correctly"
API_KEY_CONFIGURED = "✓ Configured"
API_KEY_MISSING = "✗ Missing"
ORIGIN_UNRESTRICTED = "Not restricted"
