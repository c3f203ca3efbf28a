import os
from dotenv import load_dotenv

from .constants import DEFAULT_VISION_API_URL, DEFAULT_VISION_MODEL

load_dotenv()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
BUBBLE_DOMAIN = os.getenv("BUBBLE_DOMAIN")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

VISION_MODEL = os.getenv("VISION_MODEL", DEFAULT_VISION_MODEL)
VISION_API_URL = os.getenv("VISION_API_URL", DEFAULT_VISION_API_URL)
# Unset means no timeout: the outbound call runs until it completes or fails
_timeout = os.getenv("VISION_API_TIMEOUT")
VISION_API_TIMEOUT = float(_timeout) if _timeout else None


def env_settings() -> dict:
    """
    Returns the environment-derived settings as a Flask config mapping.
    """
    return {
        "OPENAI_API_KEY": OPENAI_API_KEY,
        "BUBBLE_DOMAIN": BUBBLE_DOMAIN,
        "APP_ENV": APP_ENV,
        "LOG_LEVEL": LOG_LEVEL,
        "VISION_MODEL": VISION_MODEL,
        "VISION_API_URL": VISION_API_URL,
        "VISION_API_TIMEOUT": VISION_API_TIMEOUT,
    }
