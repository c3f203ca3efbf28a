import json

import pytest
import requests

from vision_relay import create_app


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'OPENAI_API_KEY': 'test-key',
        'BUBBLE_DOMAIN': None,
        'VISION_MODEL': 'test-model',
        'VISION_API_URL': 'https://vision.test/v1/chat/completions',
        'VISION_API_TIMEOUT': 5,
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upstream_response():
    """Factory for `requests.Response` objects as returned by the vision API."""
    def make(status_code=200, body=None, text=None):
        response = requests.Response()
        response.status_code = status_code
        response.url = 'https://vision.test/v1/chat/completions'
        response._content = text.encode() if text is not None else json.dumps(body).encode()
        return response

    return make


@pytest.fixture
def completion_body():
    return {
        'choices': [{'message': {'role': 'assistant', 'content': 'X'}}],
        'usage': {'prompt_tokens': 10, 'completion_tokens': 5, 'total_tokens': 15},
    }
