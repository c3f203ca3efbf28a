from datetime import datetime

import pytest

from vision_relay import create_app


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'ok'
    parsed = datetime.fromisoformat(body['timestamp'].replace('Z', '+00:00'))
    assert parsed.tzinfo is not None


def test_configuration_echo(client):
    response = client.post('/api/test')
    assert response.status_code == 200
    assert response.get_json() == {
        'message': 'Backend is working correctly',
        'apiKey': '✓ Configured',
        'bubbleDomain': 'Not restricted',
    }


def test_configuration_echo_missing_key_and_restricted_origin():
    app = create_app({'TESTING': True, 'OPENAI_API_KEY': None, 'BUBBLE_DOMAIN': 'https://app.bubbleapps.io'})
    body = app.test_client().post('/api/test').get_json()
    assert body['apiKey'] == '✗ Missing'
    assert body['bubbleDomain'] == 'https://app.bubbleapps.io'


def test_cors_allows_configured_origin_with_credentials():
    origin = 'https://app.bubbleapps.io'
    app = create_app({'TESTING': True, 'BUBBLE_DOMAIN': origin})
    response = app.test_client().get('/health', headers={'Origin': origin})
    assert response.headers['Access-Control-Allow-Origin'] == origin
    assert response.headers['Access-Control-Allow-Credentials'] == 'true'


@pytest.mark.parametrize('method, path', [
    ('get', '/nope'),
    ('post', '/api/unknown'),
    ('get', '/api/process-image'),
    ('post', '/health'),
])
def test_unmatched_route_returns_not_found(client, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Endpoint not found'}


def test_body_over_limit_returns_413(app, client):
    app.config['MAX_CONTENT_LENGTH'] = 16
    response = client.post('/api/process-base64', json={'imageBase64': 'A' * 64})
    assert response.status_code == 413
    assert response.get_json()['success'] is False


def test_unhandled_error_returns_json_500(app, client):
    @app.route('/boom')
    def boom():
        raise RuntimeError('kaboom')

    response = client.get('/boom')
    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'kaboom'}


def test_cors_unrestricted_sends_wildcard_without_credentials():
    app = create_app({'TESTING': True, 'BUBBLE_DOMAIN': None})
    response = app.test_client().get('/health', headers={'Origin': 'https://anywhere.example'})
    assert response.headers['Access-Control-Allow-Origin'] == '*'
    assert 'Access-Control-Allow-Credentials' not in response.headers
