import structlog

from vision_relay import create_app
from vision_relay.config.env_config import APP_ENV, HOST, PORT

logger = structlog.get_logger()

app = create_app()

if __name__ == '__main__':
    logger.info(f"Server running on port {PORT}")
    logger.info(f"Environment: {APP_ENV}")
    app.run(host=HOST, port=PORT, debug=APP_ENV == 'development')
