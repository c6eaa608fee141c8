"""
Secure RESTful API Server.

Entry point that creates the Flask app via the application factory.
"""

import logging

from config.settings import get_settings
from webapi.app import create_app
from webapi.logging_config import LOGGER_NAME

# Create the application
app = create_app()


def main():
    settings = get_settings()
    logger = logging.getLogger(LOGGER_NAME)

    logger.info(f"Starting Secure RESTful API on port {settings.port}...")
    logger.info(f"  - Log format: {settings.log_format}")
    logger.info(f"  - Log level: {settings.log_level}")
    logger.info(f"  - API documentation: http://localhost:{settings.port}/api/info")

    app.run(host='0.0.0.0', port=settings.port, debug=False)  # nosec B104


if __name__ == '__main__':
    main()
