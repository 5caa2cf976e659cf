"""
Development entry point.

    python app.py

Serves ``backend.src.adapters.inbound.fastapi_app:app`` with uvicorn using
the WEB_* and LOG_* settings.
"""
import logging

import uvicorn

from backend.src.infrastructure.config import get_settings
from backend.src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings.logging.level)

    logger.info("Starting user profile backend on %s:%d", settings.web.host, settings.web.port)

    uvicorn.run(
        "backend.src.adapters.inbound.fastapi_app:app",
        host=settings.web.host,
        port=settings.web.port,
        reload=settings.app_env == "development",
        log_level=settings.logging.level.lower(),
    )
