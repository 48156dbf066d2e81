"""Application entry point for FastAPI server."""
import sys

import uvicorn
from loguru import logger
from pydantic import ValidationError

from src.config.logger import configure_logging
from src.config.settings import get_settings

if __name__ == "__main__":
    try:
        settings = get_settings()
    except ValidationError as exc:
        missing = ", ".join(str(err["loc"][0]) for err in exc.errors())
        logger.error("Invalid configuration ({}); is OPENROUTER_API_KEY set?", missing)
        sys.exit(1)

    configure_logging(settings.log_level)
    logger.info("Server starting on port {}", settings.port)
    logger.info("  Health: http://localhost:{}/health", settings.port)
    logger.info("  API:    http://localhost:{}/api/ask-questions", settings.port)
    logger.info("  Chat:   http://localhost:{}/api/chat", settings.port)

    # Use import string format to enable reload mode
    uvicorn.run(
        "app.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
