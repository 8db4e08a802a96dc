"""
Application entry point.
Configures logging and serves the tool gateway with uvicorn.
"""
import logging
import sys

import uvicorn

from tvagent.api.routes import create_app
from tvagent.config.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

logger = logging.getLogger(__name__)

app = create_app()


def main():
    """Run the application."""
    logger.info(
        "Configuration loaded",
        extra={
            "host": settings.host,
            "port": settings.port,
            "log_level": settings.log_level,
            "request_timeout_seconds": settings.request_timeout_seconds,
            "primary_base_url": settings.primary_base_url,
            "secondary_base_url": settings.secondary_base_url,
        },
    )
    logger.info(f"MCP server running at http://{settings.host}:{settings.port}/mcp")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
