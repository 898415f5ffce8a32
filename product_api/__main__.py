import logging

import uvicorn

from .config import Settings
from .logs import configure_logging
from .main import ENDPOINTS, create_app

logger = logging.getLogger("product_api")


def main() -> None:
    configure_logging()
    settings = Settings.from_env()
    app = create_app(settings)

    logger.info("Server is running on http://localhost:%d", settings.port)
    logger.info("Available endpoints:")
    for method, path, summary in ENDPOINTS:
        logger.info("  %-6s %-24s - %s", method, path, summary)

    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level="warning")


if __name__ == "__main__":
    main()
