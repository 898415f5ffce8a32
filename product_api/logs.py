import logging

from rich.logging import RichHandler


def configure_logging(level: int = logging.INFO) -> None:
    """Send everything under ``product_api`` to the console through rich."""
    handler = RichHandler(show_path=False, markup=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("product_api")
    logger.setLevel(level)
    logger.handlers = [handler]
