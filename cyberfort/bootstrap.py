import logging

from prometheus_client import start_http_server

from .logging_config import configure_logging
from .config import settings

logger = logging.getLogger(__name__)


def initialize() -> None:
    """Configure logging and start the metrics endpoint when enabled."""
    configure_logging(
        level=settings.log_level,
        fmt=settings.log_format,
        log_file=settings.log_file,
        json_format=settings.log_json,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    if settings.metrics_port:
        try:
            start_http_server(settings.metrics_port)
            logger.info("Started Prometheus metrics server on port %d", settings.metrics_port)
        except OSError as exc:
            logger.error("Failed to start metrics server: %s", exc)
