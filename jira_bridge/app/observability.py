import logging

import sentry_sdk

from .. import config
from .error_events import HttpErrorEventDecorator

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def init_sentry(dsn: str | None = None, environment: str | None = None) -> bool:
    """Start Sentry reporting with HTTP error decoration. Returns False when no DSN is configured."""
    dsn = dsn or config.SENTRY_DSN
    if not dsn:
        logger.info("SENTRY_DSN not set, error reporting disabled")
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=environment or config.SENTRY_ENVIRONMENT,
        before_send=HttpErrorEventDecorator.decorate,
    )
    return True
