import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory

DEFAULT_LOG_LEVEL = "WARNING"

_configured = False

# Route events through stdlib logging until configure_logging() runs, so
# library use never writes log lines to stdout.
if not structlog.is_configured():
    structlog.configure(logger_factory=LoggerFactory())


def configure_logging(log_level: str = DEFAULT_LOG_LEVEL, force: bool = False):
    """
    Configure structured logging on top of the standard library.

    Log output goes to stderr; stdout is reserved for program output.
    """
    global _configured
    if _configured and not force:
        return

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.WARNING),
        stream=sys.stderr,
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True
    structlog.get_logger(__name__).debug("Logging configured", log_level=log_level)
