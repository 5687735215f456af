"""
Structured Logging

structlog configuration shared by all Lambda handlers. JSON lines go to the
stdlib root logger, which the Lambda runtime forwards to CloudWatch.
"""

import logging

import structlog


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog and the stdlib root logger."""
    logging.basicConfig(format="%(message)s", level=log_level)
    # The Lambda runtime installs its own root handler, so basicConfig is a no-op there
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
