# /basefee/core/logger.py
import logging
import sys
import structlog
from structlog.contextvars import bound_contextvars
import sentry_sdk
from prometheus_client import Counter
from basefee.core.config import settings

# --- Prometheus Metrics ---
BASE_FEE_SUGGESTIONS = Counter("basefee_suggestions_total", "Total number of base fee suggestions computed")
TREND_CLASSIFICATIONS = Counter("basefee_trend_classifications_total", "Base fee trend results", ["trend"])
TREND_FALLBACKS = Counter("basefee_trend_fallbacks_total", "Trend classifications that fell back to stable")
OUTLIER_BLOCKS = Counter("basefee_outlier_blocks_total", "Blocks dropped from reward sampling as outliers")


def configure_logging():
    if settings.SENTRY_DSN:
        sentry_sdk.init(dsn=settings.SENTRY_DSN, traces_sample_rate=0.0)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(settings.LOG_LEVEL.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    return structlog.get_logger(name)


def block_context(oldest_block: int):
    """Tags every log line emitted inside the block with the fee history range."""
    return bound_contextvars(oldest_block=oldest_block)


configure_logging()
log = get_logger("basefee")
