# librarian/utils/tracing.py
import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar

import sentry_sdk

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def init_sentry(dsn: Optional[str], traces_sample_rate: float = 1.0) -> bool:
    """Initialize Sentry error reporting and tracing if a DSN is configured.

    Returns:
        True if Sentry was initialized, False otherwise
    """
    if not dsn:
        logger.info("SENTRY_DSN not set - error reporting disabled")
        return False
    sentry_sdk.init(dsn=dsn, traces_sample_rate=traces_sample_rate)
    return True


def traced(description: str, op: str = "Database") -> Callable[[F], F]:
    """Wrap a call in a Sentry span and log how long it took.

    Spans are only recorded while a transaction is active.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            with sentry_sdk.start_span(op=op, name=description):
                try:
                    return func(*args, **kwargs)
                finally:
                    elapsed_ms = (time.perf_counter() - started) * 1000
                    logger.debug(f"{description} took {elapsed_ms:.1f}ms")
        return wrapper  # type: ignore[return-value]
    return decorator
