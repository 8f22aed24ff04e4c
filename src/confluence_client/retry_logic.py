"""Retry with exponential backoff for Confluence rate limits.

Only HTTP 429 responses are retried. Every other failure is raised on the
first attempt so the publish run aborts with the original error.
"""

import logging
import time
from typing import Callable, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3
BASE_DELAY_SECONDS = 1.0

RATE_LIMIT_PATTERNS = (
    '429',
    'too many requests',
    'rate limit exceeded',
    'rate limited',
)


def retry_on_rate_limit(operation: Callable[[], T], description: str = "request") -> T:
    """Run ``operation``, retrying on rate limits with 1s, 2s, 4s backoff.

    Args:
        operation: Zero-argument callable performing one API request
        description: Short label used in log messages

    Returns:
        Whatever ``operation`` returns

    Raises:
        APIAccessError: If the rate limit persists after MAX_RETRIES retries
        Exception: Any non rate-limit error, unchanged
    """
    for attempt in range(MAX_RETRIES + 1):
        try:
            return operation()
        except Exception as e:
            if not is_rate_limit_error(e):
                raise

            if attempt >= MAX_RETRIES:
                logger.error(
                    f"Rate limit persisted for {description} after {MAX_RETRIES} retries"
                )
                raise APIAccessError(
                    f"Confluence API failure during {description} (after {MAX_RETRIES} retries)"
                ) from e

            wait_time = BASE_DELAY_SECONDS * (2 ** attempt)
            logger.info(
                f"Rate limit hit during {description}, retrying in {wait_time:g}s "
                f"(retry {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    raise APIAccessError(f"Confluence API failure during {description}")


def is_rate_limit_error(exception: Exception) -> bool:
    """Return True if ``exception`` looks like an HTTP 429 response."""
    status_code = getattr(exception, 'status_code', None)
    response = getattr(exception, 'response', None)
    if status_code is None and response is not None:
        status_code = getattr(response, 'status_code', None)
    if status_code == 429:
        return True

    error_msg = str(exception).lower()
    return any(pattern in error_msg for pattern in RATE_LIMIT_PATTERNS)
