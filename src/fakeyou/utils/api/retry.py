"""
Retry utilities for the FakeYou client.

The client itself never retries. This module gives callers an opt-in way to
resubmit a request after a rate limit or a transient transport failure. Since
every request carries its idempotency token, resubmitting the same request
object cannot create a duplicate job on the server.
"""

import functools
import logging
import random
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, List, Optional, Type, TypeVar

from typing_extensions import ParamSpec

from fakeyou.utils.common.exceptions import RateLimited, TransportError

logger = logging.getLogger(__name__)

# Type variables for the decorated function
P = ParamSpec("P")
T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 3
    """Maximum number of retry attempts."""

    base_delay: float = 1.0
    """Base delay between retries in seconds."""

    max_delay: float = 60.0
    """Maximum delay between retries in seconds."""

    retry_on: List[Type[Exception]] = field(
        default_factory=lambda: [RateLimited, TransportError]
    )
    """Exception types to retry on."""

    retry_status_codes: List[int] = field(
        default_factory=lambda: [500, 502, 503, 504]
    )
    """Status codes for which a TransportError is retried. Errors without a
    status code (connection failures, timeouts) are always retried."""

    jitter: bool = True
    """Whether to apply jitter to the delay."""


def extract_retry_after(response: Any) -> Optional[float]:
    """
    Extract the Retry-After header from a response.

    Args:
        response: Response object

    Returns:
        Optional[float]: Retry-After value in seconds, or None if not found
    """
    if response is None or not hasattr(response, "headers"):
        return None

    retry_after = response.headers.get("Retry-After")
    if retry_after is None:
        return None

    try:
        # Retry-After can be a number of seconds or an HTTP date
        if retry_after.strip().isdigit():
            return float(retry_after)
        retry_date = parsedate_to_datetime(retry_after)
        if retry_date.tzinfo is None:
            retry_date = retry_date.replace(tzinfo=timezone.utc)
        return max(0.0, (retry_date - datetime.now(timezone.utc)).total_seconds())
    except (TypeError, ValueError, AttributeError):
        return None


def calculate_backoff(
    retry_attempt: int, config: RetryConfig, retry_after: Optional[float] = None
) -> float:
    """
    Calculate the backoff time for a retry attempt.

    Args:
        retry_attempt: Current retry attempt (0-based)
        config: Retry configuration
        retry_after: Optional retry after time from response

    Returns:
        float: Time to wait before retrying (in seconds)
    """
    if retry_after is not None:
        return float(retry_after)

    delay = min(config.max_delay, config.base_delay * (2**retry_attempt))

    if config.jitter:
        delay = delay + random.random() * 0.1 * delay

    return float(delay)


def should_retry(error: Exception, config: RetryConfig) -> bool:
    """
    Decide whether an error is worth another attempt.

    Args:
        error: The raised exception
        config: Retry configuration

    Returns:
        bool: True if the call should be retried
    """
    if not any(isinstance(error, retry_type) for retry_type in config.retry_on):
        return False
    if isinstance(error, TransportError):
        return error.status_code is None or error.status_code in config.retry_status_codes
    return True


def with_retry(
    config: Optional[RetryConfig] = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for retrying a function with exponential backoff.

    Args:
        config: Optional retry configuration

    Returns:
        Decorator function
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            retry_config = config or RetryConfig()
            retry_attempt = 0

            while True:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not should_retry(e, retry_config):
                        raise

                    if retry_attempt >= retry_config.max_retries:
                        logger.error(
                            f"Max retries ({retry_config.max_retries}) exceeded. Last error: {e}"
                        )
                        raise

                    retry_after = getattr(e, "retry_after", None)
                    delay = calculate_backoff(retry_attempt, retry_config, retry_after)

                    logger.warning(
                        f"Retry attempt {retry_attempt + 1}/{retry_config.max_retries} after error: {e}. "
                        f"Waiting {delay:.2f} seconds before retrying."
                    )

                    time.sleep(delay)
                    retry_attempt += 1

        return wrapper

    return decorator
