"""
API utilities for the FakeYou client.
"""

from fakeyou.utils.api.retry import (
    RetryConfig,
    calculate_backoff,
    extract_retry_after,
    should_retry,
    with_retry,
)

__all__ = [
    "RetryConfig",
    "calculate_backoff",
    "extract_retry_after",
    "should_retry",
    "with_retry",
]
