"""
Maps HTTP outcomes onto the client's error taxonomy.

Nothing here retries; the functions only decide which exception describes a
response or a transport failure.
"""

import logging
from typing import Any, Dict

import requests

from fakeyou.utils.api.retry import extract_retry_after
from fakeyou.utils.common.exceptions import (
    APIError,
    AuthenticationError,
    InvalidResponseShape,
    RateLimited,
    TransportError,
)

logger = logging.getLogger(__name__)


def _error_body(response: requests.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def error_for_status(response: requests.Response) -> APIError:
    """
    Build the exception describing a non-2xx response.

    Args:
        response: The failed response

    Returns:
        APIError: AuthenticationError for 401, RateLimited for 429 and
        TransportError otherwise
    """
    status_code = response.status_code
    body = _error_body(response)

    if status_code == 401:
        return AuthenticationError(response_data=body)
    if status_code == 429:
        return RateLimited(retry_after=extract_retry_after(response), response_data=body)

    message = f"Request to {response.url} failed with status {status_code}"
    detail = body.get("error_message") or body.get("error_type") or response.reason
    if detail:
        message += f": {detail}"
    return TransportError(message, status_code=status_code, response_data=body)


def raise_for_status(response: requests.Response) -> None:
    """
    Raise the taxonomy error for a non-2xx response.

    Raises:
        AuthenticationError: On HTTP 401
        RateLimited: On HTTP 429
        TransportError: On any other non-2xx status
    """
    if 200 <= response.status_code < 300:
        return
    error = error_for_status(response)
    logger.warning(f"Request failed: {response.status_code} - {error}")
    raise error


def classify_exception(error: requests.RequestException) -> APIError:
    """
    Wrap a ``requests`` exception into the taxonomy.

    Status codes never reach this path, they are classified by
    raise_for_status. Connection failures, timeouts and the rest become
    TransportError.
    """
    return TransportError(f"Request failed: {error}")


def parse_envelope(response: requests.Response) -> Dict[str, Any]:
    """
    Decode a JSON response envelope.

    Raises:
        InvalidResponseShape: If the body is not a JSON object
    """
    try:
        body = response.json()
    except ValueError as e:
        raise InvalidResponseShape(
            f"Invalid response body from {response.url}: not JSON",
            status_code=response.status_code,
        ) from e
    if not isinstance(body, dict):
        raise InvalidResponseShape(
            f"Invalid response body from {response.url}: expected an object",
            status_code=response.status_code,
        )
    return body


def envelope_succeeded(body: Dict[str, Any]) -> bool:
    """Return the envelope's ``success`` flag; an absent flag counts as failure."""
    return body.get("success") is True
