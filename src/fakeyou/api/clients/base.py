"""
Base API client for the FakeYou client.

This module provides a base class holding the authenticated session and the
JSON request helpers every endpoint goes through.
"""

import logging
from typing import Any, Dict, Optional

from fakeyou.api.classifier import envelope_succeeded, parse_envelope
from fakeyou.api.session import Session
from fakeyou.config import ClientSettings
from fakeyou.utils.common.exceptions import RequestRejected, SubmissionRejected


class BaseAPIClient:
    """Base class for API clients."""

    def __init__(self, session: Session):
        """
        Initialize the base API client.

        Args:
            session: Session used for every request
        """
        self.session = session
        self.logger = logging.getLogger(__name__)

    @property
    def settings(self) -> ClientSettings:
        return self.session.settings

    def get(self, endpoint: str) -> Dict[str, Any]:
        """
        Make a GET request and require a successful envelope.

        Args:
            endpoint: API endpoint

        Returns:
            Decoded response envelope

        Raises:
            RequestRejected: If the envelope reports ``success: false``
        """
        body = parse_envelope(self.session.request("GET", endpoint))
        if not envelope_succeeded(body):
            error = RequestRejected(endpoint, body)
            self.logger.error(str(error))
            raise error
        return body

    def post(
        self,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make a POST request and require a successful envelope.

        Args:
            endpoint: API endpoint
            json: JSON data
            data: Form data
            files: Multipart file fields

        Returns:
            Decoded response envelope

        Raises:
            SubmissionRejected: If the envelope reports ``success: false``
        """
        body = parse_envelope(
            self.session.request("POST", endpoint, json=json, data=data, files=files)
        )
        if not envelope_succeeded(body):
            error = SubmissionRejected(endpoint, body)
            self.logger.error(str(error))
            raise error
        return body

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "BaseAPIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
