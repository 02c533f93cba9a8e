"""
Authenticated transport session for the FakeYou API.

FakeYou authenticates with a session cookie set by ``POST /login``. A Session
owns the ``requests.Session`` holding that cookie, and every request made
through it carries the cookie, the fixed user agent and the connect timeout.
"""

import logging
from typing import Any, Dict, Optional

import requests

from fakeyou.api.classifier import (
    classify_exception,
    envelope_succeeded,
    raise_for_status,
)
from fakeyou.config import ClientSettings
from fakeyou.utils.common.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class Session:
    """
    Transport handle shared by every call of one client.

    Args:
        settings: Client settings, defaults to ClientSettings()
        http: Pre-built ``requests.Session``, mainly for tests
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        http: Optional[requests.Session] = None,
    ):
        self.settings = settings or ClientSettings()
        self.http = http if http is not None else requests.Session()
        self.http.headers.update(
            {
                "User-Agent": self.settings.user_agent,
                "Accept": "application/json",
            }
        )
        self.authenticated = False

    @classmethod
    def authenticate(
        cls,
        username: str,
        password: str,
        settings: Optional[ClientSettings] = None,
        http: Optional[requests.Session] = None,
    ) -> "Session":
        """
        Log in once and return a session carrying the auth cookie.

        Args:
            username: Username or email
            password: Account password
            settings: Client settings
            http: Pre-built ``requests.Session``

        Returns:
            Session: Authenticated session

        Raises:
            AuthenticationError: If the credentials are rejected
            RateLimited: If the login endpoint is rate limited
            TransportError: On any other network or HTTP failure
        """
        session = cls(settings=settings, http=http)
        session.login(username, password)
        return session

    def login(self, username: str, password: str) -> None:
        """Send the credentials; the server answers with a session cookie."""
        logger.info(f"Logging in to {self.settings.base_url} as {username}")
        response = self.request(
            "POST",
            "/login",
            json={"username_or_email": username, "password": password},
        )

        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and "success" in body and not envelope_succeeded(body):
            raise AuthenticationError(response_data=body, status_code=response.status_code)

        self.authenticated = True
        logger.debug("Login succeeded, session cookie stored")

    def url(self, endpoint: str) -> str:
        return f"{self.settings.base_url}{endpoint}"

    def request(
        self,
        method: str,
        endpoint: str,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Make a request against the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            json: JSON body for the request
            data: Form fields for the request
            files: Multipart file fields

        Returns:
            requests.Response: A 2xx response

        Raises:
            AuthenticationError: On HTTP 401
            RateLimited: On HTTP 429
            TransportError: On any other failure
        """
        url = self.url(endpoint)
        logger.debug(f"Making {method} request to {url}")

        try:
            response = self.http.request(
                method,
                url,
                json=json,
                data=data,
                files=files,
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} request to {url} failed: {str(e)}")
            raise classify_exception(e) from e

        raise_for_status(response)
        return response

    def close(self) -> None:
        """Close the underlying connection pool."""
        self.http.close()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
