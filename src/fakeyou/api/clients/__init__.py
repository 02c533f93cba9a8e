"""
API client implementations for the FakeYou client.
"""

from .base import BaseAPIClient
from .fakeyou import FakeYouClient

__all__ = ["BaseAPIClient", "FakeYouClient"]
