"""Confluence client library for the docs publisher.

This package wraps the Confluence Cloud REST API: credentials, rate-limit
retries, and translation of HTTP failures into typed errors.
"""

from .api_wrapper import APIWrapper
from .auth import Authenticator, Credentials
from .errors import (
    SyncError,
    RemoteStoreError,
    InvalidCredentialsError,
    PageNotFoundError,
    PageAlreadyExistsError,
    APIUnreachableError,
    APIAccessError,
    ConversionError,
)
from .models import RemotePage
from .page_store import ConfluencePageStore, PROPERTY_KEY

__all__ = [
    "APIWrapper",
    "Authenticator",
    "Credentials",
    "ConfluencePageStore",
    "PROPERTY_KEY",
    "RemotePage",
    "SyncError",
    "RemoteStoreError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "PageAlreadyExistsError",
    "APIUnreachableError",
    "APIAccessError",
    "ConversionError",
]
