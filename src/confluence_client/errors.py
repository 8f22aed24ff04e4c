"""Typed exception hierarchy for remote page store errors.

This module defines the root of the application's exception tree and every
exception raised while talking to Confluence. Raw HTTP and client-library
exceptions are translated into these types at the API wrapper boundary, so
the publisher only ever sees RemoteStoreError subclasses.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all confluence-docs-publish errors.

    Use this to catch any application-level error from the publish tool.
    """
    pass


class RemoteStoreError(SyncError):
    """Base exception for all failures surfaced by the remote page store."""
    pass


class InvalidCredentialsError(RemoteStoreError):
    """Raised when API credentials are missing, invalid or rejected."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"API key is invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class PageNotFoundError(RemoteStoreError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class PageAlreadyExistsError(RemoteStoreError):
    """Raised when Confluence refuses a page because its title is taken in the space."""

    def __init__(self, title: str, space_key: Optional[str] = None):
        if space_key:
            message = f"Page with title '{title}' already exists in space {space_key}"
        else:
            message = f"Page with title '{title}' already exists"
        super().__init__(message)
        self.title = title
        self.space_key = space_key


class APIUnreachableError(RemoteStoreError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(RemoteStoreError):
    """Raised when API access fails after retries or due to access restrictions."""

    def __init__(self, message: str = "Confluence API failure (after 3 retries)"):
        super().__init__(message)


class ConversionError(SyncError):
    """Raised when markdown cannot be rendered to Confluence storage format."""

    def __init__(self, message: str):
        super().__init__(message)
