"""Errors raised while publishing the local tree to Confluence."""

from typing import Optional

from src.confluence_client.errors import SyncError
from src.docs_tree.errors import ConfigError


class PublishError(SyncError):
    """Base exception for publish-time failures that are not remote errors."""
    pass


class ConflictError(PublishError):
    """Raised when a page with the same title belongs to a different source.

    The page is left untouched; the run stops so foreign content is never
    overwritten.
    """

    def __init__(self, title: str, owner_repo: Optional[str], repo: str):
        owner = owner_repo or "an unknown source"
        super().__init__(
            f'Page "{title}" already exists and belongs to {owner}, not {repo}'
        )
        self.title = title
        self.owner_repo = owner_repo
        self.repo = repo


class ParentPageNotFoundError(ConfigError):
    """Raised when the configured parent page does not exist in the space."""

    def __init__(self, title: str):
        super().__init__(f'Parent page "{title}" does not exist', 'parent_page')
        self.title = title
