"""Data models for pages that already exist in Confluence."""

from dataclasses import dataclass
from typing import Optional

from src.docs_tree.models import Meta


@dataclass(frozen=True)
class RemotePage:
    """A page as returned by the remote page store.

    Attributes:
        id: Confluence page ID, assigned on creation and never changed
        title: Current page title
        parent_id: ID of the parent page, None for a top-level page of the space
        meta: Provenance read from the page's content property, None for pages
            this tool did not publish
        version: Page version number, when the listing returned it
    """
    id: str
    title: str
    parent_id: Optional[str] = None
    meta: Optional[Meta] = None
    version: Optional[int] = None

    @property
    def source_repo(self) -> Optional[str]:
        return self.meta.repo if self.meta else None
