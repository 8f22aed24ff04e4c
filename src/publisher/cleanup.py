"""Removal of a previously published site."""

import logging
from typing import Optional

from src.confluence_client.page_store import ConfluencePageStore
from .errors import ConflictError
from .models import CleanupResult

logger = logging.getLogger(__name__)


class CleanupSweeper:
    """Deletes the home page of a site and everything below it.

    Deeper pages go with their parents: the page store removes a page's
    descendants before the page itself when cascading delete is on.
    """

    def __init__(self, store: ConfluencePageStore):
        self.store = store

    def sweep(self, site_name: str, repo: Optional[str] = None) -> CleanupResult:
        """Delete the site's home page and its children.

        A missing home page is not an error; nothing is deleted.

        Args:
            site_name: Title of the home page
            repo: When given, the home page must have been published from
                this repository

        Raises:
            ConflictError: If the home page belongs to another repository
            RemoteStoreError: If a deletion fails; remaining pages are kept
        """
        root = self.store.find_page_by_title(site_name)
        if root is None:
            logger.warning(f'No page titled "{site_name}", nothing to clean here')
            return CleanupResult(site_name=site_name)

        if repo is not None and root.source_repo != repo:
            raise ConflictError(site_name, root.source_repo, repo)

        removed = 0
        for child in self.store.get_child_pages(root.id).values():
            count = self.store.delete_page(child.id)
            removed += count
            logger.info(f'Deleted page "{child.title}" ({child.id}) and {count - 1} page(s) below it')

        self.store.delete_page(root.id)
        logger.info(f'Deleted home page "{site_name}" ({root.id})')
        return CleanupResult(site_name=site_name, root_id=root.id, removed_pages=removed)
