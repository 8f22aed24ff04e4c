"""Syncs the home page, the root every other page hangs under."""

import logging
from typing import Optional

from src.confluence_client.page_store import ConfluencePageStore
from src.docs_tree.models import LocalPage, Meta
from .errors import ParentPageNotFoundError
from .models import Matched, SyncResult, Unmatched
from .page_sync import PageSynchronizer

logger = logging.getLogger(__name__)


class HomeResolver:
    """Creates or updates the home page of a site.

    The home page is found by its title (the site name), since it is the
    one page whose parent is not under this tool's control.
    """

    def __init__(self, store: ConfluencePageStore, synchronizer: PageSynchronizer):
        self.store = store
        self.synchronizer = synchronizer

    def resolve(
        self,
        repo: str,
        site_name: str,
        readme: Optional[LocalPage] = None,
        parent_page: Optional[str] = None,
    ) -> SyncResult:
        """Sync the home page and return its result.

        Args:
            repo: Repository URL of the publishing project
            site_name: Title of the home page
            readme: Page built from the top-level README.md, if there is one
            parent_page: Title of an existing page to publish under

        Raises:
            ParentPageNotFoundError: If ``parent_page`` does not exist
            ConflictError: If a page titled ``site_name`` belongs to another repository
        """
        home = readme or LocalPage(title=site_name, meta=Meta(repo=repo))

        parent_id = None
        if parent_page:
            ancestor = self.store.find_page_by_title(parent_page)
            if ancestor is None:
                raise ParentPageNotFoundError(parent_page)
            parent_id = ancestor.id
            logger.debug(f'Publishing under "{parent_page}" ({parent_id})')

        existing = self.store.find_page_by_title(site_name)
        if existing is None:
            return self.synchronizer.sync(Unmatched(home), parent_id)

        self.synchronizer.check_owner(site_name, existing)
        return self.synchronizer.sync(Matched(home, existing), parent_id)
