"""Per-page sync: create, update or keep one page under a given parent."""

import logging
from typing import Mapping, Optional

from src.confluence_client.errors import PageAlreadyExistsError
from src.confluence_client.models import RemotePage
from src.confluence_client.page_store import ConfluencePageStore
from src.content_converter.page_renderer import PageRenderer
from src.docs_tree.models import LocalPage
from .errors import ConflictError
from .models import Matched, SyncAction, SyncOutcome, SyncResult, Unmatched

logger = logging.getLogger(__name__)


class PageSynchronizer:
    """Applies one SyncAction to the remote page store.

    Content is rendered only when a create or update is actually issued.

    Titles are unique in a Confluence space, so a page taking a new title can
    collide with another page of the same project that is about to be renamed
    (two pages swapping titles, for instance). Such a page is parked under a
    temporary title first; its own sync later gives it its final title.

    Args:
        store: Remote page store
        renderer: Storage-format renderer
        repo: Repository URL of the publishing project
        local_pages: Every local page of the run by source path, used to tell
            a page being renamed from a genuine duplicate title

    Example:
        >>> synchronizer = PageSynchronizer(store, renderer, "https://github.com/acme/docs")
        >>> result = synchronizer.sync(Unmatched(page), parent_id="123")
        >>> result.outcome
        <SyncOutcome.CREATED: 'created'>
    """

    def __init__(
        self,
        store: ConfluencePageStore,
        renderer: PageRenderer,
        repo: str,
        local_pages: Optional[Mapping[str, LocalPage]] = None,
    ):
        self.store = store
        self.renderer = renderer
        self.repo = repo
        self.local_pages = local_pages or {}

    def sync(self, action: SyncAction, parent_id: Optional[str]) -> SyncResult:
        """Make the remote store reflect ``action.local`` under ``parent_id``.

        Raises:
            ConflictError: If the remote page belongs to another repository
            PageAlreadyExistsError: If two local pages want the same title
            RemoteStoreError: If a remote call fails
        """
        if isinstance(action, Matched):
            return self._update(action.local, action.remote, parent_id)
        if isinstance(action, Unmatched):
            return self._create(action.local, parent_id)
        raise TypeError(f"Unknown sync action: {action!r}")

    def check_owner(self, title: str, remote: RemotePage) -> None:
        """Refuse to touch a page published from another repository.

        Raises:
            ConflictError: If the page's provenance names a different repository
        """
        if remote.source_repo != self.repo:
            raise ConflictError(title, remote.source_repo, self.repo)

    def _create(self, local: LocalPage, parent_id: Optional[str]) -> SyncResult:
        content = self._content(local)
        try:
            page = self.store.create_page(local.title, parent_id, content, local.meta)
        except PageAlreadyExistsError:
            existing = self.store.find_page_by_title(local.title)
            if existing is None:
                raise
            self.check_owner(local.title, existing)

            if self._renamed_owner(existing, local.title) is None:
                # Same title elsewhere in the space: a page moved to another level
                logger.info(f'Page "{local.title}" exists at another level, moving it')
                return self._update(local, existing, parent_id)

            self._park(existing)
            page = self.store.create_page(local.title, parent_id, content, local.meta)

        logger.info(f'Created page "{local.title}" ({page.id})')
        return SyncResult(page=page, outcome=SyncOutcome.CREATED, local=local)

    def _update(self, local: LocalPage, remote: RemotePage, parent_id: Optional[str]) -> SyncResult:
        self.check_owner(local.title, remote)

        if self.is_unchanged(local, remote, parent_id):
            logger.debug(f'Page "{local.title}" ({remote.id}) is up to date')
            return SyncResult(page=remote, outcome=SyncOutcome.UNCHANGED, local=local)

        content = self._content(local)
        try:
            page = self.store.update_page(remote.id, local.title, content, parent_id, local.meta)
        except PageAlreadyExistsError:
            self._free_title(local.title, remote)
            page = self.store.update_page(remote.id, local.title, content, parent_id, local.meta)

        logger.info(f'Updated page "{local.title}" ({page.id})')
        return SyncResult(page=page, outcome=SyncOutcome.UPDATED, local=local)

    def _free_title(self, title: str, renamed: RemotePage) -> None:
        """Make ``title`` available for ``renamed``, or re-raise the collision.

        Raises:
            ConflictError: If the title belongs to a page of another repository
            PageAlreadyExistsError: If another local page wants the same title
        """
        holder = self.store.find_page_by_title(title)
        if holder is None or holder.id == renamed.id:
            raise PageAlreadyExistsError(title=title)
        self.check_owner(title, holder)

        if self._renamed_owner(holder, title) is not None:
            self._park(holder)
        elif holder.meta is not None and holder.meta.path and holder.meta.path not in self.local_pages:
            removed = self.store.delete_page(holder.id)
            logger.info(
                f'Deleted page "{title}" ({holder.id}) and {removed - 1} page(s) below it: '
                f'{holder.meta.path} is no longer in the docs'
            )
        else:
            raise PageAlreadyExistsError(title=title)

    def _renamed_owner(self, holder: RemotePage, title: str) -> Optional[LocalPage]:
        """The local page ``holder`` was published from, if it now has another title."""
        path = holder.meta.path if holder.meta else None
        owner = self.local_pages.get(path) if path else None
        if owner is None or owner.title == title:
            return None
        return owner

    def _park(self, holder: RemotePage) -> None:
        parked_title = f"{holder.title} ({holder.id})"
        owner = self._renamed_owner(holder, holder.title)
        content = self._content(owner) if owner is not None else ""
        self.store.update_page(holder.id, parked_title, content, holder.parent_id, holder.meta)
        logger.info(f'Parked page "{holder.title}" ({holder.id}) as "{parked_title}" to free its title')

    @staticmethod
    def is_unchanged(local: LocalPage, remote: RemotePage, parent_id: Optional[str]) -> bool:
        return (
            remote.title == local.title
            and remote.parent_id == parent_id
            and remote.meta == local.meta
        )

    def _content(self, local: LocalPage) -> str:
        if local.content is None:
            local.content = self.renderer.render(local)
        return local.content
