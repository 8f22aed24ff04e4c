"""Entry point of a publish run: home page first, then the rest of the tree."""

import logging
from typing import Optional

from src.confluence_client.page_store import ConfluencePageStore
from src.content_converter.page_renderer import PageRenderer
from src.docs_tree.models import DocsContext
from .home_resolver import HomeResolver
from .models import PublishSummary
from .page_sync import PageSynchronizer
from .reconciler import Reconciler

logger = logging.getLogger(__name__)


class DocsPublisher:
    """Publishes a DocsContext to a Confluence space.

    Example:
        >>> context = build_context(".", title_prefix="[ACME]")
        >>> publisher = DocsPublisher(store, PageRenderer(context.page_refs))
        >>> summary = publisher.publish(context, parent_page="Engineering")
        >>> summary.created
        12
    """

    def __init__(self, store: ConfluencePageStore, renderer: PageRenderer, max_workers: int = 1):
        self.store = store
        self.renderer = renderer
        self.max_workers = max_workers

    def publish(self, context: DocsContext, parent_page: Optional[str] = None) -> PublishSummary:
        """Sync the home page, then every page below it.

        Raises:
            ParentPageNotFoundError: If ``parent_page`` does not exist
            ConflictError: If a page belongs to another repository
            RemoteStoreError: If a remote call fails; the run stops there
        """
        local_pages = {page.identity_path: page for page in context.pages if page.identity_path}
        if context.readme is not None and context.readme.identity_path:
            local_pages[context.readme.identity_path] = context.readme
        synchronizer = PageSynchronizer(self.store, self.renderer, context.repo, local_pages)

        home = HomeResolver(self.store, synchronizer).resolve(
            context.repo,
            context.site_name,
            readme=context.readme,
            parent_page=parent_page,
        )
        logger.info(f'Home page "{context.site_name}" is {home.page.id} ({home.outcome.value})')

        reconciler = Reconciler(self.store, synchronizer, max_workers=self.max_workers)
        results = reconciler.reconcile(home.page.id, context.pages, context.hierarchy)

        return PublishSummary(
            root=home,
            results=results,
            root_url=self.store.page_url(home.page.id),
        )
