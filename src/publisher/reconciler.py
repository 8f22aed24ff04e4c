"""Reconciliation of the local page tree against the remote page tree.

The tree is walked one level at a time, parents before children. For each
level the remote children of the level's parent page are fetched once,
paired with the local pages by source path, and the resulting plan is
executed: orphans are deleted, then every local page is created, updated or
kept. Only after a level is fully synced are the IDs of its section pages
known, so the walk descends into sections strictly sequentially.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from src.confluence_client.models import RemotePage
from src.confluence_client.page_store import ConfluencePageStore
from src.docs_tree.models import LocalPage, SectionHierarchy
from .models import (
    LevelPlan,
    Matched,
    SyncAction,
    SyncedPageIndex,
    SyncOutcome,
    SyncResult,
    Unmatched,
)
from .page_sync import PageSynchronizer

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


def plan_level(
    section: Optional[str],
    parent_id: str,
    local_pages: Sequence[LocalPage],
    remote_children: Mapping[str, RemotePage],
) -> LevelPlan:
    """Pair local pages with remote children by source path.

    Remote children left over after pairing are orphans. Nothing is changed
    remotely.
    """
    remaining = dict(remote_children)
    actions: List[SyncAction] = []
    for page in local_pages:
        remote = remaining.pop(page.identity_path, None) if page.identity_path else None
        actions.append(Matched(page, remote) if remote is not None else Unmatched(page))
    return LevelPlan(section, parent_id, actions, list(remaining.values()))


def group_levels(
    pages: Sequence[LocalPage],
    hierarchy: SectionHierarchy,
) -> Dict[Optional[str], List[LocalPage]]:
    """Group pages by the section level they are synced in.

    A section with no page of its own cannot be a level: its pages are
    synced in the nearest enclosing section that has one, ultimately the
    root level (key None).
    """
    represented = {page.represents for page in pages if page.represents}

    def level_of(section: Optional[str]) -> Optional[str]:
        seen = set()
        while section is not None and section not in represented:
            if section in seen:
                return None
            seen.add(section)
            section = hierarchy.get(section)
        return section

    levels: Dict[Optional[str], List[LocalPage]] = {}
    for page in pages:
        levels.setdefault(level_of(page.section), []).append(page)
    return levels


class Reconciler:
    """Walks the local tree and brings the remote tree in line with it.

    Args:
        store: Remote page store
        synchronizer: Per-page sync operation
        max_workers: Pages of one level synced in parallel. 1 (the default)
            syncs them one after another.
    """

    def __init__(
        self,
        store: ConfluencePageStore,
        synchronizer: PageSynchronizer,
        max_workers: int = 1,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.store = store
        self.synchronizer = synchronizer
        self.max_workers = max_workers

    def reconcile(
        self,
        root_id: str,
        pages: Sequence[LocalPage],
        hierarchy: SectionHierarchy,
    ) -> List[SyncResult]:
        """Sync every page below the home page ``root_id``.

        Returns:
            One result per synced or deleted page, level by level

        Raises:
            ConflictError: If a page belongs to another repository
            RemoteStoreError: If a remote call fails; the run stops there
        """
        levels = group_levels(pages, hierarchy)
        index = SyncedPageIndex(root_id)
        results: List[SyncResult] = []
        self._process_level(None, levels, index, results)
        return results

    def _process_level(
        self,
        section: Optional[str],
        levels: Dict[Optional[str], List[LocalPage]],
        index: SyncedPageIndex,
        results: List[SyncResult],
    ) -> None:
        parent_id = index.parent_id(section)
        remote_children = self.store.get_child_pages(parent_id)
        plan = plan_level(section, parent_id, levels.get(section, []), remote_children)

        level_name = section or "<root>"
        logger.debug(
            f"Level {level_name}: {len(plan.actions)} local pages, "
            f"{len(remote_children)} remote children, {len(plan.orphans)} orphans"
        )

        results.extend(self._run(self._delete_orphan, plan.orphans))
        synced = self._sync_actions(plan.actions, parent_id)
        results.extend(synced)

        sections = []
        for result in synced:
            represents = result.local.represents if result.local else None
            if represents and represents not in index:
                index.record(represents, result.page.id)
                sections.append(represents)

        for child_section in sections:
            self._process_level(child_section, levels, index, results)

    def _sync_actions(self, actions: Sequence[SyncAction], parent_id: str) -> List[SyncResult]:
        """Sync a level's actions, retitling pages one at a time first.

        A rename may have to park the page that still holds the new title,
        which must not race with that page's own sync.
        """
        renames = [i for i, action in enumerate(actions) if _is_rename(action)]
        rest = [i for i, action in enumerate(actions) if not _is_rename(action)]

        results: List[Optional[SyncResult]] = [None] * len(actions)
        for i in renames:
            results[i] = self.synchronizer.sync(actions[i], parent_id)
        synced = self._run(lambda i: self.synchronizer.sync(actions[i], parent_id), rest)
        for i, result in zip(rest, synced):
            results[i] = result
        return results  # type: ignore[return-value]

    def _delete_orphan(self, orphan: RemotePage) -> SyncResult:
        removed = self.store.delete_page(orphan.id)
        logger.info(
            f'Deleted page "{orphan.title}" ({orphan.id}) and {removed - 1} page(s) below it: '
            f'no longer in the docs'
        )
        return SyncResult(page=orphan, outcome=SyncOutcome.DELETED, removed_descendants=removed - 1)

    def _run(self, func: Callable[[T], R], items: Sequence[T]) -> List[R]:
        """Apply ``func`` to every item, in parallel when configured.

        Results keep the order of ``items``. The first failure is raised
        once all submitted work has finished.
        """
        if self.max_workers == 1 or len(items) <= 1:
            return [func(item) for item in items]

        ordered: List[Optional[R]] = [None] * len(items)
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(func, item): i for i, item in enumerate(items)}
            for future in as_completed(futures):
                ordered[futures[future]] = future.result()
        return ordered  # type: ignore[return-value]


def _is_rename(action: SyncAction) -> bool:
    return isinstance(action, Matched) and action.remote.title != action.local.title
