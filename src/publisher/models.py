"""Data models of a publish run.

A level of the tree is planned as a list of sync actions plus the remote
pages that have no local counterpart any more. Executing the plan yields
SyncResults, which the run collects into a PublishSummary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from src.confluence_client.models import RemotePage
from src.docs_tree.models import LocalPage


@dataclass(frozen=True)
class Unmatched:
    """A local page with no remote counterpart yet: it will be created."""
    local: LocalPage


@dataclass(frozen=True)
class Matched:
    """A local page paired with the remote page published from the same file."""
    local: LocalPage
    remote: RemotePage


SyncAction = Union[Unmatched, Matched]


class SyncOutcome(Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DELETED = "deleted"


@dataclass
class SyncResult:
    """What happened to one page.

    ``local`` is None for deleted pages, which only exist remotely.
    ``removed_descendants`` counts the pages deleted along with a deleted
    page because they were below it.
    """
    page: RemotePage
    outcome: SyncOutcome
    local: Optional[LocalPage] = None
    removed_descendants: int = 0


@dataclass
class LevelPlan:
    """Decisions for one level of the tree, made before anything is changed.

    Attributes:
        section: Section whose pages this level holds, None for the root level
        parent_id: Remote ID every page of this level is placed under
        actions: One action per local page, in navigation order
        orphans: Remote children with no local counterpart (to be deleted)
    """
    section: Optional[str]
    parent_id: str
    actions: List[SyncAction] = field(default_factory=list)
    orphans: List[RemotePage] = field(default_factory=list)


class SyncedPageIndex:
    """Per-run map from section to the remote ID of its page.

    Seeded with the home page under ``None``; a section is recorded once,
    as soon as its representative page is synced.
    """

    def __init__(self, root_id: str):
        self._ids: Dict[Optional[str], str] = {None: root_id}

    def record(self, section: str, page_id: str) -> None:
        if section in self._ids:
            raise ValueError(f'Section "{section}" was already synced in this run')
        self._ids[section] = page_id

    def parent_id(self, section: Optional[str]) -> str:
        return self._ids[section]

    def __contains__(self, section: Optional[str]) -> bool:
        return section in self._ids


@dataclass
class PublishSummary:
    """Outcome of a full publish run."""
    root: SyncResult
    results: List[SyncResult] = field(default_factory=list)
    root_url: Optional[str] = None

    def count(self, outcome: SyncOutcome) -> int:
        total = sum(1 for result in self.results if result.outcome == outcome)
        if self.root.outcome == outcome:
            total += 1
        return total

    @property
    def created(self) -> int:
        return self.count(SyncOutcome.CREATED)

    @property
    def updated(self) -> int:
        return self.count(SyncOutcome.UPDATED)

    @property
    def unchanged(self) -> int:
        return self.count(SyncOutcome.UNCHANGED)

    @property
    def deleted(self) -> int:
        """Deleted pages, the pages removed below them included."""
        cascaded = sum(result.removed_descendants for result in self.results)
        return self.count(SyncOutcome.DELETED) + cascaded


@dataclass
class CleanupResult:
    """Outcome of a cleanup run.

    ``root_id`` is None when there was no published home page to remove.
    ``removed_pages`` counts every page deleted below the home page, at any
    depth.
    """
    site_name: str
    root_id: Optional[str] = None
    removed_pages: int = 0

    @property
    def found(self) -> bool:
        return self.root_id is not None
