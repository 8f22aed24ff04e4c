"""Publishing of the local documentation tree to Confluence.

The home page is synced first, then the reconciler walks the tree level by
level, parents before children. The cleanup sweeper removes a published
site again.
"""

from .cleanup import CleanupSweeper
from .errors import ConflictError, ParentPageNotFoundError, PublishError
from .home_resolver import HomeResolver
from .models import (
    CleanupResult,
    LevelPlan,
    Matched,
    PublishSummary,
    SyncAction,
    SyncedPageIndex,
    SyncOutcome,
    SyncResult,
    Unmatched,
)
from .page_sync import PageSynchronizer
from .publisher import DocsPublisher
from .reconciler import Reconciler, group_levels, plan_level

__all__ = [
    'CleanupSweeper',
    'ConflictError',
    'ParentPageNotFoundError',
    'PublishError',
    'HomeResolver',
    'CleanupResult',
    'LevelPlan',
    'Matched',
    'PublishSummary',
    'SyncAction',
    'SyncedPageIndex',
    'SyncOutcome',
    'SyncResult',
    'Unmatched',
    'PageSynchronizer',
    'DocsPublisher',
    'Reconciler',
    'group_levels',
    'plan_level',
]
