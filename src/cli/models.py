"""Data models for CLI operations."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

DEFAULT_CONFIG_FILE = 'confluence-publish.yaml'
DEFAULT_MKDOCS_FILE = 'mkdocs.yml'


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, missing files, rendering)
    - CONFLICTS (2): A page belongs to a different repository
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFLICTS = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class PublishConfig:
    """Settings of a publish or cleanup run.

    Attributes:
        space_key: Confluence space to publish into
        parent_page: Title of an existing page the home page is placed under
        title_prefix: Prefix for every page title except the home page
        max_workers: Pages of one tree level synced in parallel
        mkdocs_file: Name of the mkdocs config file in the base path
        cascade_delete: Remove a page's descendants before removing the page

    Example:
        >>> config = PublishConfig(space_key="DOCS", title_prefix="[ACME]")
    """
    space_key: str
    parent_page: Optional[str] = None
    title_prefix: str = ''
    max_workers: int = 1
    mkdocs_file: str = DEFAULT_MKDOCS_FILE
    cascade_delete: bool = True
