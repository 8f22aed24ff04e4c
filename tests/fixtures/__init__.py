"""Test fixtures: small mkdocs projects written to temporary directories."""

from .docs_projects import (
    GUIDES_FILES,
    GUIDES_NAV,
    OTHER_REPO_URL,
    REPO_URL,
    write_docs_project,
    write_guides_project,
)

__all__ = [
    "GUIDES_FILES",
    "GUIDES_NAV",
    "OTHER_REPO_URL",
    "REPO_URL",
    "write_docs_project",
    "write_guides_project",
]
