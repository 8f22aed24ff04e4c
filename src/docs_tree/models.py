"""Data models for the local documentation tree.

This module defines the models produced by the tree builder and consumed by
the publisher. All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# Section name -> parent section name (None for sections at the root level)
SectionHierarchy = Dict[str, Optional[str]]


@dataclass(frozen=True)
class Meta:
    """Provenance of a page: which repository and file it was published from.

    The same record is stored on the remote page when it is created, so a
    later run can tell its own pages apart from pages of another repository.

    Attributes:
        repo: Repository URL of the publishing project (mkdocs ``repo_url``)
        path: Source file path relative to the base path (None for synthesized pages)
        sha: SHA-256 of the source file (None for synthesized pages)
        links: Digest of the titles the page links to (None without links)
    """
    repo: str
    path: Optional[str] = None
    sha: Optional[str] = None
    links: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'repo': self.repo, 'path': self.path, 'sha': self.sha}
        if self.links:
            data['links'] = self.links
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Meta']:
        """Build a Meta from a stored property value, or None if it is unusable."""
        if not isinstance(data, dict) or not data.get('repo'):
            return None
        return cls(
            repo=str(data['repo']),
            path=data.get('path'),
            sha=data.get('sha'),
            links=data.get('links'),
        )


@dataclass
class LocalPage:
    """A page of the local documentation tree.

    Attributes:
        title: Display title (title prefix already applied), unique in the space
        meta: Provenance; ``meta.path`` is the identity key used for matching
        section: Name of the enclosing nav section, None for root-level pages
        represents: Name of the section this page stands for, if any. Set for
            inferred README pages and for explicit section pages.
        source_file: Absolute path of the markdown file (None if synthesized)
        content: Rendered storage-format markup, filled in lazily before sync
    """
    title: str
    meta: Meta
    section: Optional[str] = None
    represents: Optional[str] = None
    source_file: Optional[Path] = None
    content: Optional[str] = None

    @property
    def identity_path(self) -> Optional[str]:
        return self.meta.path


@dataclass
class MkDocsConfig:
    """The parts of ``mkdocs.yml`` the publisher needs.

    Attributes:
        nav: Raw navigation description (list of single-key dicts)
        repo_url: Repository URL, recorded as provenance on every page
        site_name: Title of the home page
        docs_dir: Directory holding the markdown sources, relative to the base path
    """
    nav: List[Any]
    repo_url: str
    site_name: str
    docs_dir: str = "docs"


@dataclass
class DocsTree:
    """Output of the tree builder: flat page list plus section shape."""
    pages: List[LocalPage] = field(default_factory=list)
    hierarchy: SectionHierarchy = field(default_factory=dict)


@dataclass
class DocsContext:
    """Everything a publish run needs to know about the local side.

    Attributes:
        site_name: Home page title
        repo: Repository URL (provenance of every page)
        pages: Every non-home page, in navigation order, README pages last
        hierarchy: Section shape of the tree
        readme: Home page built from the top-level README.md, if it exists
        page_refs: Source path -> page title, for link rewriting
    """
    site_name: str
    repo: str
    pages: List[LocalPage]
    hierarchy: SectionHierarchy
    readme: Optional[LocalPage] = None
    page_refs: Dict[str, str] = field(default_factory=dict)
