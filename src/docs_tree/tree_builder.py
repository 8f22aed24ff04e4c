"""Builds the local page tree from an mkdocs navigation description.

The navigation is walked depth first. Leaves become pages, nested lists
become sections. Sections do not have a file of their own in mkdocs, so
after the walk each section gets a representative page: either a leaf in
the parent scope titled like the section, or the README.md found in the
directory shared by the section's pages.
"""

import hashlib
import logging
from pathlib import Path, PurePosixPath
from typing import Any, List, Optional, Sequence, Tuple, Union

from .errors import ConfigError
from .identity import display_title
from .models import DocsTree, LocalPage, Meta

logger = logging.getLogger(__name__)

README_MD = 'README.md'
EXTERNAL_LINK_PREFIXES = ('http://', 'https://', 'mailto:')


def file_hash(file_path: Path) -> str:
    """Return the SHA-256 hex digest of a file's content."""
    digest = hashlib.sha256()
    with open(file_path, 'rb') as f:
        for chunk in iter(lambda: f.read(65536), b''):
            digest.update(chunk)
    return digest.hexdigest()


class TreeBuilder:
    """Turns an mkdocs ``nav`` list into LocalPages plus a section hierarchy.

    Example:
        >>> builder = TreeBuilder(".", "https://github.com/acme/docs")
        >>> tree = builder.build([{"Guides": [{"Intro": "guides/intro.md"}]}])
        >>> tree.hierarchy
        {'Guides': None}
    """

    def __init__(
        self,
        base_path: Union[str, Path],
        repo_url: str,
        docs_dir: str = 'docs',
        title_prefix: str = '',
    ):
        self.base_path = Path(base_path).resolve()
        self.docs_path = (self.base_path / docs_dir).resolve()
        self.repo_url = repo_url
        self.title_prefix = title_prefix

    def build(self, nav: Sequence[Any]) -> DocsTree:
        """Walk ``nav`` and attach a representative page to each section.

        Raises:
            ConfigError: If an entry has no title or an unsupported value
        """
        tree = DocsTree()
        self._traverse(nav, None, tree)
        self._assign_section_pages(tree)
        logger.debug(
            f"Built tree with {len(tree.pages)} pages and {len(tree.hierarchy)} sections"
        )
        return tree

    def load_page(
        self,
        title: str,
        file_path: Path,
        apply_prefix: bool = True,
    ) -> Optional[LocalPage]:
        """Create a LocalPage for ``file_path``, or None if the file is unusable.

        Files outside the base path are treated as missing and never read.
        """
        resolved = file_path.resolve()
        if not resolved.is_relative_to(self.base_path) or not resolved.is_file():
            shown = self._relative(resolved) or str(file_path)
            logger.warning(f'Page "{title}" not found at "{shown}"')
            return None

        page_title = display_title(title, self.title_prefix) if apply_prefix else title
        return LocalPage(
            title=page_title,
            meta=Meta(self.repo_url, self._relative(resolved), file_hash(resolved)),
            source_file=resolved,
        )

    def _relative(self, resolved: Path) -> Optional[str]:
        if not resolved.is_relative_to(self.base_path):
            return None
        return resolved.relative_to(self.base_path).as_posix()

    def _traverse(self, nav: Sequence[Any], parent_section: Optional[str], tree: DocsTree) -> None:
        for entry in nav:
            title, value = self._split_entry(entry)

            if isinstance(value, list):
                if title not in tree.hierarchy:
                    tree.hierarchy[title] = parent_section
                self._traverse(value, title, tree)
                continue

            if value.startswith(EXTERNAL_LINK_PREFIXES):
                logger.info(f'Skipping external link "{title}" ({value})')
                continue

            page = self.load_page(title, self.docs_path / value)
            if page is None:
                continue

            # A source file is published once; its path is the page identity
            duplicate = self._page_with_path(tree, page.identity_path)
            if duplicate is not None:
                logger.warning(
                    f'Skipping page "{title}": {page.identity_path} is already '
                    f'published as "{duplicate.title}"'
                )
                continue

            page.section = parent_section
            tree.pages.append(page)

    @staticmethod
    def _page_with_path(tree: DocsTree, path: Optional[str]) -> Optional[LocalPage]:
        return next((page for page in tree.pages if page.identity_path == path), None)

    @staticmethod
    def _split_entry(entry: Any) -> Tuple[str, Union[str, list]]:
        if not isinstance(entry, dict) or not entry:
            raise ConfigError(f"missing title for entry {entry!r}", 'nav')

        title, value = next(iter(entry.items()))
        if title is None or not str(title).strip():
            raise ConfigError(f"missing title for entry {entry!r}", 'nav')
        if not isinstance(value, (str, list)):
            raise ConfigError(
                f"entry '{title}' must map to a file path or a list of entries",
                'nav'
            )
        return str(title), value

    def _assign_section_pages(self, tree: DocsTree) -> None:
        inferred: List[LocalPage] = []

        for section, parent in tree.hierarchy.items():
            section_title = display_title(section, self.title_prefix)

            explicit = next(
                (
                    page for page in tree.pages
                    if page.section == parent
                    and page.represents is None
                    and page.title == section_title
                ),
                None,
            )
            if explicit is not None:
                explicit.represents = section
                logger.debug(f'Section "{section}" is represented by {explicit.identity_path}')
                continue

            children = [
                page for page in tree.pages
                if page.section == section and page.represents is None
            ]
            if not children:
                continue

            section_dir = self.infer_section_directory(children)
            if section_dir is None:
                logger.debug(f'Section "{section}" has no common directory, no section page')
                continue

            readme = self.load_page(section, self.docs_path / section_dir / README_MD)
            if readme is None:
                continue
            if self._page_with_path(tree, readme.identity_path) is not None:
                logger.debug(f'{readme.identity_path} is already a nav page, no page for section "{section}"')
                continue

            readme.section = parent
            readme.represents = section
            inferred.append(readme)
            logger.debug(f'Created section page "{section}" from {section_dir}/{README_MD}')

        tree.pages.extend(inferred)

    def infer_section_directory(self, children: Sequence[LocalPage]) -> Optional[str]:
        """Longest directory (relative to the docs dir) shared by all children.

        Returns None when the children share no directory below the docs dir.
        """
        directories = []
        for child in children:
            if child.source_file is None or not child.source_file.is_relative_to(self.docs_path):
                continue
            relative = PurePosixPath(child.source_file.relative_to(self.docs_path).as_posix())
            directories.append(relative.parent.parts)

        if not directories:
            return None

        first = directories[0]
        for length in range(len(first), 0, -1):
            prefix = first[:length]
            if all(parts[:length] == prefix for parts in directories):
                return PurePosixPath(*prefix).as_posix()
        return None
