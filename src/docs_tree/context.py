"""Assembles the local side of a publish run."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Union

from .config_loader import MKDOCS_YML, MkDocsConfigLoader
from .errors import FilesystemError
from .identity import build_page_refs, link_digest
from .models import DocsContext, LocalPage
from .tree_builder import README_MD, TreeBuilder

logger = logging.getLogger(__name__)


def build_context(
    base_path: Union[str, Path] = '.',
    title_prefix: str = '',
    mkdocs_file: str = MKDOCS_YML,
) -> DocsContext:
    """Load mkdocs.yml under ``base_path`` and build the page tree.

    The top-level README.md, when present, becomes the home page. Its title
    is the site name and is never prefixed.

    Raises:
        FilesystemError: If mkdocs.yml cannot be read
        ConfigError: If mkdocs.yml is invalid
    """
    base = Path(base_path)
    config = MkDocsConfigLoader.load(base, mkdocs_file)

    builder = TreeBuilder(base, config.repo_url, config.docs_dir, title_prefix)
    tree = builder.build(config.nav)

    readme_path = base / README_MD
    readme = None
    if readme_path.is_file():
        readme = builder.load_page(config.site_name, readme_path, apply_prefix=False)
    else:
        logger.info(f"No {README_MD} in {base}, home page will only carry the site name")

    page_refs = build_page_refs(tree.pages, readme)
    for page in tree.pages + ([readme] if readme else []):
        _attach_link_digest(page, page_refs)

    context = DocsContext(
        site_name=config.site_name,
        repo=config.repo_url,
        pages=tree.pages,
        hierarchy=tree.hierarchy,
        readme=readme,
        page_refs=page_refs,
    )
    logger.debug(
        f"Context for {context.repo}: site '{context.site_name}', "
        f"{len(context.pages)} pages, sections {list(context.hierarchy)}"
    )
    return context


def _attach_link_digest(page: LocalPage, page_refs: Dict[str, str]) -> None:
    """Record which titles the page links to, so link changes count as changes."""
    if page.source_file is None:
        return
    try:
        markdown = page.source_file.read_text(encoding='utf-8')
    except OSError as e:
        raise FilesystemError(str(page.source_file), 'read', str(e))
    page.meta = replace(page.meta, links=link_digest(markdown, page.identity_path or '', page_refs))
