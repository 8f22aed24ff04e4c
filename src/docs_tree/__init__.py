"""Local documentation tree: mkdocs config, pages, sections and identities."""

from .config_loader import MkDocsConfigLoader
from .context import build_context
from .errors import ConfigError, DocsTreeError, FilesystemError
from .identity import build_page_refs, display_title, link_digest, resolve_link
from .models import DocsContext, DocsTree, LocalPage, Meta, MkDocsConfig
from .tree_builder import TreeBuilder, file_hash

__all__ = [
    'MkDocsConfigLoader',
    'build_context',
    'ConfigError',
    'DocsTreeError',
    'FilesystemError',
    'build_page_refs',
    'display_title',
    'link_digest',
    'resolve_link',
    'DocsContext',
    'DocsTree',
    'LocalPage',
    'Meta',
    'MkDocsConfig',
    'TreeBuilder',
    'file_hash',
]
