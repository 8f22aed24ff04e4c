"""Content conversion from markdown to Confluence storage format.

MarkdownConverter wraps Pandoc; PageRenderer adds link rewriting between
published pages on top of it.
"""

from .markdown_converter import MarkdownConverter
from .page_renderer import PageRenderer

__all__ = ['MarkdownConverter', 'PageRenderer']
