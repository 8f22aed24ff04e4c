"""Renders local pages into Confluence storage format.

Links between markdown files of the same project are rewritten into
Confluence page links, so they keep working once the files live in
Confluence as pages.
"""

import html
import logging
from typing import Dict, Optional

from bs4 import BeautifulSoup, CData

from ..docs_tree.errors import FilesystemError
from ..docs_tree.identity import resolve_link
from ..docs_tree.models import LocalPage
from .markdown_converter import MarkdownConverter

logger = logging.getLogger(__name__)


class PageRenderer:
    """Turns a LocalPage into storage-format markup.

    Args:
        page_refs: Source path (relative to the base path) -> page title
        converter: Markdown converter; created on first use when omitted

    Example:
        >>> renderer = PageRenderer({"docs/guides/intro.md": "Intro"})
        >>> renderer.rewrite_links('<a href="guides/intro.md">x</a>', "docs/index.md")
        '<ac:link><ri:page ri:content-title="Intro"></ri:page>...'
    """

    def __init__(self, page_refs: Dict[str, str], converter: Optional[MarkdownConverter] = None):
        self.page_refs = page_refs
        self._converter = converter

    @property
    def converter(self) -> MarkdownConverter:
        if self._converter is None:
            self._converter = MarkdownConverter()
        return self._converter

    def render(self, page: LocalPage) -> str:
        """Render a page's markdown source, or a title heading if it has none.

        Raises:
            FilesystemError: If the source file cannot be read
            ConversionError: If Pandoc fails
        """
        if page.source_file is None:
            return f"<h1>{html.escape(page.title)}</h1>"

        try:
            markdown = page.source_file.read_text(encoding='utf-8')
        except OSError as e:
            raise FilesystemError(str(page.source_file), 'read', str(e))

        xhtml = self.converter.markdown_to_xhtml(markdown)
        return self.rewrite_links(xhtml, page.identity_path or '')

    def rewrite_links(self, xhtml: str, source_path: str) -> str:
        """Replace ``<a href>`` links to known pages with ``<ac:link>`` elements.

        Links to external sites, in-page anchors and files that are not
        published pages are left untouched.
        """
        if not xhtml or '<a' not in xhtml:
            return xhtml

        soup = BeautifulSoup(xhtml, 'html.parser')
        rewritten = 0

        for anchor in soup.find_all('a', href=True):
            target, fragment = resolve_link(anchor['href'], source_path)
            title = self.page_refs.get(target) if target else None
            if title is None:
                continue

            link = soup.new_tag('ac:link')
            if fragment:
                link['ac:anchor'] = fragment
            link.append(soup.new_tag('ri:page', attrs={'ri:content-title': title}))

            text = anchor.get_text()
            if text:
                body = soup.new_tag('ac:plain-text-link-body')
                body.append(CData(text))
                link.append(body)

            anchor.replace_with(link)
            rewritten += 1

        if rewritten:
            logger.debug(f"Rewrote {rewritten} link(s) in {source_path}")
        return str(soup)
