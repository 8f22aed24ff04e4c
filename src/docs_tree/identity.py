"""Page identity helpers.

A local page has two keys: its source path (stable across runs, used to
match remote pages) and its display title (what Confluence shows, used as
the link target when rewriting cross references).
"""

import hashlib
import posixpath
import re
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import unquote, urlparse

from .models import LocalPage

# Inline links and images: [text](target "title")
_INLINE_LINK = re.compile(r'\]\(\s*<?([^)\s>]+)')
# Reference definitions: [id]: target
_REFERENCE_LINK = re.compile(r'^ {0,3}\[[^\]]+\]:\s*<?([^\s>]+)', re.MULTILINE)


def display_title(title: str, title_prefix: str = '') -> str:
    """Apply the configured title prefix to a navigation title.

    >>> display_title("Intro", "[ACME]")
    '[ACME] Intro'
    >>> display_title("Intro")
    'Intro'
    """
    return f"{title_prefix} {title}".strip()


def build_page_refs(
    pages: Iterable[LocalPage],
    readme: Optional[LocalPage] = None,
) -> Dict[str, str]:
    """Map every page's source path to its display title.

    The renderer uses this to turn links between markdown files into links
    between Confluence pages. Synthesized pages without a source path are
    left out.
    """
    refs: Dict[str, str] = {}
    if readme is not None and readme.identity_path:
        refs[readme.identity_path] = readme.title
    for page in pages:
        if page.identity_path:
            refs[page.identity_path] = page.title
    return refs


def resolve_link(href: str, source_path: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a relative ``href`` against the linking file.

    Returns the target path relative to the base path plus the fragment, or
    ``(None, None)`` for external links, absolute paths and in-page anchors.

    >>> resolve_link("../setup.md#install", "docs/guides/intro.md")
    ('docs/setup.md', 'install')
    """
    parsed = urlparse(href)
    if parsed.scheme or parsed.netloc or not parsed.path:
        return None, None
    if parsed.path.startswith('/'):
        return None, None

    joined = posixpath.join(posixpath.dirname(source_path), unquote(parsed.path))
    return posixpath.normpath(joined), parsed.fragment or None


def link_targets(markdown: str, source_path: str) -> List[str]:
    """Base-relative paths of every relative link in a markdown source."""
    targets = set()
    for pattern in (_INLINE_LINK, _REFERENCE_LINK):
        for href in pattern.findall(markdown):
            target, _ = resolve_link(href, source_path)
            if target:
                targets.add(target)
    return sorted(targets)


def link_digest(markdown: str, source_path: str, page_refs: Dict[str, str]) -> Optional[str]:
    """Digest of the page titles a markdown source links to.

    A page's rendered links change when a target gets published, renamed or
    removed even though the source file itself is unchanged; the digest
    captures that. None when the source has no relative links.
    """
    targets = link_targets(markdown, source_path)
    if not targets:
        return None
    resolved = '\n'.join(f"{target}\t{page_refs.get(target, '')}" for target in targets)
    return hashlib.sha256(resolved.encode('utf-8')).hexdigest()
