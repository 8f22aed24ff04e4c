"""Markdown to Confluence storage format conversion using Pandoc.

Pandoc does the heavy lifting. Two fixes are applied around it: table rows
broken across lines are joined back before conversion, and line breaks inside
table cells are turned into paragraphs afterwards, which is how Confluence
stores multi-line cells.
"""

import re
import subprocess
from typing import List

from ..confluence_client.errors import ConversionError

PANDOC_TIMEOUT_SECONDS = 10

_SEPARATOR_CELLS = re.compile(r'^[\s\-:]+$')
_CELL = re.compile(r'<(td|th)([^>]*)>(.*?)</\1>', re.DOTALL)
_BR = re.compile(r'<br\s*/?>')


def count_unescaped_pipes(line: str) -> int:
    """Count ``|`` characters that are not escaped with a backslash."""
    count = 0
    escaped = False
    for char in line:
        if escaped:
            escaped = False
        elif char == '\\':
            escaped = True
        elif char == '|':
            count += 1
    return count


def is_separator_row(line: str) -> bool:
    """True for a pipe table header separator such as ``|---|:--:|``."""
    stripped = line.strip()
    if not (stripped.startswith('|') and stripped.endswith('|')):
        return False
    cells = stripped.replace('|', '')
    return '-' in cells and bool(_SEPARATOR_CELLS.match(cells))


class MarkdownConverter:
    """Converts markdown to XHTML suitable for the Confluence storage format.

    Example:
        >>> converter = MarkdownConverter()
        >>> converter.markdown_to_xhtml("# Title")
        '<h1 id="title">Title</h1>\\n'
    """

    def __init__(self):
        """Verify Pandoc is available.

        Raises:
            ConversionError: If Pandoc is not found on system PATH
        """
        if not self._pandoc_installed():
            raise ConversionError(
                "Pandoc not found. Install: brew install pandoc (macOS) or "
                "apt-get install pandoc (Linux) or download from "
                "https://pandoc.org/installing.html"
            )

    def markdown_to_xhtml(self, markdown: str) -> str:
        """Convert markdown to XHTML using Pandoc.

        Raises:
            ConversionError: If conversion fails or times out
        """
        if not markdown:
            return ""

        markdown = self.join_broken_table_rows(markdown)

        try:
            result = subprocess.run(
                ["pandoc", "-f", "markdown", "-t", "html", "--wrap=none"],
                input=markdown,
                text=True,
                capture_output=True,
                check=True,
                timeout=PANDOC_TIMEOUT_SECONDS
            )
        except subprocess.CalledProcessError as e:
            raise ConversionError(f"Pandoc conversion failed: {e.stderr}")
        except subprocess.TimeoutExpired:
            raise ConversionError(f"Pandoc conversion timed out (>{PANDOC_TIMEOUT_SECONDS}s)")

        return self.cell_breaks_to_paragraphs(result.stdout)

    @staticmethod
    def cell_breaks_to_paragraphs(xhtml: str) -> str:
        """Replace ``<br>`` inside table cells with one ``<p>`` per line."""
        def _rewrite(match: 're.Match[str]') -> str:
            tag, attrs, content = match.groups()
            if not _BR.search(content):
                return match.group(0)

            parts = [part.strip() for part in _BR.split(content) if part.strip()]
            if len(parts) <= 1:
                return f'<{tag}{attrs}>{"".join(parts)}</{tag}>'
            paragraphs = ''.join(f'<p>{part}</p>' for part in parts)
            return f'<{tag}{attrs}>{paragraphs}</{tag}>'

        return _CELL.sub(_rewrite, xhtml)

    @staticmethod
    def join_broken_table_rows(markdown: str) -> str:
        """Join pipe table rows that were split across several lines.

        A body row with fewer pipes than the separator row is continued on
        the next line(s); the pieces are joined with ``<br>`` so Pandoc keeps
        them in one cell.

        Example:
            | Header | Notes |
            |---|---|
            | Cell | Line1
            Line2 |

        becomes ``| Cell | Line1<br>Line2 |``.
        """
        output: List[str] = []
        pending: List[str] = []
        expected = None

        def flush() -> None:
            if pending:
                output.append('<br>'.join(pending))
                pending.clear()

        for line in markdown.split('\n'):
            stripped = line.strip()

            if is_separator_row(stripped):
                flush()
                expected = count_unescaped_pipes(stripped)
                output.append(line)
                continue

            if expected is None or not stripped:
                flush()
                if not stripped:
                    expected = None
                output.append(line)
                continue

            if pending:
                candidate = '<br>'.join(pending + [stripped])
                pipes = count_unescaped_pipes(candidate)
                if pipes == expected:
                    output.append(candidate)
                    pending.clear()
                elif pipes < expected:
                    pending.append(stripped)
                else:
                    # The row never closed; leave the table and keep the line as is
                    flush()
                    expected = None
                    output.append(line)
                continue

            pipes = count_unescaped_pipes(stripped)
            if pipes < expected:
                pending.append(stripped)
            else:
                if pipes > expected:
                    expected = None
                output.append(line)

        flush()
        return '\n'.join(output)

    def _pandoc_installed(self) -> bool:
        try:
            result = subprocess.run(
                ["which", "pandoc"],
                capture_output=True,
                timeout=5
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False
