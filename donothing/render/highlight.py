"""Terminal highlighting for rendered Markdown."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import MarkdownLexer


def highlight_markdown(text: str) -> str:
    """Return ``text`` with ANSI color codes for display in a terminal."""
    return highlight(text, MarkdownLexer(), TerminalFormatter())
