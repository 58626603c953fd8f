"""Render markdown document bodies into HTML with highlighted code blocks."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

FENCE_OPEN_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
INDENTED_FENCE_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_ATTRIBUTES_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
HIGHLIGHT_DIV = '<div class="codehilite">'
BODY_EXTENSIONS: tuple[str, ...] = ("fenced_code", "codehilite", "tables", "sane_lists")


def _clean_fences(text: str) -> str:
    """Outdent fences nested in list items and drop ``lang,attr`` suffixes."""
    outdented = INDENTED_FENCE_PATTERN.sub(r"\1", text)
    return FENCE_ATTRIBUTES_PATTERN.sub(
        lambda match: f"{match.group(1)}{match.group(2) or ''}", outdented
    )


def _fence_languages(text: str) -> list[str]:
    return [match.group(1) or "text" for match in FENCE_OPEN_PATTERN.finditer(text)]


class HtmlContentRenderer:
    """Markdown body renderer for source documents.

    Register :meth:`markdown` for the ``md`` extension in
    :class:`~pagebuild.parser.ParseOptions`. Highlighted blocks are tagged
    with a ``data-language`` attribute so templates and stylesheets can
    target them.
    """

    def __init__(self, pygments_style: str = "monokai") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the Pygments CSS for ``.codehilite`` blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Convert a document body to HTML; blank bodies give ``""``."""
        source = _clean_fences(text)
        if not source.strip():
            return ""
        converter = Markdown(
            extensions=list(BODY_EXTENSIONS),
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return self._tag_languages(converter.convert(source), _fence_languages(source))

    @staticmethod
    def _tag_languages(html: str, languages: list[str]) -> str:
        if not languages:
            return html
        remaining = iter(languages)
        parts = html.split(HIGHLIGHT_DIV)
        tagged = [parts[0]]
        for part in parts[1:]:
            lang = escape(next(remaining, "text"), quote=True)
            tagged.append(f'<div class="codehilite" data-language="{lang}">{part}')
        return "".join(tagged)


__all__ = ["BODY_EXTENSIONS", "HtmlContentRenderer"]
