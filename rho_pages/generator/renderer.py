"""Render document bodies into HTML fragments."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from rho_pages.generator.models import ContentForm, UnsupportedContentForm

FENCED_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>[`~]{3,})[ ]*(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n.*?^(?P=fence)[ ]*$",
    re.DOTALL | re.MULTILINE,
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class HtmlContentRenderer:
    """Render markdown and pass HTML through with consistent styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with the Pygments style used for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, body: bytes, form: ContentForm) -> bytes:
        """Return the HTML fragment for ``body`` according to its content form.

        Parameters
        ----------
        body : bytes
            Document body with any metadata block already removed.
        form : ContentForm
            Markup kind of the document.

        Returns
        -------
        bytes
            UTF-8 HTML fragment. HTML bodies are returned unchanged.

        Raises
        ------
        UnsupportedContentForm
            If ``form`` has no rendering case.
        """
        match form:
            case ContentForm.MARKDOWN:
                return self.markdown(body.decode("utf-8")).encode("utf-8")
            case ContentForm.HTML:
                return body
            case _:  # pragma: no cover - closed enum guard
                msg = f"No renderer for content form {form!r}"
                raise UnsupportedContentForm(msg)

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        # Markdown instances keep per-conversion state, so each call gets its own.
        md = Markdown(
            extensions=[
                "fenced_code",
                "codehilite",
                "tables",
                "sane_lists",
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group("lang") or "text"
            for match in FENCED_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["FENCED_BLOCK_PATTERN", "HtmlContentRenderer"]
