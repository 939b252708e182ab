"""Unit tests for turning document bodies into HTML fragments."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from rho_pages.generator import ContentForm, HtmlContentRenderer, UnsupportedContentForm


@pytest.fixture
def renderer() -> HtmlContentRenderer:
    return HtmlContentRenderer()


def test_markdown_paragraph(renderer: HtmlContentRenderer) -> None:
    assert renderer.render(b"water", ContentForm.MARKDOWN) == b"<p>water</p>"


def test_markdown_block_and_inline_constructs(renderer: HtmlContentRenderer) -> None:
    body = (
        "# Heading\n\n"
        "Some *emphasis* and a [link](https://example.invalid/).\n\n"
        "- one\n"
        "- two\n"
    ).encode()
    soup = BeautifulSoup(renderer.render(body, ContentForm.MARKDOWN), "html.parser")
    assert soup.select_one("h1").get_text() == "Heading"
    assert soup.select_one("em").get_text() == "emphasis"
    assert soup.select_one("a")["href"] == "https://example.invalid/"
    assert [li.get_text() for li in soup.select("ul li")] == ["one", "two"]


def test_fenced_code_highlighted_with_language(renderer: HtmlContentRenderer) -> None:
    body = b"```python\nprint('hi')\n```\n"
    soup = BeautifulSoup(renderer.render(body, ContentForm.MARKDOWN), "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None
    assert block.get("data-language") == "python"
    assert "print" in block.get_text()


def test_fence_labels_with_extras_are_stripped(renderer: HtmlContentRenderer) -> None:
    body = b"```rust,no_run\nfn main() {}\n```\n"
    soup = BeautifulSoup(renderer.render(body, ContentForm.MARKDOWN), "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None
    assert block.get("data-language") == "rust"


def test_blank_markdown_renders_empty(renderer: HtmlContentRenderer) -> None:
    assert renderer.render(b"  \n\n", ContentForm.MARKDOWN) == b""


def test_html_passes_through_unchanged(renderer: HtmlContentRenderer) -> None:
    body = b"<p>Bravo</p>\n<!-- kept *as is* -->"
    assert renderer.render(body, ContentForm.HTML) is body


def test_stylesheet_targets_codehilite(renderer: HtmlContentRenderer) -> None:
    assert ".codehilite" in renderer.stylesheet


@pytest.mark.parametrize(
    ("name", "form"),
    [
        ("a.md", ContentForm.MARKDOWN),
        ("a.markdown", ContentForm.MARKDOWN),
        ("a.MD", ContentForm.MARKDOWN),
        ("a.html", ContentForm.HTML),
        ("a.htm", ContentForm.HTML),
    ],
)
def test_content_form_from_extension(name: str, form: ContentForm) -> None:
    assert ContentForm.from_path(Path(name)) is form


def test_unknown_extension_rejected() -> None:
    with pytest.raises(UnsupportedContentForm):
        ContentForm.from_path(Path("notes.txt"))


def test_tilde_and_backtick_fences_keep_their_languages(
    renderer: HtmlContentRenderer,
) -> None:
    body = (
        b"~~~python\nprint('hi')\n~~~\n\n"
        b"```rust\nfn main() {}\n```\n"
    )
    soup = BeautifulSoup(renderer.render(body, ContentForm.MARKDOWN), "html.parser")
    blocks = soup.select("div.codehilite")
    assert [block.get("data-language") for block in blocks] == ["python", "rust"]
