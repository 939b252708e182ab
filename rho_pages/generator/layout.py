"""Merge rendered fragments into page layouts.

:func:`compose_page` is the only place a rendered body meets its layout: it
asks the layout provider for template bytes and swaps the ``{{__body}}``
placeholder for the fragment without escaping it.

:class:`JinjaLayoutProvider` is the layout provider used when the site does
not supply its own ``get_layout`` hook. It renders ``<layout>.jinja`` from the
layout directory with the document metadata, leaving the placeholder in place
for the compositor.
"""

from __future__ import annotations

import typing as typ
import uuid
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from rho_pages._constants import BODY_PLACEHOLDER
from rho_pages.generator.models import (
    ContentForm,
    LayoutCompositionError,
    LayoutProvider,
)

_PLACEHOLDER = BODY_PLACEHOLDER.encode("utf-8")
# Same text as the placeholder once displayed, but never matched by compose_page.
_INERT_PLACEHOLDER = BODY_PLACEHOLDER.replace("{", "&#123;").replace("}", "&#125;")


def compose_page(
    provider: LayoutProvider,
    metadata: typ.Mapping[str, typ.Any],
    form: ContentForm,
    fragment: bytes,
    *,
    source: Path | None = None,
) -> bytes:
    """Return the layout for ``metadata`` with ``fragment`` substituted.

    Raises
    ------
    LayoutCompositionError
        If the template does not contain the placeholder exactly once.
    """
    template = provider(metadata, form)
    occurrences = template.count(_PLACEHOLDER)
    if occurrences != 1:
        problem = "is missing" if occurrences == 0 else f"appears {occurrences} times"
        msg = f"Layout placeholder '{BODY_PLACEHOLDER}' {problem} in the layout template."
        raise LayoutCompositionError(msg, source=source)
    return template.replace(_PLACEHOLDER, fragment, 1)


class JinjaLayoutProvider:
    """Select and render layouts from a directory of Jinja templates."""

    def __init__(
        self,
        layout_dir: Path,
        *,
        partials_dir: Path | None = None,
        default_layout: str = "default",
        stylesheet: str = "",
    ) -> None:
        """Configure the Jinja environment.

        Parameters
        ----------
        layout_dir : Path
            Directory holding ``<name>.jinja`` layouts.
        partials_dir : Path, optional
            Extra search path so layouts can ``{% include %}`` partials.
        default_layout : str, optional
            Layout used when the metadata names none.
        stylesheet : str, optional
            Pygments CSS exposed to templates as ``pygments_css``.
        """
        search_path = [str(layout_dir)]
        if partials_dir is not None:
            search_path.append(str(partials_dir))
        self.default_layout = default_layout
        self.stylesheet = stylesheet
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def __call__(
        self, frontmatter: typ.Mapping[str, typ.Any], content_form: ContentForm
    ) -> bytes:
        name = str(frontmatter.get("layout") or self.default_layout)
        template_name = name if name.endswith(".jinja") else f"{name}.jinja"
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as exc:
            msg = f"Layout template '{template_name}' not found."
            raise LayoutCompositionError(msg) from exc
        marker = f"rho-body-{uuid.uuid4().hex}"
        context = {
            "page": frontmatter,
            "content_form": content_form.value,
            "pygments_css": self.stylesheet,
            "__body": marker,
        }
        html = (
            template.render(**context)
            .replace(BODY_PLACEHOLDER, _INERT_PLACEHOLDER)
            .replace(marker, BODY_PLACEHOLDER)
        )
        if not html.endswith("\n"):
            html += "\n"
        return html.encode("utf-8")


__all__ = ["JinjaLayoutProvider", "compose_page"]
