"""Typed dataclasses describing rho site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Directories and build settings for one site.

    Attributes
    ----------
    root : Path
        Directory the relative paths below were resolved against.
    content_dir : Path
        Source content tree.
    layout_dir : Path
        Jinja layouts used by the default layout provider.
    partials_dir : Path
        Templates layouts may include.
    static_dir : Path
        Assets copied verbatim into the output root.
    output_dir : Path
        Destination of the built site.
    default_layout : str
        Layout name used when a document's metadata names none.
    pygments_style : str
        Pygments style for highlighted code blocks.
    workers : int or None
        Thread pool bound; ``None`` lets the executor decide.
    hooks_file : Path or None
        Optional Python file defining ``get_layout`` and/or
        ``transform_output_uri``.
    """

    root: Path
    content_dir: Path
    layout_dir: Path
    partials_dir: Path
    static_dir: Path
    output_dir: Path
    default_layout: str = "default"
    pygments_style: str = "monokai"
    workers: int | None = None
    hooks_file: Path | None = None

    @classmethod
    def defaults(cls, root: Path) -> SiteConfig:
        """Return the conventional layout rooted at ``root``."""
        return cls(
            root=root,
            content_dir=root / "content",
            layout_dir=root / "layouts",
            partials_dir=root / "partials",
            static_dir=root / "static",
            output_dir=root / "build",
        )


__all__ = ["SiteConfig", "SiteConfigError"]
