"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _optional_path, _optional_str, _optional_workers, _resolve_path
from .models import SiteConfig, SiteConfigError

_KNOWN_KEYS = frozenset(
    {
        "content_dir",
        "layout_dir",
        "partials_dir",
        "static_dir",
        "output_dir",
        "default_layout",
        "pygments_style",
        "workers",
        "hooks_file",
    }
)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing a site's directories and settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``rho.yaml``). Relative directories inside it resolve against the
        file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for omitted keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the document is not a mapping, names unknown keys, or holds invalid
        values.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from rho_pages.config import load_site_config
    >>> config = load_site_config(Path("rho.yaml"))  # doctest: +SKIP
    >>> config.output_dir.name  # doctest: +SKIP
    'build'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys in '{path}': {', '.join(unknown)}"
        raise SiteConfigError(msg)

    root = path.resolve().parent
    defaults = SiteConfig.defaults(root)
    return SiteConfig(
        root=root,
        content_dir=_resolve_path(root, raw.get("content_dir"), defaults.content_dir),
        layout_dir=_resolve_path(root, raw.get("layout_dir"), defaults.layout_dir),
        partials_dir=_resolve_path(root, raw.get("partials_dir"), defaults.partials_dir),
        static_dir=_resolve_path(root, raw.get("static_dir"), defaults.static_dir),
        output_dir=_resolve_path(root, raw.get("output_dir"), defaults.output_dir),
        default_layout=_optional_str(raw.get("default_layout")) or defaults.default_layout,
        pygments_style=_optional_str(raw.get("pygments_style")) or defaults.pygments_style,
        workers=_optional_workers(raw.get("workers")),
        hooks_file=_optional_path(root, raw.get("hooks_file")),
    )


__all__ = ["load_site_config"]
