"""Assemble build hooks from a site's optional Python hooks file.

A hooks file is plain Python loaded by path. It may define either or both of::

    def get_layout(frontmatter, content_form) -> bytes: ...
    def transform_output_uri(location: str) -> str: ...

Whatever it leaves out falls back to the Jinja layout provider and the
identity transform.
"""

from __future__ import annotations

import importlib.util
import typing as typ

from rho_pages.generator.layout import JinjaLayoutProvider
from rho_pages.generator.models import BuildHooks, identity_uri

from .models import SiteConfigError

if typ.TYPE_CHECKING:
    import types
    from pathlib import Path

    from .models import SiteConfig


def _load_module(path: Path) -> types.ModuleType:
    """Execute the hooks file at ``path`` as an anonymous module."""
    if not path.is_file():
        msg = f"Hooks file '{path}' not found."
        raise SiteConfigError(msg)
    spec = importlib.util.spec_from_file_location(f"_rho_hooks_{path.stem}", path)
    if spec is None or spec.loader is None:
        msg = f"Hooks file '{path}' cannot be imported."
        raise SiteConfigError(msg)
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:  # noqa: BLE001 - surface any import-time failure as config error
        msg = f"Hooks file '{path}' failed to load: {exc}"
        raise SiteConfigError(msg) from exc
    return module


def _callable_attr(module: types.ModuleType, name: str) -> typ.Callable[..., typ.Any] | None:
    value = getattr(module, name, None)
    if value is None:
        return None
    if not callable(value):
        msg = f"Hook '{name}' in {module.__file__} must be callable."
        raise SiteConfigError(msg)
    return value


def load_build_hooks(config: SiteConfig, *, stylesheet: str = "") -> BuildHooks:
    """Return the layout provider and URI transform for ``config``.

    Parameters
    ----------
    config : SiteConfig
        Site configuration naming the layout directories and hooks file.
    stylesheet : str, optional
        Pygments CSS handed to the default Jinja layouts.

    Raises
    ------
    SiteConfigError
        If the hooks file is missing, fails to import, or defines a
        non-callable hook.
    """
    get_layout = None
    transform = None
    if config.hooks_file is not None:
        module = _load_module(config.hooks_file)
        get_layout = _callable_attr(module, "get_layout")
        transform = _callable_attr(module, "transform_output_uri")
    if get_layout is None:
        get_layout = JinjaLayoutProvider(
            config.layout_dir,
            partials_dir=config.partials_dir,
            default_layout=config.default_layout,
            stylesheet=stylesheet,
        )
    return BuildHooks(get_layout=get_layout, transform_output_uri=transform or identity_uri)


__all__ = ["load_build_hooks"]
