"""Load and validate site configuration for rho builds.

This subpackage parses the site's ``rho.yaml`` file, resolves content, layout,
partials, static, and output directories relative to it, and produces a typed
:class:`SiteConfig`. :func:`load_build_hooks` then turns the configuration
into the layout provider and output URI transform the build pipeline
consumes, importing the optional hooks file when one is configured.

Examples
--------
>>> from pathlib import Path
>>> from rho_pages.config import load_build_hooks, load_site_config
>>> site = load_site_config(Path("rho.yaml"))  # doctest: +SKIP
>>> hooks = load_build_hooks(site)  # doctest: +SKIP
>>> hooks.transform_output_uri("post/a/index.html")  # doctest: +SKIP
'post/a/index.html'
"""

from .hooks import load_build_hooks
from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = [
    "SiteConfig",
    "SiteConfigError",
    "load_build_hooks",
    "load_site_config",
]
