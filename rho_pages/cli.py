"""Cyclopts CLI entrypoint for building rho sites.

The ``rho`` console script defined here renders a content tree of Markdown and
HTML documents into a clean-URL static site. Typical usage involves running
``rho build`` locally or in CI, adding ``--clean`` to drop stale output, and
``rho routes`` to check where each document will land before writing anything.

Examples
--------
Build the site described by ``rho.yaml`` in the current directory:

>>> from rho_pages.cli import main
>>> main()  # doctest: +SKIP

Rebuild from scratch into a custom directory:

>>> from rho_pages.cli import app
>>> app.run(["build", "--clean", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from rich.console import Console
from rich.logging import RichHandler

from ._constants import DEFAULT_CONFIG_FILENAME
from .assets import copy_static_tree
from .config import SiteConfig, load_build_hooks, load_site_config
from .generator import BuildOptions, HtmlContentRenderer, SiteBuilder

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILENAME)

app = App(name="rho", config=cyclopts.config.Env("RHO_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger("rho_pages")


def _configure_logging(*, verbose: bool) -> None:
    """Attach a Rich handler to the package logger once."""
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                log_time_format="[%Y-%m-%d %H:%M:%S]",
            )
        )
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _load_config(config: Path) -> SiteConfig:
    """Load ``config``, tolerating an absent default file."""
    if config == DEFAULT_CONFIG and not config.exists():
        logger.debug("No %s found; using default directories", config)
        return SiteConfig.defaults(Path.cwd())
    return load_site_config(config)


def _make_builder(site: SiteConfig, output_dir: Path | None = None) -> SiteBuilder:
    renderer = HtmlContentRenderer(site.pygments_style)
    hooks = load_build_hooks(site, stylesheet=renderer.stylesheet)
    return SiteBuilder(
        site.content_dir,
        output_dir or site.output_dir,
        hooks,
        renderer=renderer,
        workers=site.workers,
        logger=logger.getChild("generator"),
    )


@app.command(help="Render the content tree into the output directory.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="RHO_CONFIG")
    ] = DEFAULT_CONFIG,
    clean: typ.Annotated[
        bool, Parameter(help="Remove the output directory before building")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log every written file")] = False,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="RHO_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``rho.yaml`` configuration file (overridable via
        ``RHO_CONFIG``). When the default file is absent, the conventional
        ``content``/``layouts``/``build`` directories under the current
        directory are used.
    clean : bool, optional
        Remove the output directory before building.
    verbose : bool, optional
        Enable debug logging.
    output_dir : Path or None, optional
        Override the configured output directory.

    Raises
    ------
    SystemExit
        With status 1 when a route collision or write failure occurred.
    """
    _configure_logging(verbose=verbose)
    site = _load_config(config)
    builder = _make_builder(site, output_dir)
    result = builder.run(BuildOptions(clean=clean))

    for path in sorted(result.written):
        logger.info("wrote %s", _format_path(path))
    copied = copy_static_tree(site.static_dir, builder.output_dir)
    if copied:
        logger.info("copied %d static files from %s", len(copied), _format_path(site.static_dir))

    for line in result.summary():
        print(line)
    print(
        f"built {len(result.written)} pages, {len(result.document_errors)} skipped, "
        f"{len(result.build_errors)} fatal"
    )
    if not result.ok:
        raise SystemExit(1)


@app.command(help="List the output location of every content document.")
def routes(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="RHO_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print ``source -> location`` for each document without writing output.

    Parameters
    ----------
    config : Path, optional
        Path to the ``rho.yaml`` configuration file.
    """
    _configure_logging(verbose=False)
    site = _load_config(config)
    builder = _make_builder(site)
    locations, errors = builder.plan()
    for source, location in locations.items():
        print(f"{_format_path(source)} -> {location}")
    for entry in errors:
        print(f"error: {entry}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `rho` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
