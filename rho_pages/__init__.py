"""Static site builder for Markdown and HTML content trees.

This package exposes the CLI entry points used by the ``rho`` console script
to render a content directory into a clean-URL site, one ``index.html`` per
document.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from rho_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
