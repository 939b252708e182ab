"""Resolve clean-URL output routes for content documents.

A folder holding an ``index`` document is a bundle addressed by the folder's
name. Any other document gets a route named after its stem, unless the stem
already names its folder (``post/test/test.md`` is addressed as
``post/test``). A ``slug`` in the metadata replaces the route's final
segment verbatim.

Examples
--------
>>> from pathlib import PurePosixPath
>>> resolve_route(PurePosixPath("post/test/index.md"), {})
PurePosixPath('post/test')
>>> resolve_route(PurePosixPath("post/test/test.md"), {"slug": "my-slug"})
PurePosixPath('post/my-slug')
>>> output_location(PurePosixPath("post/hello"))
'post/hello/index.html'
"""

from __future__ import annotations

import typing as typ
from pathlib import PurePosixPath

from rho_pages._constants import OUTPUT_FILENAME
from rho_pages.generator.models import DocumentKind


def resolve_route(
    relative_path: PurePosixPath, metadata: typ.Mapping[str, typ.Any]
) -> PurePosixPath:
    """Return the output directory for a document relative to the output root.

    Parameters
    ----------
    relative_path : PurePosixPath
        Source path relative to the content root, extension included.
    metadata : Mapping[str, Any]
        Parsed metadata; only ``slug`` is consulted.

    Returns
    -------
    PurePosixPath
        Output directory; ``PurePosixPath('.')`` for the site root.
    """
    folder = relative_path.parent
    kind = DocumentKind.from_path(relative_path)
    if kind is DocumentKind.INDEX or relative_path.stem == folder.name:
        route = folder
    else:
        route = folder / relative_path.stem

    slug = metadata.get("slug")
    if slug:
        return route.parent / str(slug)
    return route


def output_location(route: PurePosixPath) -> str:
    """Join ``route`` with the clean-URL output filename as a POSIX string."""
    return (route / OUTPUT_FILENAME).as_posix()


__all__ = ["output_location", "resolve_route"]
