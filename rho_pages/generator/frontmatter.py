r"""Split content files into a ``+++`` metadata block and a body.

The metadata block is TOML fenced by ``+++`` lines at the very start of the
file. Files without an opening fence pass through untouched, which is how
undecorated HTML fragments reach the renderer.

Example
-------
>>> from pathlib import Path
>>> from rho_pages.generator.frontmatter import parse_frontmatter
>>> meta, body = parse_frontmatter(b"+++\ntitle = 'Hi'\n+++\nwater", Path("a.md"))
>>> meta["title"], body
('Hi', b'water')
"""

from __future__ import annotations

import tomllib
import typing as typ

from rho_pages._constants import FRONTMATTER_FENCE
from rho_pages.generator.models import MetadataParseError

if typ.TYPE_CHECKING:
    from pathlib import Path

_FENCE = FRONTMATTER_FENCE.encode("ascii")


def _is_fence(line: bytes) -> bool:
    """Return True when ``line`` (terminator included) is a bare fence."""
    return line.rstrip() == _FENCE


def parse_frontmatter(raw: bytes, source: Path) -> tuple[dict[str, typ.Any], bytes]:
    """Return ``(metadata, body)`` for the raw bytes of a content file.

    Parameters
    ----------
    raw : bytes
        Complete file contents.
    source : Path
        Path of the file, used to identify it in errors.

    Returns
    -------
    tuple[dict[str, Any], bytes]
        Parsed metadata (empty without a block) and the remaining body. The
        closing fence's line terminator is consumed with the fence.

    Raises
    ------
    MetadataParseError
        If the opening fence has no matching closing fence, or the block is
        not valid UTF-8 TOML.
    """
    lines = raw.splitlines(keepends=True)
    if not lines or not _is_fence(lines[0]):
        return {}, raw

    for idx, line in enumerate(lines[1:], start=1):
        if _is_fence(line):
            block = b"".join(lines[1:idx])
            body = b"".join(lines[idx + 1 :])
            return _load_block(block, source), body

    msg = f"Metadata block in {source} has no closing '{FRONTMATTER_FENCE}' fence."
    raise MetadataParseError(msg, source=source)


def _load_block(block: bytes, source: Path) -> dict[str, typ.Any]:
    try:
        return tomllib.loads(block.decode("utf-8"))
    except UnicodeDecodeError as exc:
        msg = f"Metadata block in {source} is not valid UTF-8: {exc}"
        raise MetadataParseError(msg, source=source) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid metadata in {source}: {exc}"
        raise MetadataParseError(msg, source=source) from exc


__all__ = ["parse_frontmatter"]
