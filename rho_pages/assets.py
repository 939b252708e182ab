"""Copy static assets into the built site unchanged."""

from __future__ import annotations

import shutil
from pathlib import Path


def copy_static_tree(source: Path, destination: Path) -> list[Path]:
    """Mirror ``source`` into ``destination`` byte for byte.

    Parameters
    ----------
    source : Path
        Static asset directory. Nothing happens when it does not exist.
    destination : Path
        Output root; existing files with the same relative path are replaced.

    Returns
    -------
    list[Path]
        Copied files, relative to ``destination``, in lexical order.
    """
    if not source.is_dir():
        return []
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return sorted(
        path.relative_to(source) for path in source.rglob("*") if path.is_file()
    )


__all__ = ["copy_static_tree"]
