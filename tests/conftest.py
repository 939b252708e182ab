"""Shared fixtures for rho site build tests."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from rho_pages.generator import BuildHooks, BuildOptions, BuildResult, SiteBuilder

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

LAYOUT = b"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
  </head>
  <body>
  {{__body}}
  </body>
</html>
"""


def write_files(root: Path, files: cabc.Mapping[str, str | bytes]) -> None:
    """Create each file under ``root``, dedenting text payloads."""
    for name, payload in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, bytes):
            path.write_bytes(payload)
        else:
            path.write_text(dedent(payload).lstrip("\n"), encoding="utf-8")


def static_layout(frontmatter: cabc.Mapping[str, typ.Any], content_form: object) -> bytes:  # noqa: ARG001
    """Return the fixed layout used by most tests."""
    return LAYOUT


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "build"


@pytest.fixture
def hooks() -> BuildHooks:
    return BuildHooks(get_layout=static_layout)


@pytest.fixture
def write_content(content_dir: Path) -> cabc.Callable[[cabc.Mapping[str, str | bytes]], None]:
    """Return a callable that writes files under the content directory."""

    def _write(files: cabc.Mapping[str, str | bytes]) -> None:
        write_files(content_dir, files)

    return _write


@pytest.fixture
def build_site(
    content_dir: Path, output_dir: Path, hooks: BuildHooks
) -> cabc.Callable[..., BuildResult]:
    """Return a callable that writes content files and runs a build."""

    def _build(
        files: cabc.Mapping[str, str | bytes] | None = None,
        *,
        clean: bool = False,
        build_hooks: BuildHooks | None = None,
    ) -> BuildResult:
        if files:
            write_files(content_dir, files)
        builder = SiteBuilder(content_dir, output_dir, build_hooks or hooks, workers=4)
        return builder.run(BuildOptions(clean=clean))

    return _build
