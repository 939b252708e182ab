"""Shared dataclasses and error types used by the site build pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from pathlib import Path, PurePosixPath

from rho_pages._constants import INDEX_STEM

LayoutProvider = typ.Callable[[typ.Mapping[str, typ.Any], "ContentForm"], bytes]
UriTransform = typ.Callable[[str], str]


class BuildError(RuntimeError):
    """Base class for failures raised while building the site."""

    def __init__(self, message: str, *, source: Path | None = None) -> None:
        super().__init__(message)
        self.source = source


class MetadataParseError(BuildError):
    """Raised when a document's ``+++`` metadata block cannot be parsed."""


class UnsupportedContentForm(BuildError):  # noqa: N818 - name mirrors the error kind
    """Raised when a file extension maps to no known content form."""


class LayoutCompositionError(BuildError):
    """Raised when a layout template cannot receive the rendered body."""


class RouteCollisionError(BuildError):
    """Raised when several documents resolve to the same output file."""

    def __init__(self, location: str, sources: typ.Sequence[Path]) -> None:
        names = ", ".join(str(source) for source in sources)
        super().__init__(f"Output '{location}' is claimed by multiple documents: {names}")
        self.location = location
        self.sources = tuple(sources)


class WriteError(BuildError):
    """Raised when an output file cannot be written."""


class ContentForm(enum.Enum):
    """Markup kind of a source document, derived from its extension."""

    MARKDOWN = "markdown"
    HTML = "html"

    @classmethod
    def from_path(cls, path: Path | PurePosixPath) -> ContentForm:
        """Return the content form for ``path`` or raise ``UnsupportedContentForm``."""
        form = _SUFFIX_FORMS.get(path.suffix.lower())
        if form is None:
            msg = f"Unsupported content extension '{path.suffix}' for {path}"
            raise UnsupportedContentForm(msg, source=Path(path))
        return form

    @staticmethod
    def is_content_file(path: Path) -> bool:
        """Return True when ``path`` carries a supported content extension."""
        return path.suffix.lower() in _SUFFIX_FORMS


_SUFFIX_FORMS: dict[str, ContentForm] = {
    ".md": ContentForm.MARKDOWN,
    ".markdown": ContentForm.MARKDOWN,
    ".html": ContentForm.HTML,
    ".htm": ContentForm.HTML,
}


class DocumentKind(enum.Enum):
    """Whether a document addresses its folder (``index``) or itself."""

    INDEX = "index"
    NAMED = "named"

    @classmethod
    def from_path(cls, path: PurePosixPath) -> DocumentKind:
        return cls.INDEX if path.stem == INDEX_STEM else cls.NAMED


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A parsed source file.

    Attributes
    ----------
    source_path : Path
        Absolute path of the source file; the document's identity.
    relative_path : PurePosixPath
        Path of the source file relative to the content root.
    raw : bytes
        Unmodified file contents.
    content_form : ContentForm
        Markup kind derived from the extension.
    metadata : Mapping[str, Any]
        Parsed metadata block, empty when the file has none.
    body : bytes
        Everything after the metadata block, or the whole file.
    """

    source_path: Path
    relative_path: PurePosixPath
    raw: bytes
    content_form: ContentForm
    metadata: typ.Mapping[str, typ.Any]
    body: bytes


@dc.dataclass(frozen=True, slots=True)
class RenderedPage:
    """A composed page waiting to be written to ``location``."""

    document: Document
    location: str
    html: bytes


def identity_uri(location: str) -> str:
    """Return ``location`` unchanged."""
    return location


@dc.dataclass(frozen=True, slots=True)
class BuildHooks:
    """Caller-supplied capabilities consumed by the build pipeline.

    Attributes
    ----------
    get_layout : LayoutProvider
        Returns the layout template bytes for a document's metadata and
        content form. The template must contain the body placeholder once.
    transform_output_uri : UriTransform
        Rewrites a site-relative output location (``post/a/index.html``)
        before it is written. Defaults to the identity.
    """

    get_layout: LayoutProvider
    transform_output_uri: UriTransform = identity_uri


@dc.dataclass(frozen=True, slots=True)
class BuildOptions:
    """Per-invocation switches for :class:`SiteBuilder`."""

    clean: bool = False


@dc.dataclass(slots=True)
class DocumentError:
    """A per-document failure that did not stop the build."""

    source: Path
    error: BuildError

    def __str__(self) -> str:
        return f"{self.source}: {self.error}"


@dc.dataclass(slots=True)
class BuildResult:
    """Outcome of a build.

    Attributes
    ----------
    written : dict[Path, bytes]
        Output files written during this build and their contents.
    document_errors : list[DocumentError]
        Isolated failures; the affected documents produced no output.
    build_errors : list[BuildError]
        Route collisions and write failures. Any entry makes the build fail.
    """

    written: dict[Path, bytes] = dc.field(default_factory=dict)
    document_errors: list[DocumentError] = dc.field(default_factory=list)
    build_errors: list[BuildError] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.build_errors

    def summary(self) -> list[str]:
        """Return one human-readable line per recorded error."""
        lines = [f"error: {entry}" for entry in self.document_errors]
        lines.extend(f"fatal: {error}" for error in self.build_errors)
        return lines


__all__ = [
    "BuildError",
    "BuildHooks",
    "BuildOptions",
    "BuildResult",
    "ContentForm",
    "Document",
    "DocumentError",
    "DocumentKind",
    "LayoutCompositionError",
    "LayoutProvider",
    "MetadataParseError",
    "RenderedPage",
    "RouteCollisionError",
    "UnsupportedContentForm",
    "UriTransform",
    "WriteError",
    "identity_uri",
]
