"""High-level orchestration for building a site from a content tree.

This module walks the content directory, pushes every document through
frontmatter parsing, rendering, route resolution, and layout composition on a
bounded thread pool, then writes the composed pages into the output tree. It
exposes :class:`SiteBuilder`, which receives its layout provider and output
URI transform as :class:`~rho_pages.generator.models.BuildHooks` and its
logger as an explicit dependency.

Failures are split in two tiers. Problems confined to one document (bad
metadata, unusable layout) are recorded and the rest of the site still builds.
Route collisions and write failures are build-level: they are reported on the
:class:`~rho_pages.generator.models.BuildResult` and mark the build as failed,
without rolling back pages that were already written.

Example
-------
>>> from pathlib import Path
>>> from rho_pages.generator import BuildHooks, SiteBuilder
>>> hooks = BuildHooks(get_layout=lambda meta, form: b"<main>{{__body}}</main>")
>>> builder = SiteBuilder(Path("content"), Path("build"), hooks)  # doctest: +SKIP
>>> builder.run().ok  # doctest: +SKIP
True
"""

from __future__ import annotations

import collections
import logging
import os
import shutil
import tempfile
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePosixPath

from rho_pages.generator.frontmatter import parse_frontmatter
from rho_pages.generator.layout import compose_page
from rho_pages.generator.models import (
    BuildError,
    BuildHooks,
    BuildOptions,
    BuildResult,
    ContentForm,
    Document,
    DocumentError,
    LayoutCompositionError,
    RenderedPage,
    RouteCollisionError,
    WriteError,
)
from rho_pages.generator.renderer import HtmlContentRenderer
from rho_pages.generator.routes import output_location, resolve_route

DEFAULT_LOGGER = logging.getLogger("rho_pages.generator")


class SiteBuilder:
    """Render a content tree into a clean-URL output tree."""

    def __init__(
        self,
        content_dir: Path,
        output_dir: Path,
        hooks: BuildHooks,
        *,
        renderer: HtmlContentRenderer | None = None,
        workers: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        content_dir : Path
            Root of the source content tree.
        output_dir : Path
            Root of the output tree; created on demand.
        hooks : BuildHooks
            Layout provider and output URI transform.
        renderer : HtmlContentRenderer, optional
            Renderer for document bodies; defaults to a monokai-styled one.
        workers : int, optional
            Upper bound on worker threads; ``None`` uses the executor default.
        logger : logging.Logger, optional
            Destination for progress and error reports.
        """
        self.content_dir = content_dir
        self.output_dir = output_dir
        self.hooks = hooks
        self.renderer = renderer or HtmlContentRenderer()
        self.workers = workers
        self.logger = logger or DEFAULT_LOGGER

    def discover(self) -> list[Path]:
        """Return every content file under the content root in lexical order."""
        if not self.content_dir.is_dir():
            return []
        files = (
            path
            for path in self.content_dir.rglob("*")
            if path.is_file() and ContentForm.is_content_file(path)
        )
        return sorted(files, key=lambda path: self._relative(path).as_posix())

    def load_document(self, path: Path) -> Document:
        """Read ``path`` and split it into metadata and body.

        Raises
        ------
        MetadataParseError
            If the metadata block is malformed.
        BuildError
            If the file cannot be read.
        """
        form = ContentForm.from_path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            msg = f"Unable to read {path}: {exc}"
            raise BuildError(msg, source=path) from exc
        metadata, body = parse_frontmatter(raw, path)
        return Document(
            source_path=path.resolve(),
            relative_path=self._relative(path),
            raw=raw,
            content_form=form,
            metadata=metadata,
            body=body,
        )

    def locate(self, document: Document) -> str:
        """Return the transformed site-relative output location of ``document``."""
        route = resolve_route(document.relative_path, document.metadata)
        location = output_location(route)
        try:
            transformed = self.hooks.transform_output_uri(location)
        except Exception as exc:  # noqa: BLE001 - caller hook failures stay per-document
            msg = f"Output URI transform failed for '{location}': {exc}"
            raise BuildError(msg, source=document.source_path) from exc
        transformed = str(transformed)
        if "\x00" in transformed:
            msg = f"Output location {transformed!r} contains a NUL byte"
            raise BuildError(msg, source=document.source_path)
        return transformed.lstrip("/")

    def plan(self) -> tuple[dict[Path, str], list[DocumentError]]:
        """Resolve output locations for every document without rendering.

        Returns
        -------
        tuple[dict[Path, str], list[DocumentError]]
            Output location keyed by source path, plus documents whose
            metadata could not be parsed.
        """
        locations: dict[Path, str] = {}
        errors: list[DocumentError] = []
        for path in self.discover():
            try:
                document = self.load_document(path)
                locations[document.source_path] = self.locate(document)
            except BuildError as exc:
                errors.append(DocumentError(source=path, error=exc))
        return locations, errors

    def run(self, options: BuildOptions | None = None) -> BuildResult:
        """Build every document and write the output tree.

        Parameters
        ----------
        options : BuildOptions, optional
            Per-invocation switches; ``clean`` wipes the output root first.

        Returns
        -------
        BuildResult
            Written files plus every per-document and build-level error.

        Notes
        -----
        Pages are composed in parallel first. Output paths are then checked
        for collisions, and only pages with a unique output path are written.
        """
        options = options or BuildOptions()
        result = BuildResult()
        if options.clean and self.output_dir.exists():
            self.logger.info("Removing %s", self.output_dir)
            try:
                shutil.rmtree(self.output_dir)
            except OSError as exc:
                error = WriteError(f"Unable to clean {self.output_dir}: {exc}")
                self.logger.error("%s", error)
                result.build_errors.append(error)
                return result

        paths = self.discover()
        self.logger.debug("Found %d content documents in %s", len(paths), self.content_dir)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            outcomes = list(executor.map(self._build_page, paths))

            pages: dict[Path, list[RenderedPage]] = collections.defaultdict(list)
            for path, outcome in zip(paths, outcomes, strict=True):
                if isinstance(outcome, BuildError):
                    self.logger.warning("Skipping %s: %s", path, outcome)
                    result.document_errors.append(DocumentError(source=path, error=outcome))
                    continue
                try:
                    target = self._target(outcome)
                except WriteError as exc:
                    self.logger.error("%s", exc)
                    result.build_errors.append(exc)
                    continue
                pages[target].append(outcome)

            writable: list[tuple[Path, RenderedPage]] = []
            for target, claimants in pages.items():
                if len(claimants) > 1:
                    collision = RouteCollisionError(
                        claimants[0].location,
                        [page.document.source_path for page in claimants],
                    )
                    self.logger.error("%s", collision)
                    result.build_errors.append(collision)
                    continue
                writable.append((target, claimants[0]))

            halted = threading.Event()
            writes = [
                executor.submit(self._write_page, target, page, halted)
                for target, page in writable
            ]
            for (target, page), future in zip(writable, writes, strict=True):
                outcome = future.result()
                if isinstance(outcome, WriteError):
                    self.logger.error("%s", outcome)
                    result.build_errors.append(outcome)
                elif outcome:
                    result.written[target] = page.html
        return result

    def _build_page(self, path: Path) -> RenderedPage | BuildError:
        """Run one document through the pipeline, returning errors as values."""
        try:
            document = self.load_document(path)
            location = self.locate(document)
            fragment = self._render(document)
            html = self._compose(document, fragment)
        except BuildError as exc:
            if exc.source is None:
                exc.source = path
            return exc
        return RenderedPage(document=document, location=location, html=html)

    def _render(self, document: Document) -> bytes:
        try:
            return self.renderer.render(document.body, document.content_form)
        except UnicodeDecodeError as exc:
            msg = f"Body of {document.source_path} is not valid UTF-8: {exc}"
            raise BuildError(msg, source=document.source_path) from exc

    def _compose(self, document: Document, fragment: bytes) -> bytes:
        try:
            return compose_page(
                self.hooks.get_layout,
                document.metadata,
                document.content_form,
                fragment,
                source=document.source_path,
            )
        except BuildError:
            raise
        except Exception as exc:  # noqa: BLE001 - caller hook failures stay per-document
            msg = f"Layout provider failed for {document.source_path}: {exc}"
            raise LayoutCompositionError(msg, source=document.source_path) from exc

    def _target(self, page: RenderedPage) -> Path:
        """Return the absolute output file for ``page`` inside the output root."""
        try:
            root = self.output_dir.resolve()
            target = (root / page.location).resolve()
        except (OSError, ValueError) as exc:
            msg = f"Output location '{page.location}' cannot be resolved: {exc}"
            raise WriteError(msg, source=page.document.source_path) from exc
        if target == root or not target.is_relative_to(root):
            msg = f"Output location '{page.location}' escapes {self.output_dir}"
            raise WriteError(msg, source=page.document.source_path)
        return target

    def _write_page(
        self, target: Path, page: RenderedPage, halted: threading.Event
    ) -> WriteError | bool:
        """Write one page, returning False when skipped after an earlier failure."""
        if halted.is_set():
            self.logger.debug("Not writing %s after an earlier write failure", target)
            return False
        try:
            _atomic_write_bytes(target, page.html)
        except OSError as exc:
            halted.set()
            msg = f"Unable to write {target}: {exc}"
            return WriteError(msg, source=page.document.source_path)
        self.logger.debug("wrote %s", target)
        return True

    def _relative(self, path: Path) -> PurePosixPath:
        return PurePosixPath(path.relative_to(self.content_dir).as_posix())


def _atomic_write_bytes(path: Path, content: bytes) -> None:
    """Write ``content`` to ``path`` through a temporary file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        Path(temp_path).replace(path)
    except OSError:
        Path(temp_path).unlink(missing_ok=True)
        raise


__all__ = ["SiteBuilder"]
