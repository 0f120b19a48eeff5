"""Shared dataclasses and errors used by the manifest pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

if typ.TYPE_CHECKING:
    from iron_ssg.config import PageDeclaration


class PageBuildError(ValueError):
    """Raised when a single page declaration cannot become a manifest entry."""


class MissingField(PageBuildError):  # noqa: N818
    """Raised when a required page field (``title`` or ``view``) is empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing '{field}' field")


class InvalidModel(PageBuildError):  # noqa: N818
    """Raised when a page's JSON model file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid model '{path}': {reason}")


@dc.dataclass(frozen=True, slots=True)
class PageMetadata:
    """Computed per-page fields injected into every model under ``metadata``."""

    title: str
    description: str
    author: str
    year: int

    def as_dict(self) -> dict[str, typ.Any]:
        """Return the metadata as a plain mapping for the template context."""
        return dc.asdict(self)


@dc.dataclass(slots=True)
class PageManifestEntry:
    """A resolved, render-ready description of one output page.

    Attributes
    ----------
    title : str
        Page title copied from the declaration.
    view : str
        Template identifier looked up in the loaded template root.
    model_file_path : str
        Path of the external model file, or an empty string.
    output_dir : Path
        Directory that will hold the rendered page.
    output_file : Path
        ``output_dir / "<slug>.html"``.
    model : dict[str, Any]
        External model merged with the computed ``metadata`` object.
    """

    title: str
    view: str
    model_file_path: str
    output_dir: Path
    output_file: Path
    model: dict[str, typ.Any]

    def as_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable mapping used by the manifest log."""
        return {
            "title": self.title,
            "view": self.view,
            "model_file_path": self.model_file_path,
            "output_dir": self.output_dir.as_posix(),
            "output_file": self.output_file.as_posix(),
            "model": self.model,
        }


@dc.dataclass(slots=True)
class ManifestBuildResult:
    """Ordered manifest entries alongside the declarations that failed."""

    entries: list[PageManifestEntry] = dc.field(default_factory=list)
    failures: list[tuple[PageDeclaration, PageBuildError]] = dc.field(
        default_factory=list
    )


__all__ = [
    "InvalidModel",
    "ManifestBuildResult",
    "MissingField",
    "PageBuildError",
    "PageManifestEntry",
    "PageMetadata",
]
