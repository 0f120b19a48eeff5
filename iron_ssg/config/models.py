"""Typed dataclasses describing iron_ssg site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from iron_ssg._constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SLUG,
    DEFAULT_TEMPLATES_DIR,
)


class ConfigError(ValueError):
    """Raised when the site configuration is malformed or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class PageDeclaration:
    """A single page entry exactly as declared in the site configuration.

    ``title`` and ``view`` default to empty strings so that a declaration
    missing them still loads; the manifest builder reports them per page.
    ``controller`` and ``components`` are carried through but not used when
    rendering.
    """

    slug: str = DEFAULT_SLUG
    title: str = ""
    view: str = ""
    path: str | None = None
    description: str | None = None
    model: str | None = None
    controller: str | None = None
    components: tuple[str, ...] | None = None

    def as_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable mapping of the declared fields."""
        payload = dc.asdict(self)
        if self.components is not None:
            payload["components"] = list(self.components)
        return payload


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site-wide settings alongside the ordered page declarations."""

    name: str
    version: str
    authors: list[str]
    output: Path = Path(DEFAULT_OUTPUT_DIR)
    clean: bool = True
    verbose: bool = True
    logging: bool = False
    static_assets: list[Path] = dc.field(default_factory=list)
    templates: Path = Path(DEFAULT_TEMPLATES_DIR)
    pages: list[PageDeclaration] = dc.field(default_factory=list)

    @property
    def author(self) -> str:
        """Return the attribution injected into every page's metadata."""
        return ", ".join(self.authors)

    def as_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable mapping of the resolved configuration."""
        return {
            "name": self.name,
            "version": self.version,
            "authors": list(self.authors),
            "output": str(self.output),
            "clean": self.clean,
            "verbose": self.verbose,
            "logging": self.logging,
            "static_assets": [str(path) for path in self.static_assets],
            "templates": str(self.templates),
            "page": [page.as_dict() for page in self.pages],
        }


__all__ = ["ConfigError", "PageDeclaration", "SiteConfig"]
