"""Turn page declarations into render-ready manifest entries.

:func:`build_manifest` validates one :class:`~iron_ssg.config.PageDeclaration`,
resolves where its HTML will be written, loads its optional JSON model, and
injects the computed ``metadata`` object. It has no side effects beyond reading
the model file, so the site driver can call it once per declaration and
collect the results with :func:`build_site_manifest`.

Example
-------
>>> from pathlib import Path
>>> from iron_ssg.config import PageDeclaration
>>> from iron_ssg.manifest import build_manifest
>>> page = PageDeclaration(title="About", view="about.html", path="/about/")
>>> entry = build_manifest(page, Path("dist"), author="Ada", year=2024)
>>> entry.output_file.as_posix()
'dist/about/index.html'
>>> entry.model["metadata"]["year"]
2024
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import typing as typ
from pathlib import Path

from .models import (
    InvalidModel,
    ManifestBuildResult,
    MissingField,
    PageBuildError,
    PageManifestEntry,
    PageMetadata,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from iron_ssg.config import PageDeclaration

logger = logging.getLogger(__name__)

MODEL_SUFFIX = ".json"


def build_manifest(
    page: PageDeclaration,
    site_output_dir: Path,
    *,
    author: str,
    year: int | None = None,
) -> PageManifestEntry:
    """Resolve a single page declaration into a manifest entry.

    Parameters
    ----------
    page : PageDeclaration
        Declaration read from the site configuration.
    site_output_dir : Path
        Root output directory of the site (``output`` in the configuration).
    author : str
        Site-level attribution copied into ``metadata.author``.
    year : int, optional
        Value for ``metadata.year``; defaults to the current calendar year.
        Pass it explicitly when output must be reproducible.

    Returns
    -------
    PageManifestEntry
        The resolved entry. No directories are created at this stage.

    Raises
    ------
    MissingField
        If ``title`` or ``view`` is empty.
    InvalidModel
        If a ``.json`` model file cannot be read or parsed.
    """
    if not page.title:
        raise MissingField("title")
    if not page.view:
        raise MissingField("view")

    output_dir = resolve_output_dir(site_output_dir, page.path)
    model = _load_model(page.model)
    metadata = PageMetadata(
        title=page.title,
        description=page.description or "",
        author=author,
        year=year if year is not None else dt.datetime.now(dt.UTC).year,
    )

    return PageManifestEntry(
        title=page.title,
        view=page.view,
        model_file_path=page.model or "",
        output_dir=output_dir,
        output_file=output_dir / f"{page.slug}.html",
        model=merge_metadata(model, metadata),
    )


def build_site_manifest(
    pages: cabc.Iterable[PageDeclaration],
    site_output_dir: Path,
    *,
    author: str,
    year: int | None = None,
) -> ManifestBuildResult:
    """Build manifest entries for every declaration, continuing past failures.

    Entries keep declaration order. A declaration that raises
    :class:`PageBuildError` is logged with its title and view and recorded in
    ``failures``; it never prevents the remaining pages from building.
    """
    result = ManifestBuildResult()
    for page in pages:
        try:
            entry = build_manifest(page, site_output_dir, author=author, year=year)
        except PageBuildError as exc:
            logger.error(
                "Failed to create page manifest for %s (view %s): %s",
                _describe(page.title),
                _describe(page.view),
                exc,
            )
            result.failures.append((page, exc))
            continue
        result.entries.append(entry)
    return result


def resolve_output_dir(site_output_dir: Path, path: str | None) -> Path:
    """Return the directory a page is written to.

    ``None``, ``""`` and ``"/"`` map to the site root; any other value is
    joined below it with surrounding slashes removed.
    """
    if not path or path == "/":
        return site_output_dir
    trimmed = path.rstrip("/").lstrip("/")
    if not trimmed:
        return site_output_dir
    return site_output_dir / trimmed


def merge_metadata(
    model: typ.Mapping[str, typ.Any], metadata: PageMetadata
) -> dict[str, typ.Any]:
    """Return a copy of ``model`` whose ``metadata`` key is ``metadata``.

    An existing ``metadata`` key is replaced wholesale rather than merged.
    The input mapping is left untouched.
    """
    merged = dict(model)
    merged["metadata"] = metadata.as_dict()
    return merged


def _load_model(model_path: str | None) -> dict[str, typ.Any]:
    """Load the page's JSON model, or return an empty model for other inputs."""
    if not model_path or not model_path.endswith(MODEL_SUFFIX):
        return {}
    try:
        text = Path(model_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidModel(model_path, str(exc)) from exc
    try:
        loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidModel(model_path, str(exc)) from exc
    if not isinstance(loaded, dict):
        logger.warning(
            "Model '%s' is a JSON %s, not an object; using an empty model.",
            model_path,
            type(loaded).__name__,
        )
        return {}
    return loaded


def _describe(value: str) -> str:
    return repr(value) if value else "<missing>"


__all__ = [
    "build_manifest",
    "build_site_manifest",
    "merge_metadata",
    "resolve_output_dir",
]
