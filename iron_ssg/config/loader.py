"""Load site configuration documents into typed dataclasses."""

from __future__ import annotations

import json
import tomllib
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from iron_ssg._constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SLUG,
    DEFAULT_TEMPLATES_DIR,
)

from .helpers import (
    _as_bool,
    _as_path,
    _as_str_list,
    _first_present,
    _optional_str,
    _required_str,
)
from .models import ConfigError, PageDeclaration, SiteConfig

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_site_config(path: Path) -> SiteConfig:
    """Load the configuration describing site settings and page declarations.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file. The suffix selects the
        parser: ``.json`` for JSON, ``.yaml``/``.yml`` for YAML, and TOML for
        anything else (``iron_ssg.toml`` by convention).

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied (``output = "dist"``,
        ``clean = True``, ``verbose = True``, ``logging = False``) and the page
        declarations in the order they were written.

    Raises
    ------
    ConfigError
        If the file cannot be read, cannot be parsed, is not a mapping at the
        top level, lacks ``name``, ``version`` or ``authors``, or contains a
        field of the wrong shape. No partial configuration is returned.

    Examples
    --------
    >>> from pathlib import Path
    >>> from iron_ssg.config import load_site_config
    >>> config = load_site_config(Path("iron_ssg.toml"))  # doctest: +SKIP
    >>> [page.slug for page in config.pages]  # doctest: +SKIP
    ['index', 'about']
    """
    raw = _read_document(path)

    name = _required_str(raw, "name")
    version = _required_str(raw, "version")
    if raw.get("authors") is None:
        msg = "Missing required field 'authors' in site configuration."
        raise ConfigError(msg)
    authors = _as_str_list(raw["authors"], field="authors")

    output = _as_path(
        _first_present(raw, "output", "dist"), field="output", default=DEFAULT_OUTPUT_DIR
    )
    templates = _as_path(
        raw.get("templates"), field="templates", default=DEFAULT_TEMPLATES_DIR
    )
    static_assets = [
        Path(entry)
        for entry in _as_str_list(raw.get("static_assets"), field="static_assets")
    ]

    pages_raw = _first_present(raw, "page", "pages") or []
    if not isinstance(pages_raw, list):
        msg = "Field 'page' must be a list of page tables."
        raise ConfigError(msg)
    pages = [
        _build_page_declaration(index=index, payload=payload)
        for index, payload in enumerate(pages_raw)
    ]

    return SiteConfig(
        name=name,
        version=version,
        authors=authors,
        output=output,
        clean=_as_bool(raw.get("clean"), field="clean", default=True),
        verbose=_as_bool(raw.get("verbose"), field="verbose", default=True),
        logging=_as_bool(raw.get("logging"), field="logging", default=False),
        static_assets=static_assets,
        templates=templates,
        pages=pages,
    )


def _read_document(path: Path) -> dict[str, typ.Any]:
    """Read and parse ``path`` into a mapping, raising ``ConfigError`` on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Unable to read configuration file '{path}': {exc}"
        raise ConfigError(msg) from exc

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            loaded = json.loads(text)
        elif suffix in YAML_SUFFIXES:
            loader = YAML(typ="safe")
            loader.version = (1, 2)
            loaded = loader.load(text) or {}
        else:
            loaded = tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, YAMLError) as exc:
        msg = f"Unable to parse configuration file '{path}': {exc}"
        raise ConfigError(msg) from exc

    if not isinstance(loaded, dict):
        msg = f"Top-level structure of '{path}' must be a mapping."
        raise ConfigError(msg)
    return dict(loaded)


def _build_page_declaration(*, index: int, payload: object) -> PageDeclaration:
    """Build a PageDeclaration for one entry of the ``page`` list."""
    if not isinstance(payload, dict):
        msg = f"Page entry #{index} must be a table, got {type(payload).__name__}."
        raise ConfigError(msg)

    components = payload.get("components")
    return PageDeclaration(
        slug=_optional_str(payload.get("slug"), field="slug") or DEFAULT_SLUG,
        title=_optional_str(payload.get("title"), field="title") or "",
        view=_optional_str(payload.get("view"), field="view") or "",
        path=_optional_str(payload.get("path"), field="path"),
        description=_optional_str(payload.get("description"), field="description"),
        model=_optional_str(payload.get("model"), field="model"),
        controller=_optional_str(payload.get("controller"), field="controller"),
        components=(
            tuple(_as_str_list(components, field="components"))
            if components is not None
            else None
        ),
    )


__all__ = ["load_site_config"]
