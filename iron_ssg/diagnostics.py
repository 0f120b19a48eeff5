"""Write machine-readable build diagnostics when ``logging`` is enabled."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

from iron_ssg._constants import (
    CONFIG_LOG_TEMPLATE,
    DEFAULT_LOGS_DIR,
    MANIFEST_LOG_NAME,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from iron_ssg.config import SiteConfig
    from iron_ssg.manifest import PageManifestEntry


def write_config_log(
    config: SiteConfig, config_path: Path, logs_dir: Path = DEFAULT_LOGS_DIR
) -> Path:
    """Dump the resolved configuration as pretty-printed JSON.

    The file is named after the configuration file, so ``iron_ssg.toml``
    produces ``<logs_dir>/iron_ssg.toml.json``. ``OSError`` propagates.
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    path = logs_dir / CONFIG_LOG_TEMPLATE.format(name=config_path.name)
    path.write_text(json.dumps(config.as_dict(), indent=2) + "\n", encoding="utf-8")
    return path


def write_manifest_log(
    entries: cabc.Iterable[PageManifestEntry], logs_dir: Path = DEFAULT_LOGS_DIR
) -> Path:
    """Serialise the built manifest, in order, to ``<logs_dir>/manifest.json``."""
    logs_dir.mkdir(parents=True, exist_ok=True)
    path = logs_dir / MANIFEST_LOG_NAME
    payload = [entry.as_dict() for entry in entries]
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path


__all__ = ["write_config_log", "write_manifest_log"]
