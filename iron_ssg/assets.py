"""Mirror configured static-asset directories into the site output."""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


class AssetCopyError(OSError):
    """Raised when an existing asset directory cannot be copied."""


def copy_tree(source_dir: Path, dest_dir: Path) -> list[Path]:
    """Recursively copy every file below ``source_dir`` into ``dest_dir``.

    Subdirectories are recreated under ``dest_dir`` and existing files are
    overwritten. Returns the sorted destination paths of the copied files.
    ``OSError`` (including ``shutil.Error``) propagates to the caller.
    """
    copied: list[Path] = []

    def _copy(src: str, dst: str) -> str:
        result = shutil.copy2(src, dst)
        copied.append(Path(dst))
        return result

    shutil.copytree(source_dir, dest_dir, copy_function=_copy, dirs_exist_ok=True)
    return sorted(copied)


def copy_static_assets(sources: cabc.Sequence[Path], dest_dir: Path) -> list[Path]:
    """Copy each configured asset directory into ``dest_dir``.

    Parameters
    ----------
    sources : Sequence[Path]
        Asset directories from the ``static_assets`` setting, in order.
    dest_dir : Path
        Site output directory; created if it does not exist.

    Returns
    -------
    list[Path]
        Destination paths of every copied file.

    Raises
    ------
    AssetCopyError
        If an existing source cannot be copied (permissions, disk full, ...).
        A source that does not exist is skipped with a warning instead.
    """
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Unable to create output directory '{dest_dir}': {exc}"
        raise AssetCopyError(msg) from exc

    if not sources:
        logger.info("No 'static_assets' folders specified in config.")
        return []

    copied: list[Path] = []
    for source in sources:
        if not source.is_dir():
            logger.warning(
                "static_assets folder '%s' does not exist, skipping.", source
            )
            continue
        try:
            copied.extend(copy_tree(source, dest_dir))
        except OSError as exc:
            msg = f"Failed to copy static_assets folder '{source}': {exc}"
            raise AssetCopyError(msg) from exc
        logger.info("All static_assets in '%s' copied to '%s'", source, dest_dir)
    return copied


__all__ = ["AssetCopyError", "copy_static_assets", "copy_tree"]
