"""Cyclopts CLI entrypoint for building an iron_ssg site.

The ``iron-ssg`` console script loads a local ``.env`` file, reads the site
configuration named by ``--config`` (or the ``CONFIG`` environment variable,
defaulting to ``iron_ssg.toml``), and runs a full build. Pages that fail to
build or render are reported on stderr without changing the exit status; a
configuration, template-root, or asset-copy failure exits with status 1.

Examples
--------
Build the site described by ``iron_ssg.toml`` in the current directory:

>>> from iron_ssg.cli import main
>>> main()  # doctest: +SKIP

Build another configuration with a pinned copyright year:

>>> from iron_ssg.cli import app
>>> app(["build", "--config", "site.json", "--year", "2024"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter
from dotenv import find_dotenv, load_dotenv

from ._constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE
from .assets import AssetCopyError
from .config import ConfigError, load_site_config
from .renderer import TemplateLoadError
from .site import SiteBuilder

app = App(name="iron-ssg", help="Build a static site from declared pages.")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the path as given."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render every declared page and copy static assets.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var=CONFIG_ENV_VAR)
    ] = Path(DEFAULT_CONFIG_FILE),
    output: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    year: typ.Annotated[
        int | None, Parameter(help="Pin the year injected into page metadata")
    ] = None,
    quiet: typ.Annotated[
        bool, Parameter(help="Only report warnings and errors")
    ] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Site configuration file (TOML, JSON or YAML); overridable via the
        ``CONFIG`` environment variable.
    output : Path or None, optional
        Output directory replacing the configured ``output`` value.
    year : int or None, optional
        Year written to ``metadata.year``; defaults to the current year.
    quiet : bool, optional
        Lower logging to warnings and errors.

    Raises
    ------
    SystemExit
        With status 1 when the configuration cannot be loaded, the template
        root cannot be compiled, or static assets cannot be copied.
    """
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    logging.getLogger(__name__).info(
        "Initializing: IronSSG with config: %s", _format_path(config)
    )

    try:
        site_config = load_site_config(config)
        if output is not None:
            site_config = dc.replace(site_config, output=output)
        report = SiteBuilder(site_config, config_path=config, year=year).run()
    except (ConfigError, TemplateLoadError, AssetCopyError) as exc:
        print(f"Failed to build site: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for path in report.written:
        print(f"wrote {_format_path(path)}")
    failed = len(report.manifest_failures) + len(report.render_failures)
    if failed:
        print(f"{failed} page(s) could not be generated", file=sys.stderr)


app.default(build)


def main() -> None:
    """Load ``.env`` from the working directory and invoke the Cyclopts app.

    Variables already present in the environment win over the ``.env`` file.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
