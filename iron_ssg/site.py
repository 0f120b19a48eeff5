"""Site build orchestration.

``SiteBuilder`` drives one complete build from an already-loaded
:class:`~iron_ssg.config.SiteConfig`:

1. compile the template root (fatal on failure, done in ``__init__``);
2. optionally dump the resolved configuration to the diagnostics folder;
3. optionally remove the previous output directory;
4. build a manifest entry per page declaration, skipping failures;
5. optionally dump the manifest;
6. copy static assets (a missing folder is skipped, an I/O error is fatal);
7. render every manifest entry, skipping pages that fail.

Page-scoped failures are logged and collected on the returned
:class:`BuildReport`; only :class:`~iron_ssg.assets.AssetCopyError` escapes
from :meth:`SiteBuilder.run`.

Example
-------
>>> from pathlib import Path
>>> from iron_ssg.config import load_site_config
>>> from iron_ssg.site import SiteBuilder
>>> config = load_site_config(Path("iron_ssg.toml"))  # doctest: +SKIP
>>> report = SiteBuilder(config).run()  # doctest: +SKIP
>>> [path.as_posix() for path in report.written]  # doctest: +SKIP
['dist/index.html', 'dist/about/about.html']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import shutil
from pathlib import Path

from iron_ssg._constants import DEFAULT_LOGS_DIR
from iron_ssg.assets import copy_static_assets
from iron_ssg.config import PageDeclaration, SiteConfig
from iron_ssg.diagnostics import write_config_log, write_manifest_log
from iron_ssg.manifest import PageBuildError, PageManifestEntry, build_site_manifest
from iron_ssg.renderer import PageRenderer, RenderError

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class BuildReport:
    """Outcome of a completed build."""

    manifest: list[PageManifestEntry] = dc.field(default_factory=list)
    manifest_failures: list[tuple[PageDeclaration, PageBuildError]] = dc.field(
        default_factory=list
    )
    written: list[Path] = dc.field(default_factory=list)
    render_failures: list[tuple[PageManifestEntry, RenderError]] = dc.field(
        default_factory=list
    )
    assets_copied: list[Path] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when every declared page was rendered."""
        return not self.manifest_failures and not self.render_failures


class SiteBuilder:
    """Build every declared page of a site into its output directory."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        config_path: Path | None = None,
        year: int | None = None,
        diagnostics_dir: Path = DEFAULT_LOGS_DIR,
        renderer: PageRenderer | None = None,
    ) -> None:
        """Initialize the builder and compile the template root.

        Parameters
        ----------
        config : SiteConfig
            Loaded site configuration; never mutated.
        config_path : Path, optional
            File the configuration was read from; names the configuration
            dump written when ``config.logging`` is set.
        year : int, optional
            Pins ``metadata.year`` for reproducible output; defaults to the
            current year.
        diagnostics_dir : Path, optional
            Folder receiving the configuration and manifest dumps.
        renderer : PageRenderer, optional
            Pre-built renderer; defaults to one loading ``config.templates``.

        Raises
        ------
        TemplateLoadError
            If the template root is missing or a template fails to compile.
        """
        self.config = config
        self.config_path = config_path
        self.year = year
        self.diagnostics_dir = diagnostics_dir
        self.renderer = renderer or PageRenderer(config.templates)

    def run(self) -> BuildReport:
        """Run the build and return what was produced.

        Returns
        -------
        BuildReport
            Manifest entries, written pages, copied assets, and the page-scoped
            failures that were logged along the way.

        Raises
        ------
        AssetCopyError
            If an existing static-assets folder cannot be copied; no page is
            rendered in that case.
        """
        report = BuildReport()
        if self.config.logging and self.config_path is not None:
            self._log_config(self.config_path)
        if self.config.clean:
            self._clean_output()

        result = build_site_manifest(
            self.config.pages,
            self.config.output,
            author=self.config.author,
            year=self.year,
        )
        report.manifest = result.entries
        report.manifest_failures = result.failures

        if self.config.logging:
            self._log_manifest(report.manifest)

        report.assets_copied = copy_static_assets(
            self.config.static_assets, self.config.output
        )

        for entry in report.manifest:
            self._render_entry(entry, report)
        return report

    def _render_entry(self, entry: PageManifestEntry, report: BuildReport) -> None:
        """Render one entry, recording rather than raising page-scoped failures."""
        level = logging.INFO if self.config.verbose else logging.DEBUG
        logger.log(level, "Generating: %s", entry.view)
        try:
            path = self.renderer.render(entry)
        except RenderError as exc:
            logger.error(
                "Failed to generate page %r (view %r): %s", entry.title, entry.view, exc
            )
            report.render_failures.append((entry, exc))
            return
        logger.log(level, "Generated: %s", path)
        report.written.append(path)

    def _clean_output(self) -> None:
        """Remove the previous output directory, warning when that fails."""
        output = self.config.output
        if not output.exists():
            return
        try:
            shutil.rmtree(output)
        except OSError as exc:
            logger.warning("Couldn't remove the '%s' directory. %s", output, exc)

    def _log_config(self, config_path: Path) -> None:
        try:
            path = write_config_log(self.config, config_path, self.diagnostics_dir)
        except OSError as exc:
            logger.error("Failed to write configuration log: %s", exc)
            return
        logger.debug("Configuration logged to %s", path)

    def _log_manifest(self, entries: list[PageManifestEntry]) -> None:
        try:
            path = write_manifest_log(entries, self.diagnostics_dir)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write manifest log: %s", exc)
            return
        logger.debug("Manifest logged to %s", path)


__all__ = ["BuildReport", "SiteBuilder"]
