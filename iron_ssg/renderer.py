"""Render manifest entries through Jinja templates loaded once per build.

``PageRenderer`` scans the configured template root when it is constructed,
compiling every template that matches its glob patterns through a single
Jinja2 ``Environment``. Each call to :meth:`PageRenderer.render` then only
looks up the precompiled template, renders it against the entry's merged
model, and writes the HTML to the entry's output file.

Templates are addressed by their POSIX path relative to the root
(``"blog/post.html"``). When no other template shares it, the same path
without the suffix (``"blog/post"``) is accepted as well.

Examples
--------
>>> from pathlib import Path
>>> from iron_ssg.renderer import PageRenderer
>>> renderer = PageRenderer(Path("templates"))  # doctest: +SKIP
>>> renderer.templates  # doctest: +SKIP
['about', 'about.html', 'home', 'home.html']
"""

from __future__ import annotations

import collections
import logging
import typing as typ
from pathlib import Path, PurePosixPath

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from iron_ssg._constants import DEFAULT_TEMPLATE_PATTERNS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Template

    from iron_ssg.manifest import PageManifestEntry

logger = logging.getLogger(__name__)

# Errors a template can raise while rendering that belong to the page, not the run.
RENDER_ERRORS: tuple[type[Exception], ...] = (
    TemplateError,
    ArithmeticError,
    LookupError,
    RuntimeError,
    TypeError,
    ValueError,
)


class RenderError(RuntimeError):
    """Base class for failures raised by the render stage."""


class TemplateLoadError(RenderError):
    """Raised when the template root cannot be scanned or compiled."""


class TemplateNotFound(RenderError):  # noqa: N818
    """Raised when a view does not match any loaded template."""

    def __init__(self, view: str) -> None:
        self.view = view
        super().__init__(f"Template '{view}' not found")


class RenderFailure(RenderError):  # noqa: N818
    """Raised when rendering or writing a page fails."""

    def __init__(self, view: str, cause: BaseException) -> None:
        self.view = view
        self.cause = cause
        super().__init__(f"Failed to render '{view}': {cause}")


class PageRenderer:
    """Render manifest entries with templates compiled from a template root."""

    def __init__(
        self,
        template_root: Path,
        *,
        patterns: cabc.Sequence[str] = DEFAULT_TEMPLATE_PATTERNS,
    ) -> None:
        """Initialize the Jinja environment and compile every matching template.

        Parameters
        ----------
        template_root : Path
            Directory scanned recursively for templates.
        patterns : Sequence[str], optional
            Glob patterns, relative to ``template_root``, selecting template
            files. Defaults to html, jinja, j2 and tera files.

        Raises
        ------
        TemplateLoadError
            If ``template_root`` is not a directory or a template fails to
            compile.
        """
        self.template_root = template_root
        self.patterns = tuple(patterns)
        if not template_root.is_dir():
            msg = f"Template folder '{template_root}' does not exist."
            raise TemplateLoadError(msg)
        self.env = Environment(
            loader=FileSystemLoader(str(template_root)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._templates = self._load_templates()

    @property
    def templates(self) -> list[str]:
        """Return every identifier a page ``view`` may reference."""
        return sorted(self._templates)

    def render(self, entry: PageManifestEntry) -> Path:
        """Render ``entry`` and write the HTML to ``entry.output_file``.

        Parameters
        ----------
        entry : PageManifestEntry
            Resolved page whose ``model`` becomes the template context.

        Returns
        -------
        Path
            The written output file.

        Raises
        ------
        TemplateNotFound
            If ``entry.view`` is not a loaded template identifier.
        RenderFailure
            If the template raises while rendering or the output cannot be
            written. The original exception is available as ``cause``.

        Notes
        -----
        The output directory is created as needed and an existing file is
        overwritten, so rendering an unchanged entry twice gives identical
        bytes.
        """
        template = self._templates.get(entry.view)
        if template is None:
            raise TemplateNotFound(entry.view)

        try:
            html = template.render(entry.model)
        except RENDER_ERRORS as exc:
            raise RenderFailure(entry.view, exc) from exc
        if not html.endswith("\n"):
            html += "\n"

        try:
            entry.output_dir.mkdir(parents=True, exist_ok=True)
            entry.output_file.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise RenderFailure(entry.view, exc) from exc
        return entry.output_file

    def _load_templates(self) -> dict[str, Template]:
        """Compile every template matched by ``patterns`` and register aliases."""
        templates: dict[str, Template] = {}
        for pattern in self.patterns:
            for path in sorted(self.template_root.glob(pattern)):
                if not path.is_file():
                    continue
                name = path.relative_to(self.template_root).as_posix()
                if name in templates:
                    continue
                try:
                    templates[name] = self.env.get_template(name)
                except (TemplateError, UnicodeDecodeError) as exc:
                    msg = f"Failed to load template '{name}': {exc}"
                    raise TemplateLoadError(msg) from exc

        stems = collections.Counter(
            str(PurePosixPath(name).with_suffix("")) for name in templates
        )
        for name in list(templates):
            alias = str(PurePosixPath(name).with_suffix(""))
            if alias in templates or stems[alias] > 1:
                continue
            templates[alias] = templates[name]

        logger.debug(
            "Loaded %d template(s) from %s", len(templates), self.template_root
        )
        return templates


__all__ = [
    "PageRenderer",
    "RenderError",
    "RenderFailure",
    "TemplateLoadError",
    "TemplateNotFound",
]
