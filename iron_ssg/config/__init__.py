"""Load and validate the iron_ssg site configuration.

This subpackage parses the project's ``iron_ssg.toml`` (or a JSON/YAML
equivalent), applies the documented defaults, and produces the immutable
:class:`SiteConfig` and :class:`PageDeclaration` dataclasses that the manifest
builder and site driver consume. The primary entry point is
:func:`load_site_config`, which raises :class:`ConfigError` whenever the
document is unusable.

Examples
--------
>>> from pathlib import Path
>>> from iron_ssg.config import load_site_config
>>> site = load_site_config(Path("iron_ssg.toml"))  # doctest: +SKIP
>>> site.pages[0].view  # doctest: +SKIP
'home.html'
"""

from .loader import load_site_config
from .models import ConfigError, PageDeclaration, SiteConfig

__all__ = [
    "ConfigError",
    "PageDeclaration",
    "SiteConfig",
    "load_site_config",
]
