"""Declarative static-site builder driven by an ``iron_ssg.toml`` file.

The package turns page declarations into render-ready manifest entries,
renders them through Jinja templates, and copies static assets into the
output directory.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that loads ``.env`` and invokes the app.

Examples
--------
>>> from iron_ssg import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

import logging

from .cli import app, main

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["app", "main"]
