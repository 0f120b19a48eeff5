"""Common literal values used across iron_ssg.

These constants keep filenames, environment variable names, and template
patterns centralized so the CLI, the site driver, and tests import the same
values without drifting. Intended for internal use within the iron_ssg
package.

Examples
--------
>>> from iron_ssg import _constants
>>> _constants.CONFIG_LOG_TEMPLATE.format(name="iron_ssg.toml")
'iron_ssg.toml.json'
>>> _constants.DEFAULT_CONFIG_FILE
'iron_ssg.toml'
"""

from pathlib import Path

DEFAULT_CONFIG_FILE = "iron_ssg.toml"
CONFIG_ENV_VAR = "CONFIG"
DEFAULT_OUTPUT_DIR = "dist"
DEFAULT_TEMPLATES_DIR = "templates"
DEFAULT_SLUG = "index"
DEFAULT_LOGS_DIR = Path("_logs")
CONFIG_LOG_TEMPLATE = "{name}.json"
MANIFEST_LOG_NAME = "manifest.json"
DEFAULT_TEMPLATE_PATTERNS = ("**/*.html", "**/*.jinja", "**/*.j2", "**/*.tera")
