"""Build the page manifest that drives rendering."""

from .builder import (
    build_manifest,
    build_site_manifest,
    merge_metadata,
    resolve_output_dir,
)
from .models import (
    InvalidModel,
    ManifestBuildResult,
    MissingField,
    PageBuildError,
    PageManifestEntry,
    PageMetadata,
)

__all__ = [
    "InvalidModel",
    "ManifestBuildResult",
    "MissingField",
    "PageBuildError",
    "PageManifestEntry",
    "PageMetadata",
    "build_manifest",
    "build_site_manifest",
    "merge_metadata",
    "resolve_output_dir",
]
