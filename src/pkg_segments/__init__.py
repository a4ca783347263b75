"""pkg-segments - trimmed package environments from a resolved manifest.

Given a fully resolved ``Manifest.toml`` and its ``Project.toml``, this package
computes the transitive closure of a requested subset of packages and writes a
consistent, smaller project/manifest pair containing only that closure. No
version resolution happens; the manifest is only pruned.
"""

from __future__ import annotations

from .closure import closure
from .domain import ManifestIndex, PackageKey, SegmentRequest, keyed_to_manifest, manifest_to_keyed
from .exceptions import (
    AmbiguousKeyError,
    FormatError,
    MissingEntryError,
    MissingFieldError,
    PkgSegmentsError,
    ResolutionError,
    SegmentConfigError,
    StorageError,
)
from .orchestrator import (
    SegmentResult,
    generate_from_segment_file,
    generate_segment,
    manifest_segment,
    project_segment,
)
from .segment_builder import Segment, build_segment, prune_manifest, prune_project

__version__ = "0.1.0"

parse_key = PackageKey.parse

__all__ = [
    "PackageKey",
    "ManifestIndex",
    "SegmentRequest",
    "Segment",
    "SegmentResult",
    "closure",
    "build_segment",
    "prune_manifest",
    "prune_project",
    "manifest_to_keyed",
    "keyed_to_manifest",
    "parse_key",
    "generate_segment",
    "generate_from_segment_file",
    "project_segment",
    "manifest_segment",
    "PkgSegmentsError",
    "FormatError",
    "MissingFieldError",
    "ResolutionError",
    "AmbiguousKeyError",
    "MissingEntryError",
    "SegmentConfigError",
    "StorageError",
]
