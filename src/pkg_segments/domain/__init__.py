"""Domain objects for package segments.

This package holds the backend-free data structures the closure engine and the
segment builder operate on: package identities, the manifest index, manifest
layouts and segment requests.
"""

from .manifest_index import ManifestIndex, keyed_to_manifest, manifest_to_keyed
from .package_key import PackageKey
from .segment_request import SegmentRequest

__all__ = ["PackageKey", "ManifestIndex", "SegmentRequest", "manifest_to_keyed", "keyed_to_manifest"]
