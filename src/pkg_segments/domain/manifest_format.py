"""Manifest document layouts.

Older manifests keep the package tables at the top level. Format 2.0 manifests
nest them under ``deps`` next to a few metadata keys::

    julia_version = "1.9.3"
    manifest_format = "2.0"
    project_hash = "..."

    [[deps.Example]]
    uuid = "..."
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from ..exceptions import MissingFieldError

FORMAT_FIELD = "manifest_format"
ENTRIES_FIELD = "deps"
# Hash of the project the manifest was resolved for; stale once the project is pruned.
STALE_METADATA = frozenset({"project_hash"})


def is_nested_format(document: Mapping[str, Any]) -> bool:
    return FORMAT_FIELD in document


def split_manifest(document: Mapping[str, Any]) -> Tuple[Dict[str, List[Dict[str, Any]]], Dict[str, Any]]:
    """Split a manifest document into ``(entries, metadata)``.

    Flat manifests have no metadata.
    """
    if not is_nested_format(document):
        return dict(document), {}
    entries = document.get(ENTRIES_FIELD, {})
    if not isinstance(entries, Mapping):
        raise MissingFieldError(
            f"Manifest '{ENTRIES_FIELD}' must be a table of package entries",
            context={"field": ENTRIES_FIELD, "type": type(entries).__name__},
        )
    metadata = {key: value for key, value in document.items() if key != ENTRIES_FIELD}
    return dict(entries), metadata


def join_manifest(entries: Mapping[str, List[Dict[str, Any]]], metadata: Mapping[str, Any]) -> Dict[str, Any]:
    """Rebuild a manifest document in the layout described by ``metadata``."""
    if not metadata:
        return dict(entries)
    document = {key: value for key, value in metadata.items() if key not in STALE_METADATA}
    document[ENTRIES_FIELD] = dict(entries)
    return document
