"""Tests for flat and nested (format 2.0) manifest layouts."""

from __future__ import annotations

import pytest

from pkg_segments.domain.manifest_format import is_nested_format, join_manifest, split_manifest
from pkg_segments.exceptions import MissingFieldError

ENTRIES = {"Example": [{"uuid": "7876af07-990d-54b4-ab0e-23690620f79a"}]}


def test_flat_manifest_has_no_metadata():
    entries, metadata = split_manifest(ENTRIES)
    assert entries == ENTRIES
    assert metadata == {}
    assert join_manifest(entries, metadata) == ENTRIES


def test_nested_manifest_splits_entries_from_metadata():
    document = {
        "julia_version": "1.9.3",
        "manifest_format": "2.0",
        "project_hash": "deadbeef",
        "deps": ENTRIES,
    }
    assert is_nested_format(document)
    entries, metadata = split_manifest(document)
    assert entries == ENTRIES
    assert metadata == {"julia_version": "1.9.3", "manifest_format": "2.0", "project_hash": "deadbeef"}


def test_join_drops_stale_project_hash():
    metadata = {"julia_version": "1.9.3", "manifest_format": "2.0", "project_hash": "deadbeef"}
    document = join_manifest(ENTRIES, metadata)
    assert document == {"julia_version": "1.9.3", "manifest_format": "2.0", "deps": ENTRIES}


def test_nested_manifest_with_bad_deps_table():
    with pytest.raises(MissingFieldError):
        split_manifest({"manifest_format": "2.0", "deps": ["Example"]})


def test_nested_manifest_without_packages():
    entries, metadata = split_manifest({"manifest_format": "2.0"})
    assert entries == {}
    assert metadata == {"manifest_format": "2.0"}
