"""Tests for generating segment files from a project directory."""

from __future__ import annotations

import logging

import pytest

from pkg_segments.domain.package_key import PackageKey
from pkg_segments.exceptions import MissingEntryError, SegmentConfigError, StorageError
from pkg_segments.orchestrator import (
    generate_from_segment_file,
    generate_segment,
    load_segment_requests,
    manifest_segment,
    project_segment,
    write_segment,
)
from pkg_segments.segment_builder import Segment
from pkg_segments.storage.toml_storage import read_toml

from helpers import HTTP_UUID, SOCKETS_UUID, URIS_UUID, sample_manifest

SEGMENTS = {
    "web": {"deps": ["HTTP"], "subdir": "seg/web"},
    "data": {"deps": ["JSON3"], "subdir": "seg/data"},
}


class TestGenerateSegment:
    """Single segment generation."""

    def test_writes_project_and_manifest(self, write_project_dir):
        directory = write_project_dir()
        result = generate_segment(directory, {PackageKey("HTTP")})

        assert result.status == "written"
        assert result.ok
        assert result.packages == 3
        assert result.output_dir == directory / "seg"

        project = read_toml(directory / "seg" / "Project.toml")
        manifest = read_toml(directory / "seg" / "Manifest.toml")
        assert project["deps"] == {"HTTP": HTTP_UUID, "Sockets": SOCKETS_UUID, "URIs": URIS_UUID}
        assert set(manifest) == {"HTTP", "Sockets", "URIs"}

    def test_custom_subdir(self, write_project_dir):
        directory = write_project_dir()
        generate_segment(directory, {PackageKey("JSON3")}, subdir="out/json")
        assert (directory / "out" / "json" / "Manifest.toml").exists()

    def test_output_keys_are_sorted(self, write_project_dir):
        directory = write_project_dir()
        generate_segment(directory, {PackageKey("HTTP")})
        text = (directory / "seg" / "Project.toml").read_text(encoding="utf-8")
        assert text.index("HTTP =") < text.index("Sockets =") < text.index("URIs =")

    def test_dry_run_writes_nothing(self, write_project_dir):
        directory = write_project_dir()
        result = generate_segment(directory, {PackageKey("HTTP")}, dry_run=True)
        assert result.status == "planned"
        assert result.packages == 3
        assert not (directory / "seg").exists()

    def test_missing_manifest_file(self, tmp_path):
        (tmp_path / "Project.toml").write_text('name = "App"\n', encoding="utf-8")
        with pytest.raises(StorageError):
            generate_segment(tmp_path, {PackageKey("HTTP")})

    def test_nested_manifest_layout_is_preserved(self, write_project_dir):
        nested = {
            "julia_version": "1.9.3",
            "manifest_format": "2.0",
            "project_hash": "0123abcd",
            "deps": sample_manifest(),
        }
        directory = write_project_dir(manifest=nested)
        generate_segment(directory, {PackageKey("JSON3")})
        manifest = read_toml(directory / "seg" / "Manifest.toml")
        assert manifest["manifest_format"] == "2.0"
        assert manifest["julia_version"] == "1.9.3"
        assert "project_hash" not in manifest
        assert set(manifest["deps"]) == {"JSON3", "Parsers"}


class TestWriteSegment:
    """Writing a built segment to disk."""

    def test_unserializable_manifest_writes_no_files(self, tmp_path):
        segment = Segment(
            manifest={"HTTP": [{"uuid": HTTP_UUID, "extra": object()}]},
            project={"name": "App", "deps": {"HTTP": HTTP_UUID}},
        )
        with pytest.raises(StorageError):
            write_segment(tmp_path / "seg", segment, {})
        assert not (tmp_path / "seg" / "Project.toml").exists()
        assert not (tmp_path / "seg").exists()

    def test_writes_both_files(self, tmp_path):
        segment = Segment(
            manifest={"HTTP": [{"uuid": HTTP_UUID}]},
            project={"name": "App", "deps": {"HTTP": HTTP_UUID}},
        )
        project_path, manifest_path = write_segment(tmp_path / "seg", segment, {"manifest_format": "2.0"})
        assert read_toml(project_path)["deps"] == {"HTTP": HTTP_UUID}
        assert read_toml(manifest_path) == {"manifest_format": "2.0", "deps": {"HTTP": [{"uuid": HTTP_UUID}]}}


class TestDirectoryHelpers:
    """project_segment / manifest_segment return values without writing."""

    def test_project_segment(self, write_project_dir):
        directory = write_project_dir()
        project = project_segment(directory, {PackageKey("JSON3")})
        assert set(project["deps"]) == {"JSON3", "Parsers"}
        assert not (directory / "seg").exists()

    def test_manifest_segment(self, write_project_dir):
        directory = write_project_dir()
        manifest = manifest_segment(directory, {PackageKey("Plots")})
        assert set(manifest) == {"Plots", "Parsers"}


class TestGenerateFromSegmentFile:
    """Segment list driven generation."""

    def test_generates_every_segment(self, write_project_dir):
        directory = write_project_dir(segments=SEGMENTS)
        results = generate_from_segment_file(directory)

        assert [result.name for result in results] == ["web", "data"]
        assert all(result.status == "written" for result in results)
        assert set(read_toml(directory / "seg" / "web" / "Manifest.toml")) == {"HTTP", "Sockets", "URIs"}
        assert set(read_toml(directory / "seg" / "data" / "Manifest.toml")) == {"JSON3", "Parsers"}

    def test_load_segment_requests(self, write_project_dir):
        directory = write_project_dir(segments=SEGMENTS)
        requests = load_segment_requests(directory)
        assert requests[0].roots == frozenset({PackageKey("HTTP")})

    def test_failing_segment_stops_run(self, write_project_dir):
        manifest = sample_manifest()
        manifest["JSON3"][0]["deps"] = ["Missing"]
        directory = write_project_dir(manifest=manifest, segments=SEGMENTS)
        with pytest.raises(MissingEntryError):
            generate_from_segment_file(directory)

    def test_keep_going_records_failure_and_continues(self, write_project_dir, caplog):
        manifest = sample_manifest()
        manifest["HTTP"][0]["deps"] = ["Missing"]
        directory = write_project_dir(manifest=manifest, segments=SEGMENTS)

        with caplog.at_level(logging.ERROR, logger="pkg_segments.orchestrator"):
            results = generate_from_segment_file(directory, keep_going=True)

        statuses = {result.name: result.status for result in results}
        assert statuses == {"web": "failed", "data": "written"}
        assert not results[0].ok
        assert "Missing" in results[0].error
        assert not (directory / "seg" / "web").exists()
        assert (directory / "seg" / "data" / "Project.toml").exists()
        assert "Segment 'web' failed" in caplog.text

    def test_invalid_segment_file(self, write_project_dir):
        directory = write_project_dir(segments={"web": {"deps": ["HTTP"]}})
        with pytest.raises(SegmentConfigError):
            generate_from_segment_file(directory)

    def test_custom_segment_file_name(self, write_project_dir):
        directory = write_project_dir()
        (directory / "Segments.toml").write_text('[only]\ndeps = ["URIs"]\nsubdir = "u"\n', encoding="utf-8")
        results = generate_from_segment_file(directory, "Segments.toml")
        assert results[0].packages == 1

    def test_empty_segment_file(self, write_project_dir):
        directory = write_project_dir(segments={})
        assert generate_from_segment_file(directory) == []
