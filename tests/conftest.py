"""Test configuration for pytest."""

import sys
import os
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
import tomli_w

# Add the src directory to Python path so pkg_segments can be imported without installing
src_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from helpers import sample_manifest, sample_project  # noqa: E402


@pytest.fixture
def manifest() -> Dict[str, List[Dict[str, Any]]]:
    """Fresh copy of the sample manifest for each test."""
    return sample_manifest()


@pytest.fixture
def project() -> Dict[str, Any]:
    """Fresh copy of the sample project for each test."""
    return sample_project()


@pytest.fixture
def write_project_dir(tmp_path: Path) -> Callable[..., Path]:
    """Write Project.toml, Manifest.toml and optionally PkgSegments.toml into tmp_path."""

    def _write(
        project: Dict[str, Any] | None = None,
        manifest: Dict[str, Any] | None = None,
        segments: Dict[str, Any] | None = None,
    ) -> Path:
        (tmp_path / "Project.toml").write_text(tomli_w.dumps(project or sample_project()), encoding="utf-8")
        (tmp_path / "Manifest.toml").write_text(tomli_w.dumps(manifest or sample_manifest()), encoding="utf-8")
        if segments is not None:
            (tmp_path / "PkgSegments.toml").write_text(tomli_w.dumps(segments), encoding="utf-8")
        return tmp_path

    return _write
