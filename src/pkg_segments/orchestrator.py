"""Generate segment files from a project directory.

Reads ``Project.toml`` and ``Manifest.toml`` once, builds one segment per
request and writes ``<subdir>/Project.toml`` and ``<subdir>/Manifest.toml``
for each.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, Sequence, Tuple

from .constants import DEFAULT_SUBDIR, MANIFEST_FILE, PROJECT_FILE, SEGMENT_FILE
from .domain.manifest_format import join_manifest, split_manifest
from .domain.package_key import PackageKey
from .domain.segment_request import SegmentRequest
from .exceptions import PkgSegmentsError
from .models.segments import parse_segment_list
from .segment_builder import Segment, build_segment
from .storage.toml_storage import dumps_toml, read_toml, write_text

logger = logging.getLogger(__name__)

SegmentStatus = Literal["written", "planned", "failed"]


@dataclass
class ProjectInputs:
    """Project and manifest tables read from a project directory."""

    project: Dict[str, Any]
    manifest: Dict[str, List[Dict[str, Any]]]
    manifest_metadata: Dict[str, Any]


@dataclass
class SegmentResult:
    """Outcome of generating one segment."""

    name: str
    output_dir: Path
    status: SegmentStatus
    packages: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"


def load_inputs(directory: Path) -> ProjectInputs:
    """Read the project and manifest files of a project directory."""
    project = read_toml(directory / PROJECT_FILE)
    manifest, metadata = split_manifest(read_toml(directory / MANIFEST_FILE))
    return ProjectInputs(project=project, manifest=manifest, manifest_metadata=metadata)


def project_segment(directory: Path, roots: Iterable[PackageKey]) -> Dict[str, Any]:
    """Return the pruned project for ``roots`` without writing anything."""
    inputs = load_inputs(directory)
    return build_segment(inputs.project, inputs.manifest, roots).project


def manifest_segment(directory: Path, roots: Iterable[PackageKey]) -> Dict[str, Any]:
    """Return the pruned manifest document for ``roots`` without writing anything."""
    inputs = load_inputs(directory)
    segment = build_segment(inputs.project, inputs.manifest, roots)
    return join_manifest(segment.manifest, inputs.manifest_metadata)


def write_segment(output_dir: Path, segment: Segment, manifest_metadata: Dict[str, Any]) -> Tuple[Path, Path]:
    """Write a segment's project and manifest files into ``output_dir``.

    Both documents are serialized before either file is touched, so a
    document that cannot be written leaves the output directory unchanged.
    """
    project_text = dumps_toml(segment.project)
    manifest_text = dumps_toml(join_manifest(segment.manifest, manifest_metadata))
    project_path = write_text(output_dir / PROJECT_FILE, project_text)
    manifest_path = write_text(output_dir / MANIFEST_FILE, manifest_text)
    return project_path, manifest_path


def _generate(directory: Path, inputs: ProjectInputs, request: SegmentRequest, dry_run: bool) -> SegmentResult:
    output_dir = directory / request.subdir
    segment = build_segment(inputs.project, inputs.manifest, request.roots)
    packages = sum(len(entries) for entries in segment.manifest.values())
    if dry_run:
        logger.info(f"Segment '{request.name}': {packages} packages (dry run, nothing written)")
        return SegmentResult(request.name, output_dir, "planned", packages)
    write_segment(output_dir, segment, inputs.manifest_metadata)
    logger.info(f"Segment '{request.name}': wrote {packages} packages to {output_dir}")
    return SegmentResult(request.name, output_dir, "written", packages)


def run_segments(
    directory: Path,
    requests: Sequence[SegmentRequest],
    *,
    keep_going: bool = False,
    dry_run: bool = False,
) -> List[SegmentResult]:
    """Build and write every requested segment.

    Args:
        directory: Project directory holding the project and manifest files
        requests: Segments to produce
        keep_going: Record a failing segment and continue with the next one
            instead of raising
        dry_run: Build segments without writing files

    Returns:
        One result per request, in request order

    Raises:
        PkgSegmentsError: On the first failing segment unless ``keep_going``
    """
    inputs = load_inputs(directory)
    results: List[SegmentResult] = []
    for request in requests:
        try:
            results.append(_generate(directory, inputs, request, dry_run))
        except PkgSegmentsError as e:
            if not keep_going:
                raise
            logger.error(f"Segment '{request.name}' failed: {e}")
            results.append(SegmentResult(request.name, directory / request.subdir, "failed", error=str(e)))
    return results


def generate_segment(
    directory: Path,
    roots: Iterable[PackageKey],
    *,
    subdir: str = DEFAULT_SUBDIR,
    dry_run: bool = False,
) -> SegmentResult:
    """Generate a single segment for ``roots`` under ``directory / subdir``."""
    request = SegmentRequest(name=subdir, roots=frozenset(roots), subdir=subdir)
    return run_segments(directory, [request], dry_run=dry_run)[0]


def load_segment_requests(directory: Path, segment_file: str = SEGMENT_FILE) -> List[SegmentRequest]:
    """Read and validate the segment list file of a project directory."""
    return parse_segment_list(read_toml(directory / segment_file))


def generate_from_segment_file(
    directory: Path,
    segment_file: str = SEGMENT_FILE,
    *,
    keep_going: bool = False,
    dry_run: bool = False,
) -> List[SegmentResult]:
    """Generate every segment listed in the segment list file."""
    requests = load_segment_requests(directory, segment_file)
    if not requests:
        logger.warning(f"No segments declared in {directory / segment_file}")
        return []
    return run_segments(directory, requests, keep_going=keep_going, dry_run=dry_run)
