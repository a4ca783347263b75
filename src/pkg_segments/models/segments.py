"""Pydantic models for the segment list file.

A segment list maps each segment name to the packages it needs and the
subdirectory its files are written to:

```toml
[runtime]
deps = ["HTTP", "JSON3"]
subdir = "seg/runtime"

[plots]
deps = ["Plots:91a5bcdd-55d7-5caf-9e0b-520d859cae80"]
subdir = "seg/plots"
```
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Annotated, Any, Dict, List, Mapping

from pydantic import BaseModel, Field, RootModel, ValidationError, field_validator

from ..domain.package_key import PackageKey
from ..domain.segment_request import SegmentRequest
from ..exceptions import FormatError, SegmentConfigError


class SegmentSpec(BaseModel):
    """One entry of the segment list."""

    deps: Annotated[
        List[str],
        Field(
            description="Requested packages as 'Name' or 'Name:UUID'",
            examples=[["HTTP", "JSON3"], ["Plots:91a5bcdd-55d7-5caf-9e0b-520d859cae80"]],
        ),
    ]
    subdir: Annotated[
        str,
        Field(
            min_length=1,
            description="Output directory relative to the project directory",
            examples=["seg", "seg/runtime"],
        ),
    ]

    model_config = {"extra": "ignore"}

    @field_validator("deps")
    @classmethod
    def validate_deps(cls, v: List[str]) -> List[str]:
        """Every dependency must parse as a package key."""
        for idx, text in enumerate(v):
            try:
                PackageKey.parse(text)
            except FormatError as e:
                raise ValueError(f"Invalid dependency at index {idx}: {e}") from e
        return v

    @field_validator("subdir")
    @classmethod
    def validate_subdir(cls, v: str) -> str:
        """Output directories stay inside the project directory."""
        path = PurePosixPath(v)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError(f"subdir must be a relative path inside the project, got '{v}'")
        return v

    def to_request(self, name: str) -> SegmentRequest:
        return SegmentRequest.from_texts(name, self.deps, self.subdir)


class SegmentList(RootModel[Dict[str, SegmentSpec]]):
    """All segments declared in a segment list file."""


def parse_segment_list(document: Mapping[str, Any]) -> List[SegmentRequest]:
    """Validate a parsed segment list and return one request per segment.

    Raises:
        SegmentConfigError: If any segment is malformed
    """
    try:
        segments = SegmentList.model_validate(dict(document))
    except ValidationError as e:
        raise SegmentConfigError(
            f"Invalid segment list: {e.error_count()} error(s)\n{e}",
            context={"errors": [err["msg"] for err in e.errors()]},
        ) from e
    return [spec.to_request(name) for name, spec in segments.root.items()]
