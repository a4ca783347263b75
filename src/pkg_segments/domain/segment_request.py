"""SegmentRequest domain object describing one segment to generate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable

from .package_key import PackageKey


@dataclass(frozen=True)
class SegmentRequest:
    """A named set of root packages and the subdirectory to write them to.

    Attributes:
        name: Segment name from the segment list
        roots: Requested root packages
        subdir: Output directory, relative to the project directory
    """

    name: str
    roots: FrozenSet[PackageKey]
    subdir: str

    @classmethod
    def from_texts(cls, name: str, deps: Iterable[str], subdir: str) -> SegmentRequest:
        """Parse each ``Name`` / ``Name:UUID`` text into a root key."""
        return cls(name=name, roots=frozenset(PackageKey.parse(text) for text in deps), subdir=subdir)
