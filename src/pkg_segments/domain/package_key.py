"""PackageKey domain object identifying a package by name and optional UUID.

Keys are written as ``Name`` or ``Name:UUID``. A key without a UUID acts as a
wildcard: it compares equal to every key with the same name. The relation is
therefore not transitive (``A:u1 == A == A:u2`` while ``A:u1 != A:u2``), and
the hash is computed from the name alone so that wildcard-equal keys land in
the same bucket. The wildcard is only meant for matching a name-only request
against qualified manifest keys; resolution that must pick one entry goes
through :class:`~pkg_segments.domain.manifest_index.ManifestIndex`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from ..exceptions import FormatError

KEY_SEPARATOR = ":"


def parse_uuid(value: Any, *, name: str = "") -> UUID:
    """Parse a UUID value, raising FormatError for anything malformed."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        raise FormatError(
            f"UUID for '{name}' must be a string, got {type(value).__name__}",
            context={"name": name, "value": repr(value)},
        )
    try:
        return UUID(value)
    except ValueError as e:
        raise FormatError(
            f"Malformed UUID '{value}' for '{name}'",
            context={"name": name, "value": value},
        ) from e


@dataclass(frozen=True, eq=False)
class PackageKey:
    """Identity of a package within a manifest.

    Attributes:
        name: Registered package name
        uuid: Package UUID, or None when the identity is not disambiguated
    """

    name: str
    uuid: Optional[UUID] = None

    @classmethod
    def parse(cls, text: str) -> PackageKey:
        """Parse ``Name`` or ``Name:UUID``.

        Raises:
            FormatError: If the text has more than one separator, an empty
                name, or a malformed UUID
        """
        parts = text.split(KEY_SEPARATOR)
        if len(parts) > 2:
            raise FormatError(
                f"Unable to construct PackageKey from '{text}'",
                context={"text": text},
            )
        name = parts[0].strip()
        if not name:
            raise FormatError(f"Package key '{text}' has an empty name", context={"text": text})
        if len(parts) == 1:
            return cls(name)
        return cls(name, parse_uuid(parts[1].strip(), name=name))

    @classmethod
    def from_pair(cls, name: str, value: Any) -> PackageKey:
        """Build a key from a ``name => uuid`` table entry."""
        if value is None:
            return cls(name)
        return cls(name, parse_uuid(value, name=name))

    @property
    def is_qualified(self) -> bool:
        return self.uuid is not None

    def matches(self, other: PackageKey) -> bool:
        """Wildcard match: names equal and UUIDs equal unless either is unset."""
        if self.name != other.name:
            return False
        if not (self.is_qualified and other.is_qualified):
            return True
        return self.uuid == other.uuid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageKey):
            return NotImplemented
        return self.matches(other)

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        if not self.is_qualified:
            return self.name
        return f"{self.name}{KEY_SEPARATOR}{self.uuid}"

    def sort_key(self) -> tuple[str, str]:
        return (self.name, str(self.uuid) if self.uuid is not None else "")
