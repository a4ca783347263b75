"""Qualified-key index over a resolved manifest.

The manifest maps each package name to a list of entry tables. The index
flattens it so that every entry is reachable by its fully qualified
:class:`PackageKey`, and resolves partial references (name only, or
name + UUID) to exactly one entry.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Tuple

from ..exceptions import AmbiguousKeyError, MissingEntryError, MissingFieldError
from .package_key import PackageKey, parse_uuid

UUID_FIELD = "uuid"
DEPS_FIELD = "deps"

Manifest = Mapping[str, List[Dict[str, Any]]]


def entry_key(name: str, entry: Mapping[str, Any]) -> PackageKey:
    """Return the qualified key of a single manifest entry."""
    if not isinstance(entry, Mapping):
        raise MissingFieldError(
            f"Manifest entry for '{name}' is not a table",
            context={"name": name, "type": type(entry).__name__},
        )
    if UUID_FIELD not in entry:
        raise MissingFieldError(
            f"Manifest entry for '{name}' has no '{UUID_FIELD}' field",
            context={"name": name, "field": UUID_FIELD},
        )
    return PackageKey(name, parse_uuid(entry[UUID_FIELD], name=name))


def iter_entries(manifest: Manifest) -> Iterator[Tuple[PackageKey, Dict[str, Any]]]:
    """Yield ``(qualified key, entry)`` for every entry in manifest order."""
    for name, entries in manifest.items():
        if not isinstance(entries, list):
            raise MissingFieldError(
                f"Manifest value for '{name}' must be an array of tables",
                context={"name": name, "type": type(entries).__name__},
            )
        for entry in entries:
            yield entry_key(name, entry), entry


def dependency_references(key: PackageKey, entry: Mapping[str, Any]) -> List[PackageKey]:
    """Return the direct dependency references recorded on an entry.

    ``deps`` may be a table of ``Name = "UUID"`` pairs, or an array whose items
    are ``Name`` / ``Name:UUID`` strings or inline ``{Name = "UUID"}`` tables.
    A missing ``deps`` field means no dependencies.
    """
    deps = entry.get(DEPS_FIELD, [])
    if isinstance(deps, Mapping):
        return [PackageKey.from_pair(name, value) for name, value in deps.items()]
    if isinstance(deps, list):
        refs = []
        for item in deps:
            if isinstance(item, Mapping):
                refs.extend(PackageKey.from_pair(name, value) for name, value in item.items())
                continue
            if not isinstance(item, str):
                raise MissingFieldError(
                    f"Dependency of '{key}' must be a string or a table, got {type(item).__name__}",
                    context={"package": str(key), "value": repr(item)},
                )
            refs.append(PackageKey.parse(item))
        return refs
    raise MissingFieldError(
        f"'{DEPS_FIELD}' of '{key}' must be an array or a table",
        context={"package": str(key), "type": type(deps).__name__},
    )


class ManifestIndex:
    """Lookup of manifest entries by qualified key, bucketed by name."""

    def __init__(self, manifest: Manifest) -> None:
        self._by_name: Dict[str, List[Tuple[PackageKey, Dict[str, Any]]]] = {}
        for key, entry in iter_entries(manifest):
            self._by_name.setdefault(key.name, []).append((key, entry))

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._by_name.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, PackageKey):
            return False
        return bool(self.candidates(key))

    def candidates(self, key: PackageKey) -> List[Tuple[PackageKey, Dict[str, Any]]]:
        """All entries whose qualified key matches ``key`` (wildcard aware)."""
        return [pair for pair in self._by_name.get(key.name, []) if key.matches(pair[0])]

    def resolve(self, key: PackageKey) -> PackageKey:
        """Resolve a reference to the qualified key of exactly one entry.

        Raises:
            MissingEntryError: If no entry matches
            AmbiguousKeyError: If more than one entry matches
        """
        matches = self.candidates(key)
        if not matches:
            raise MissingEntryError(
                f"Unable to find a manifest entry for '{key}'",
                context={"key": str(key)},
            )
        if len(matches) > 1:
            raise AmbiguousKeyError(
                f"Unable to identify unique package for '{key}': {len(matches)} entries match",
                context={"key": str(key), "candidates": [str(k) for k, _ in matches]},
            )
        return matches[0][0]

    def entry(self, key: PackageKey) -> Dict[str, Any]:
        """Return the entry for a reference that resolves uniquely."""
        qualified = self.resolve(key)
        for candidate, entry in self._by_name[qualified.name]:
            if candidate.uuid == qualified.uuid:
                return entry
        raise MissingEntryError(f"Unable to find a manifest entry for '{key}'", context={"key": str(key)})


def manifest_to_keyed(manifest: Manifest) -> Dict[PackageKey, Dict[str, Any]]:
    """Remap ``name -> [entries]`` to ``qualified key -> entry``."""
    return {key: entry for key, entry in iter_entries(manifest)}


def keyed_to_manifest(keyed: Mapping[PackageKey, Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Inverse of :func:`manifest_to_keyed`; entries keep their iteration order."""
    manifest: Dict[str, List[Dict[str, Any]]] = {}
    for key, entry in keyed.items():
        manifest.setdefault(key.name, []).append(entry)
    return manifest
