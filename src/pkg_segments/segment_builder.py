"""Build a (manifest, project) segment from a dependency closure.

Both outputs are new values: entries and tables are deep-copied from the
inputs, which are never modified.
"""

from __future__ import annotations

import copy
import logging
from typing import AbstractSet, Any, Dict, FrozenSet, Iterable, List, Mapping, NamedTuple

from .closure import closure
from .constants import IMPLICIT_ROOTS
from .domain.manifest_index import Manifest, iter_entries
from .domain.package_key import PackageKey
from .exceptions import AmbiguousKeyError, MissingFieldError

logger = logging.getLogger(__name__)

DEPS_FIELD = "deps"
COMPAT_FIELD = "compat"


class Segment(NamedTuple):
    manifest: Dict[str, List[Dict[str, Any]]]
    project: Dict[str, Any]


def _table(project: Mapping[str, Any], field: str) -> Mapping[str, Any]:
    value = project.get(field, {})
    if not isinstance(value, Mapping):
        raise MissingFieldError(
            f"Project '{field}' must be a table",
            context={"field": field, "type": type(value).__name__},
        )
    return value


def prune_manifest(manifest: Manifest, keys: AbstractSet[PackageKey]) -> Dict[str, List[Dict[str, Any]]]:
    """Keep only the entries whose qualified key is in ``keys``.

    Names left without entries are dropped. Entry contents are copied verbatim.
    """
    pruned: Dict[str, List[Dict[str, Any]]] = {}
    for key, entry in iter_entries(manifest):
        if key in keys:
            pruned.setdefault(key.name, []).append(copy.deepcopy(entry))
    return pruned


def closure_by_name(keys: Iterable[PackageKey]) -> Dict[str, PackageKey]:
    """Map each closure name to its key; a project can list each name once."""
    by_name: Dict[str, PackageKey] = {}
    for key in sorted(keys, key=PackageKey.sort_key):
        if key.name in by_name:
            raise AmbiguousKeyError(
                f"Closure holds several versions of '{key.name}'; the project can list only one",
                context={"key": key.name, "candidates": [str(by_name[key.name]), str(key)]},
            )
        by_name[key.name] = key
    return by_name


def prune_project(
    project: Mapping[str, Any],
    keys: AbstractSet[PackageKey],
    *,
    implicit_roots: AbstractSet[str] = IMPLICIT_ROOTS,
) -> Dict[str, Any]:
    """Rewrite the project so ``deps`` lists exactly the closure packages.

    Existing ``deps`` entries that agree with the closure keep their original
    text, stale ones are replaced, missing ones are added with the closure
    UUID. ``compat`` keeps only names still in ``deps`` plus the implicit
    roots. Every other field passes through unchanged.
    """
    deps = _table(project, DEPS_FIELD)
    by_name = closure_by_name(keys)

    new_deps: Dict[str, Any] = {}
    for name, key in by_name.items():
        existing = deps.get(name)
        if existing is not None and PackageKey.from_pair(name, existing).uuid == key.uuid:
            new_deps[name] = existing
        else:
            new_deps[name] = str(key.uuid)
            logger.debug(f"Project dependency '{name}' set to {key.uuid}")

    removed = sorted(set(deps) - set(new_deps))
    if removed:
        logger.debug(f"Dropping project dependencies: {', '.join(removed)}")

    segment: Dict[str, Any] = {}
    for field, value in project.items():
        if field == DEPS_FIELD:
            continue
        if field == COMPAT_FIELD:
            compat = _table(project, COMPAT_FIELD)
            segment[field] = {
                name: copy.deepcopy(bound)
                for name, bound in compat.items()
                if name in new_deps or name in implicit_roots
            }
        else:
            segment[field] = copy.deepcopy(value)
    segment[DEPS_FIELD] = new_deps
    return segment


def build_segment(
    project: Mapping[str, Any],
    manifest: Manifest,
    roots: Iterable[PackageKey],
    *,
    implicit_roots: AbstractSet[str] = IMPLICIT_ROOTS,
) -> Segment:
    """Prune a manifest and its project down to the closure of ``roots``.

    Args:
        project: Parsed project table (``name``, ``uuid``, ``deps``, ``compat``, ...)
        manifest: Mapping of package name to its list of entry tables
        roots: Requested top-level packages
        implicit_roots: Package names always treated as requested

    Returns:
        Segment of (pruned manifest, pruned project)

    Raises:
        ResolutionError: If a reference is ambiguous or missing
        MissingFieldError: If a required field is absent or malformed
        FormatError: If a key or UUID is malformed
    """
    requested = set(roots)
    requested.update(PackageKey(name) for name in implicit_roots)
    keys: FrozenSet[PackageKey] = closure(manifest, requested)
    logger.debug(f"Segment closure: {', '.join(sorted(str(key) for key in keys))}")
    return Segment(prune_manifest(manifest, keys), prune_project(project, keys, implicit_roots=implicit_roots))
