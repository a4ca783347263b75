"""Transitive dependency closure over a resolved manifest."""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, List, Set

from .domain.manifest_index import Manifest, ManifestIndex, dependency_references
from .domain.package_key import PackageKey

logger = logging.getLogger(__name__)


def resolve_roots(index: ManifestIndex, roots: Iterable[PackageKey]) -> List[PackageKey]:
    """Qualify every root present in the manifest; absent roots are dropped."""
    resolved = []
    for root in sorted(roots, key=PackageKey.sort_key):
        if root not in index:
            logger.warning(f"Requested package '{root}' is not in the manifest; skipping")
            continue
        resolved.append(index.resolve(root))
    return resolved


def closure_from_index(index: ManifestIndex, roots: Iterable[PackageKey]) -> FrozenSet[PackageKey]:
    """Compute the closure against a prebuilt index."""
    stack = list(dict.fromkeys(resolve_roots(index, roots)))
    seen: Set[PackageKey] = set(stack)

    while stack:
        key = stack.pop()
        for ref in dependency_references(key, index.entry(key)):
            dep = index.resolve(ref)
            if dep not in seen:
                seen.add(dep)
                stack.append(dep)

    logger.debug(f"Closure of {len(seen)} packages from {len(index)} manifest entries")
    return frozenset(seen)


def closure(manifest: Manifest, roots: Iterable[PackageKey]) -> FrozenSet[PackageKey]:
    """Return every qualified key reachable from ``roots`` through ``deps`` edges.

    Roots are included. A root that matches nothing in the manifest is dropped;
    a dependency reference that matches nothing is an error.

    Args:
        manifest: Mapping of package name to its list of entry tables
        roots: Requested packages, qualified or name-only

    Returns:
        Frozen set of fully qualified keys

    Raises:
        AmbiguousKeyError: If a name-only reference matches several entries
        MissingEntryError: If a dependency reference matches no entry
        MissingFieldError: If an entry lacks ``uuid`` or has a malformed ``deps``
        FormatError: If a UUID or key string is malformed
    """
    return closure_from_index(ManifestIndex(manifest), roots)
