"""Constants used throughout pkg-segments."""

PROJECT_FILE = "Project.toml"
MANIFEST_FILE = "Manifest.toml"
SEGMENT_FILE = "PkgSegments.toml"
DEFAULT_SUBDIR = "seg"

# The runtime is always present in an environment, so its compat bound is kept
# in every project segment even though it never appears in ``deps``.
IMPLICIT_ROOTS = frozenset({"julia"})
