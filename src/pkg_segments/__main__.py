"""Run the segment generator with ``python -m pkg_segments``.

Usage:
    python -m pkg_segments path/to/project                   # every segment in PkgSegments.toml
    python -m pkg_segments path/to/project --deps HTTP,JSON3 # one ad-hoc segment under seg/
    LOG_LEVEL=DEBUG python -m pkg_segments --dry-run         # show closures without writing
"""

from .main import main

if __name__ == "__main__":
    raise SystemExit(main())
