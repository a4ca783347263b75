"""TOML document storage for project, manifest and segment list files."""

from __future__ import annotations

import logging
import tempfile
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping

import tomli_w

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


def sort_tables(value: Any) -> Any:
    """Recursively order table keys so serialized output is reproducible."""
    if isinstance(value, Mapping):
        return {key: sort_tables(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [sort_tables(item) for item in value]
    return value


def read_toml(path: Path) -> Dict[str, Any]:
    """Parse a TOML file into nested dictionaries.

    Raises:
        StorageError: If the file is missing, unreadable or not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise StorageError(f"File not found: {path}", context={"path": str(path)}) from e
    except tomllib.TOMLDecodeError as e:
        raise StorageError(f"Invalid TOML in {path}: {e}", context={"path": str(path)}) from e
    except OSError as e:
        raise StorageError(f"Unable to read {path}: {e}", context={"path": str(path)}) from e


def dumps_toml(data: Mapping[str, Any]) -> str:
    """Serialize a document with recursively sorted keys."""
    try:
        return tomli_w.dumps(sort_tables(data))
    except TypeError as e:
        raise StorageError(f"Unable to serialize document: {e}") from e


def write_text(path: Path, payload: str) -> Path:
    """Write already serialized text atomically, creating parent directories as needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile("w", delete=False, dir=path.parent, encoding="utf-8") as tmp:
            tmp.write(payload)
            tmp_path = Path(tmp.name)
        tmp_path.replace(path)
    except OSError as e:
        raise StorageError(f"Unable to write {path}: {e}", context={"path": str(path)}) from e
    logger.debug(f"Wrote {path}")
    return path
