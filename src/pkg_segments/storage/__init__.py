"""TOML storage helpers."""

from .toml_storage import dumps_toml, read_toml, sort_tables, write_text

__all__ = ["read_toml", "write_text", "dumps_toml", "sort_tables"]
