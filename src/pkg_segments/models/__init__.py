"""Pydantic models for pkg-segments configuration files."""

from .segments import SegmentList, SegmentSpec, parse_segment_list

__all__ = ["SegmentSpec", "SegmentList", "parse_segment_list"]
