# src/commentsense/infrastructure/__init__.py
"""
Infrastructure layer: text parsing, field normalization, timestamps and
CSV export. Pure functions over in-memory data.
"""
from .csv_parser import ParsedTable, parse_delimited, parse_table
from .exporter import export_comments_csv
from .normalizer import (
    detect_file_type,
    detect_file_type_from_header,
    normalize_comment,
    normalize_video,
)

__all__ = [
    "ParsedTable",
    "parse_delimited",
    "parse_table",
    "export_comments_csv",
    "detect_file_type",
    "detect_file_type_from_header",
    "normalize_comment",
    "normalize_video",
]
