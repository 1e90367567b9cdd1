from .normalizers import to_str, parse_timestamp, format_display
from .writers import render_csv, write_csv

__all__ = [
    "to_str",
    "parse_timestamp",
    "format_display",
    "render_csv",
    "write_csv",
]
