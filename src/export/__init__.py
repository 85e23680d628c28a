# src/export/__init__.py

from .csv_export import build_columns, rows_to_frame, save_csv, to_delimited_text

__all__ = [
    "build_columns",
    "rows_to_frame",
    "save_csv",
    "to_delimited_text",
]
