"""Report generation module for LanScope."""

from .csv_report import CSV_HEADER, csv_filename, serialize_csv, write_csv_report

__all__ = ["CSV_HEADER", "csv_filename", "serialize_csv", "write_csv_report"]
