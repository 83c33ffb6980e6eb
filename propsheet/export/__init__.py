"""Export accumulation and CSV serialization."""

from .csv_writer import (
    CSV_HEADER,
    CSV_MIME_TYPE,
    FLAT_HEADER,
    export_filename,
    serialize,
    serialize_flat,
    write_export,
)
from .odds import NOT_AVAILABLE, format_odds
from .session import ExportSession, load_events, split_event_datetime

__all__ = [
    "CSV_HEADER",
    "CSV_MIME_TYPE",
    "FLAT_HEADER",
    "export_filename",
    "serialize",
    "serialize_flat",
    "write_export",
    "NOT_AVAILABLE",
    "format_odds",
    "ExportSession",
    "load_events",
    "split_event_datetime",
]
