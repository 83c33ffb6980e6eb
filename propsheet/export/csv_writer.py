"""CSV serialization for the export set.

Layout of the structured export (one file per match):

    Datum,Vreme,Sifra,Domacin,Gost,1,X,2,GR,U,O,Yes,No
    MATCH_NAME:<club>
    LEAGUE_NAME:<player>
    <date>,<time>,,<market>,<selection>,<odds>,,,,,,,

The importer reads the selection into `Gost` and the odds into column `1`;
the remaining columns stay empty. Every line goes through `csv.writer` with
minimal quoting, so a label containing a comma or quote is escaped per RFC
4180 and ordinary labels are written bare.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional

from propsheet.providers.ladbrokes.types import MarketRecord
from propsheet.shared.errors import SelectionError
from propsheet.shared.rows import ExportSet

from .odds import format_odds

logger = logging.getLogger(__name__)

CSV_HEADER: List[str] = ["Datum", "Vreme", "Sifra", "Domacin", "Gost", "1", "X", "2", "GR", "U", "O", "Yes", "No"]
FLAT_HEADER: List[str] = ["Market", "Selection", "Odds"]
CSV_MIME_TYPE = "text/csv; charset=utf-8"
FILENAME_SUFFIX = "_odds.csv"
MATCH_PREFIX = "MATCH_NAME:"
PLAYER_PREFIX = "LEAGUE_NAME:"

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def _writer(buffer: io.StringIO):
    return csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")


def serialize(export_set: ExportSet, club_name: str) -> str:
    club_name = (club_name or "").strip()
    if not club_name:
        raise SelectionError("Select a club before exporting.")
    buffer = io.StringIO()
    writer = _writer(buffer)
    writer.writerow(CSV_HEADER)
    writer.writerow([f"{MATCH_PREFIX}{club_name}"])
    padding = [""] * (len(CSV_HEADER) - 6)
    for player, rows in export_set.items():
        writer.writerow([f"{PLAYER_PREFIX}{player}"])
        for row in rows:
            writer.writerow(
                [row["date"], row["time"], row["code"], row["market"], row["selection"], row["odds"], *padding]
            )
    return buffer.getvalue()


def serialize_flat(markets: Iterable[MarketRecord]) -> str:
    """Plain three-column listing of every market outcome."""
    buffer = io.StringIO()
    writer = _writer(buffer)
    writer.writerow(FLAT_HEADER)
    for market in markets:
        for outcome in market.outcomes:
            writer.writerow([market.name, outcome.name, format_odds(outcome)])
    return buffer.getvalue()


def export_filename(club_name: str) -> str:
    club_name = (club_name or "").strip()
    if not club_name:
        raise SelectionError("Select a club before exporting.")
    safe = _UNSAFE_FILENAME_CHARS.sub("_", club_name).strip(" .") or "export"
    return f"{safe}{FILENAME_SUFFIX}"


def write_export(text: str, club_name: str, output_dir: Optional[str | Path] = None) -> Path:
    directory = Path(output_dir) if output_dir else Path.cwd()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(club_name)
    path.write_text(text, encoding="utf-8")
    logger.info({"export_written": {"path": str(path), "bytes": len(text.encode("utf-8"))}})
    return path


__all__ = [
    "CSV_HEADER",
    "FLAT_HEADER",
    "CSV_MIME_TYPE",
    "serialize",
    "serialize_flat",
    "export_filename",
    "write_export",
]
