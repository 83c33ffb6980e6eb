from __future__ import annotations

from typing import Dict, List, TypedDict


class CsvRow(TypedDict):
    date: str
    time: str
    code: str
    market: str
    selection: str
    odds: str


# player name -> rows, in insertion order
ExportSet = Dict[str, List[CsvRow]]


__all__ = ["CsvRow", "ExportSet"]
