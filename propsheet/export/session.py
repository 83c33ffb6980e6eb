"""Export session state.

One session covers one user flow: pick an event, browse its player markets,
add (market, player) pairs, serialize. Selecting a different event clears
the accumulated rows.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from zoneinfo import ZoneInfo

from propsheet.config import ExportSettings
from propsheet.props import filter_player_markets, is_generic_selection, map_market_label, map_selection_label
from propsheet.providers.ladbrokes import DataSource, EventRecord, MarketRecord, extract_events, extract_markets
from propsheet.providers.ladbrokes.types import parse_start_time
from propsheet.shared.errors import SelectionError
from propsheet.shared.rows import CsvRow, ExportSet

from .csv_writer import serialize
from .odds import format_odds

logger = logging.getLogger(__name__)


def split_event_datetime(
    value: Union[datetime, str, None],
    settings: Optional[ExportSettings] = None,
) -> Tuple[str, str]:
    """Return the (Datum, Vreme) column values for an event start."""
    cfg = settings or ExportSettings()
    parsed = parse_start_time(value)
    if parsed is None:
        return "", ""
    if isinstance(parsed, str):
        return parsed, ""
    if cfg.timezone:
        parsed = parsed.astimezone(ZoneInfo(cfg.timezone))
    return parsed.strftime(cfg.date_format), parsed.strftime(cfg.time_format)


def _outcome_matches_player(outcome_name: str, player: str) -> bool:
    return player.casefold() in outcome_name.casefold() or is_generic_selection(outcome_name)


async def load_events(source: DataSource) -> List[EventRecord]:
    raw = await source.fetch_events()
    events = extract_events(raw)
    logger.info({"events_loaded": {"count": len(events)}})
    return events


class ExportSession:
    def __init__(self, settings: Optional[ExportSettings] = None) -> None:
        self.settings = settings or ExportSettings()
        self.event: Optional[EventRecord] = None
        self.markets: List[MarketRecord] = []
        self.export_set: ExportSet = {}

    # ------------------------------------------------------------------
    # Event selection
    # ------------------------------------------------------------------
    def select_event(self, event: EventRecord) -> None:
        if self.event is None or self.event.id != event.id:
            if self.export_set:
                logger.info({"export_cleared": {"previous_event": self.event.id if self.event else None}})
            self.export_set = {}
            self.markets = []
        self.event = event

    def set_markets(self, markets: Sequence[MarketRecord]) -> List[MarketRecord]:
        """Keep the player markets of an odds snapshot for the current event."""
        self.markets = filter_player_markets(markets)
        logger.debug({"player_markets": {"total": len(markets), "kept": len(self.markets)}})
        return self.markets

    async def open_event(self, source: DataSource, event: EventRecord) -> List[MarketRecord]:
        """Select `event`, fetch its odds and return the player markets."""
        self.select_event(event)
        raw = await source.fetch_odds(event.id)
        return self.set_markets(extract_markets(raw))

    def find_market(self, name_or_id: str) -> Optional[MarketRecord]:
        wanted = (name_or_id or "").casefold().strip()
        for market in self.markets:
            if market.id == name_or_id or market.name.casefold().strip() == wanted:
                return market
        return None

    # ------------------------------------------------------------------
    # Export accumulation
    # ------------------------------------------------------------------
    def add_to_export(
        self,
        player: str,
        market: MarketRecord,
        event_datetime: Union[datetime, str, None] = None,
    ) -> int:
        """Add the rows for `player` in `market`; returns how many were new.

        Rows already present for the player with the same (market, selection)
        labels are skipped, so repeating an action is harmless.
        """
        player = (player or "").strip()
        if not player:
            raise SelectionError("Select a player before adding a market to the export.")
        if market is None:
            raise SelectionError("Select a market before adding it to the export.")
        if event_datetime is None and self.event is not None:
            event_datetime = self.event.start_time
        date, time = split_event_datetime(event_datetime, self.settings)
        market_label = map_market_label(market.name)

        rows = self.export_set.get(player, [])
        existing = {(r["market"], r["selection"]) for r in rows}
        added = 0
        for outcome in market.outcomes:
            if not _outcome_matches_player(outcome.name, player):
                continue
            row: CsvRow = {
                "date": date,
                "time": time,
                "code": "",
                "market": market_label,
                "selection": map_selection_label(market.name, outcome.name),
                "odds": format_odds(outcome),
            }
            key = (row["market"], row["selection"])
            if key in existing:
                continue
            existing.add(key)
            rows.append(row)
            added += 1
        if rows:
            self.export_set[player] = rows
        logger.debug({"export_add": {"player": player, "market": market.name, "added": added}})
        return added

    def remove_player(self, player: str) -> None:
        self.export_set.pop(player, None)

    def clear(self) -> None:
        self.export_set = {}

    def row_count(self) -> int:
        return sum(len(rows) for rows in self.export_set.values())

    def serialize(self, club_name: str) -> str:
        return serialize(self.export_set, club_name)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "event_id": self.event.id if self.event else None,
            "markets": len(self.markets),
            "players": list(self.export_set),
            "rows": self.row_count(),
        }


__all__ = ["ExportSession", "load_events", "split_event_datetime"]
