"""Player proposition market selection.

The provider exposes no structured market type, so player markets are picked
out by name. Expect the occasional false positive or negative.
"""
from __future__ import annotations

import re
from typing import Iterable, List

from propsheet.providers.ladbrokes.types import MarketRecord
from propsheet.shared.enums import GENERIC_SELECTIONS

PLAYER_MARKET_INCLUDE = ("player", "goalscorer", "scorer", "to score")
PLAYER_MARKET_EXCLUDE = ("correct score", "both teams", "team to score", "half time", "handicap")

# "Over 1.5" / "Under 2,5" carry a line but belong to no single player
_LINE_SELECTION = re.compile(r"^(?:over|under)\s+\d+(?:[.,]\d+)?$")


def is_player_market(market_name: str) -> bool:
    name = (market_name or "").casefold()
    if not any(word in name for word in PLAYER_MARKET_INCLUDE):
        return False
    return not any(word in name for word in PLAYER_MARKET_EXCLUDE)


def is_generic_selection(outcome_name: str) -> bool:
    name = (outcome_name or "").casefold().strip()
    return name in GENERIC_SELECTIONS or bool(_LINE_SELECTION.match(name))


def filter_player_markets(markets: Iterable[MarketRecord]) -> List[MarketRecord]:
    return [m for m in markets if is_player_market(m.name)]


def players_in_markets(markets: Iterable[MarketRecord]) -> List[str]:
    """Distinct player names across market outcomes, in first-seen order."""
    seen: dict = {}
    for market in markets:
        for outcome in market.outcomes:
            name = outcome.name.strip()
            if not name or is_generic_selection(name):
                continue
            seen.setdefault(name.casefold(), name)
    return list(seen.values())


__all__ = [
    "PLAYER_MARKET_INCLUDE",
    "PLAYER_MARKET_EXCLUDE",
    "is_player_market",
    "is_generic_selection",
    "filter_player_markets",
    "players_in_markets",
]
