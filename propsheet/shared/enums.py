from __future__ import annotations

from enum import Enum


class MarketGroup(str, Enum):
    GOALSCORERS = "goalscorers"
    SCORE_AND_WIN = "score_and_win"
    SHOTS_ON_TARGET = "shots_on_target"
    TOTAL_SHOTS = "total_shots"
    ASSISTS = "assists"
    CARDS = "cards"
    FOULS = "fouls"
    TACKLES = "tackles"
    OFFSIDES = "offsides"
    PASSES = "passes"
    OTHER = "other"


class SelectionSide(str, Enum):
    YES = "yes"
    NO = "no"
    OVER = "over"
    UNDER = "under"


# Outcome names that apply to whichever player the market is about.
GENERIC_SELECTIONS = frozenset(side.value for side in SelectionSide)


__all__ = ["MarketGroup", "SelectionSide", "GENERIC_SELECTIONS"]
