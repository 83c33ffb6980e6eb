"""Provider English → export labels (Serbian).

Upstream market naming is not under our control, so both tables are plain
ordered lists that callers may extend or replace. Unknown market names pass
through unchanged; unknown selections default to DEFAULT_SELECTION_LABEL.
"""

from __future__ import annotations

from typing import List

from .rules import LabelRule, contains_all, contains_any, first_label, matches

DEFAULT_SELECTION_LABEL = "DA"

MARKET_LABEL_RULES: List[LabelRule] = [
    LabelRule(contains_all("first goalscorer"), "daje prvi gol"),
    LabelRule(contains_all("last goalscorer"), "daje poslednji gol"),
    LabelRule(contains_any("hat-trick", "hattrick", "hat trick"), "het-trik"),
    LabelRule(contains_all("score", "win", "team"), "daje gol i tim pobeđuje"),
    LabelRule(contains_all("score or assist"), "gol ili asistencija"),
    LabelRule(contains_any("goalscorer", "to score", "scorer"), "daje gol"),
    LabelRule(contains_all("shot", "target"), "šutevi u okvir gola"),
    LabelRule(contains_all("shot"), "šutevi"),
    LabelRule(contains_all("assist"), "asistencija"),
    LabelRule(contains_any("red card", "sent off"), "crveni karton"),
    LabelRule(contains_any("card", "shown", "booked"), "dobija karton"),
    LabelRule(contains_all("offside"), "ofsajdi"),
    LabelRule(contains_all("fouled"), "biva fauliran"),
    LabelRule(contains_all("foul"), "pravi faul"),
    LabelRule(contains_all("tackle"), "startovi"),
    LabelRule(contains_all("pass"), "dodavanja"),
]

# Matched against the outcome name.
OUTCOME_LABEL_RULES: List[LabelRule] = [
    LabelRule(matches(r"^yes$"), "DA"),
    LabelRule(matches(r"^no$"), "NE"),
    LabelRule(matches(r"^over(?:\s+(\d+(?:[.,]\d+)?))?$"), "Više {0}"),
    LabelRule(matches(r"^under(?:\s+(\d+(?:[.,]\d+)?))?$"), "Manje {0}"),
]

# Matched against the market name when the outcome is a player.
MARKET_LINE_RULES: List[LabelRule] = [
    LabelRule(matches(r"(\d+)\s*or\s+more"), "{0}+"),
    LabelRule(matches(r"(\d+)\s*\+"), "{0}+"),
    LabelRule(matches(r"at least\s+(\d+)"), "{0}+"),
    LabelRule(matches(r"exactly\s+(\d+)"), "{0}"),
    LabelRule(matches(r"over\s+(\d+(?:\.\d+)?)"), "Više {0}"),
    LabelRule(matches(r"under\s+(\d+(?:\.\d+)?)"), "Manje {0}"),
]


def map_market_label(market_name: str) -> str:
    label = first_label(MARKET_LABEL_RULES, market_name)
    return market_name if label is None else label


def map_selection_label(market_name: str, outcome_name: str) -> str:
    label = first_label(OUTCOME_LABEL_RULES, outcome_name)
    if label is None:
        label = first_label(MARKET_LINE_RULES, market_name)
    return DEFAULT_SELECTION_LABEL if label is None else label


__all__ = [
    "DEFAULT_SELECTION_LABEL",
    "MARKET_LABEL_RULES",
    "OUTCOME_LABEL_RULES",
    "MARKET_LINE_RULES",
    "map_market_label",
    "map_selection_label",
]
