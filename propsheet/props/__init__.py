"""Player proposition selection, grouping and export labelling."""

from .classify import GROUP_RULES, classify, group_markets
from .filters import filter_player_markets, is_generic_selection, is_player_market, players_in_markets
from .labels import (
    DEFAULT_SELECTION_LABEL,
    MARKET_LABEL_RULES,
    MARKET_LINE_RULES,
    OUTCOME_LABEL_RULES,
    map_market_label,
    map_selection_label,
)
from .rules import LabelRule, Rule

__all__ = [
    "GROUP_RULES",
    "classify",
    "group_markets",
    "filter_player_markets",
    "is_player_market",
    "is_generic_selection",
    "players_in_markets",
    "DEFAULT_SELECTION_LABEL",
    "MARKET_LABEL_RULES",
    "MARKET_LINE_RULES",
    "OUTCOME_LABEL_RULES",
    "map_market_label",
    "map_selection_label",
    "LabelRule",
    "Rule",
]
