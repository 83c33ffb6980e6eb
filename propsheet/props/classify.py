from __future__ import annotations

from typing import Dict, Iterable, List

from propsheet.providers.ladbrokes.types import MarketRecord
from propsheet.shared.enums import MarketGroup

from .rules import Rule, contains_all, contains_any, first_value

# "Player to Score and Team Win" matches both ScoreAndWin and Goalscorers;
# declaration order decides.
GROUP_RULES: List[Rule[MarketGroup]] = [
    Rule(contains_all("shot", "target"), MarketGroup.SHOTS_ON_TARGET),
    Rule(contains_all("shot"), MarketGroup.TOTAL_SHOTS),
    Rule(contains_all("assist"), MarketGroup.ASSISTS),
    Rule(contains_all("score", "win", "team"), MarketGroup.SCORE_AND_WIN),
    Rule(contains_any("goalscorer", "score"), MarketGroup.GOALSCORERS),
    Rule(contains_any("card", "shown"), MarketGroup.CARDS),
    Rule(contains_all("offside"), MarketGroup.OFFSIDES),
    Rule(contains_all("foul"), MarketGroup.FOULS),
    Rule(contains_all("tackle"), MarketGroup.TACKLES),
    Rule(contains_all("pass"), MarketGroup.PASSES),
]


def classify(market_name: str) -> MarketGroup:
    return first_value(GROUP_RULES, market_name, MarketGroup.OTHER)


def group_markets(markets: Iterable[MarketRecord]) -> Dict[MarketGroup, List[MarketRecord]]:
    """Bucket markets by group.

    Keys follow MarketGroup declaration order; markets keep their input order.
    """
    buckets: Dict[MarketGroup, List[MarketRecord]] = {}
    for market in markets:
        buckets.setdefault(classify(market.name), []).append(market)
    return {group: buckets[group] for group in MarketGroup if group in buckets}


__all__ = ["GROUP_RULES", "classify", "group_markets"]
