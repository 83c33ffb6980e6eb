"""Odds payload → MarketRecord normalization.

SiteServer drilldown responses wrap every entity in a single-key node inside a
`children` array:

    SSResponse.children[] -> {"event": {..., "children": [
        {"market": {..., "children": [
            {"outcome": {..., "children": [
                {"price": {"priceDec": "2.00", ...}}]}}]}}]}}

Markets and outcomes keep the order they appear in; nothing is sorted. Flat
JSON shapes are handled as fallbacks only when the tree yields no markets.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Mapping, Optional, Sequence

from .types import MARKET_OUTCOME_KEYS, MarketRecord, OutcomeRecord, has_any_key, parse_decimal

logger = logging.getLogger(__name__)

MAIN_MARKET_ID = "main"
MAIN_MARKET_NAME = "Main Market"


def _children(node: Any) -> list:
    if not isinstance(node, Mapping):
        return []
    children = node.get("children")
    return children if isinstance(children, list) else []


def _wrapped(children: list, key: str) -> Iterator[Mapping[str, Any]]:
    for child in children:
        if isinstance(child, Mapping) and isinstance(child.get(key), Mapping):
            yield child[key]


def _outcome_from_node(node: Mapping[str, Any]) -> OutcomeRecord:
    odds: Optional[float] = None
    for price in _wrapped(_children(node), "price"):
        odds = parse_decimal(price.get("priceDec"))
        break
    return OutcomeRecord(
        id=str(node.get("id") or ""),
        name=str(node.get("name") or ""),
        odds_decimal=odds,
    )


def _market_from_node(node: Mapping[str, Any]) -> MarketRecord:
    outcomes: List[OutcomeRecord] = []
    for outcome in _wrapped(_children(node), "outcome"):
        outcomes.append(_outcome_from_node(outcome))
    return MarketRecord(id=str(node.get("id") or ""), name=str(node.get("name") or ""), outcomes=outcomes)


def _markets_from_tree(raw: Any, out: List[MarketRecord]) -> None:
    """Append tree markets to `out` as they are built, so a failure keeps earlier ones."""
    if not isinstance(raw, Mapping):
        return
    response = raw.get("SSResponse")
    event = next(_wrapped(_children(response), "event"), None)
    if event is None:
        return
    for market in _wrapped(_children(event), "market"):
        out.append(_market_from_node(market))


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else [value]


def _fallback_markets_key(raw: Any) -> Optional[list]:
    if isinstance(raw, Mapping) and isinstance(raw.get("markets"), list):
        return raw["markets"]
    return None


def _fallback_data_markets(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    data = raw.get("data")
    if isinstance(data, Mapping) and data.get("markets"):
        return _as_list(data["markets"])
    return None


def _fallback_ss_markets(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    response = raw.get("SSResponse")
    if isinstance(response, Mapping) and response.get("markets"):
        return _as_list(response["markets"])
    return None


def _fallback_root_outcomes(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    for key in MARKET_OUTCOME_KEYS:
        if raw.get(key):
            return [{"id": MAIN_MARKET_ID, "name": MAIN_MARKET_NAME, "outcomes": raw[key]}]
    return None


def _fallback_property_scan(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    for key, value in raw.items():
        if isinstance(value, Mapping) and value.get("markets"):
            return _as_list(value["markets"])
        if isinstance(value, list) and value and has_any_key(value[0], ("outcomes", "selections", "name")):
            logger.debug({"ladbrokes_markets_scan_hit": {"key": key, "count": len(value)}})
            return value
    return None


MARKET_FALLBACKS: Sequence[Callable[[Any], Optional[list]]] = (
    _fallback_markets_key,
    _fallback_data_markets,
    _fallback_ss_markets,
    _fallback_root_outcomes,
    _fallback_property_scan,
)


def _markets_from_fallbacks(raw: Any, out: List[MarketRecord]) -> None:
    for strategy in MARKET_FALLBACKS:
        items = strategy(raw)
        if not items:
            continue
        logger.debug({"ladbrokes_markets_fallback": {"name": strategy.__name__, "count": len(items)}})
        for item in items:
            if isinstance(item, Mapping):
                out.append(MarketRecord.from_provider(item))
        return


def extract_markets(raw: Any) -> List[MarketRecord]:
    """Normalize an odds response into MarketRecords.

    Never raises: a structural surprise returns whatever was built before it.
    """
    markets: List[MarketRecord] = []
    try:
        _markets_from_tree(raw, markets)
        if not markets:
            _markets_from_fallbacks(raw, markets)
    except Exception as exc:
        logger.warning({"ladbrokes_markets_parse_error": {"error": str(exc), "parsed": len(markets)}})
    if not markets:
        logger.warning({"ladbrokes_markets_empty": {"payload_type": type(raw).__name__}})
    return markets


__all__ = ["extract_markets", "MARKET_FALLBACKS", "MAIN_MARKET_ID", "MAIN_MARKET_NAME"]
