"""Shared fixtures: provider payloads and an in-memory data source."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import pytest


def _price(dec: str) -> Dict[str, Any]:
    return {"price": {"id": "p", "priceType": "LP", "priceDec": dec, "priceNum": "1", "priceDen": "1"}}


def outcome_node(outcome_id: str, name: str, price_dec: str | None = None) -> Dict[str, Any]:
    children: List[Dict[str, Any]] = [_price(price_dec)] if price_dec is not None else []
    return {"outcome": {"id": outcome_id, "name": name, "children": children}}


def market_node(market_id: str, name: str, outcomes: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"market": {"id": market_id, "name": name, "children": outcomes}}


def ss_response(markets: List[Dict[str, Any]], event_name: str = "Inter v Milan") -> Dict[str, Any]:
    return {
        "SSResponse": {
            "xmlns": "http://schema.openbet.com/SiteServer/2.31/SSResponse.xsd",
            "children": [
                {
                    "event": {
                        "id": "230549001",
                        "name": event_name,
                        "startTime": "2026-10-24T18:45:00Z",
                        "children": markets,
                    }
                },
                {"responseFooter": {"creationTime": "2026-10-19T10:00:00Z"}},
            ],
        }
    }


@pytest.fixture
def odds_payload() -> Dict[str, Any]:
    return ss_response(
        [
            market_node(
                "m1",
                "Anytime Goalscorer",
                [outcome_node("o1", "Messi", "2.00"), outcome_node("o2", "Ronaldo", "1.80")],
            ),
            market_node("m2", "Correct Score", [outcome_node("o3", "Inter 1-0", "7.50")]),
            market_node(
                "m3",
                "Player 2 or more shots",
                [outcome_node("o4", "Messi", "1.65"), outcome_node("o5", "Ronaldo")],
            ),
        ]
    )


@pytest.fixture
def events_payload() -> Dict[str, Any]:
    return {
        "modules": [
            {
                "title": "Featured",
                "data": [
                    {
                        "id": 230549001,
                        "name": "Inter v Milan",
                        "startTime": "2026-10-24T18:45:00Z",
                        "typeName": "Serie A",
                        "categoryName": "Football",
                    }
                ],
            },
            {"title": "Promo banner"},
            {"title": "More", "data": [{"id": 230549002, "name": "Roma v Lazio"}]},
        ]
    }


class FakeSource:
    """DataSource double that returns canned payloads and records calls."""

    def __init__(self, events: Any = None, odds: Any = None) -> None:
        self.events = events
        self.odds = odds
        self.odds_requests: List[str] = []

    async def fetch_events(self) -> Any:
        return self.events

    async def fetch_odds(self, event_id: str) -> Any:
        self.odds_requests.append(event_id)
        return self.odds


@pytest.fixture
def fake_source(events_payload, odds_payload) -> FakeSource:
    return FakeSource(events=events_payload, odds=odds_payload)


@pytest.fixture(autouse=True)
def _reset_propsheet_logger():
    yield
    for name in ("propsheet", "httpx"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
    logging.getLogger("httpx").propagate = True
