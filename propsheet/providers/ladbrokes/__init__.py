"""Ladbrokes provider integration.

Async client for the CMS events feed and the SiteServer odds drilldown, plus
the parsers that turn their payloads into normalized records.
"""

from .client import DataSource, LadbrokesClient
from .events import extract_events
from .markets import extract_markets
from .types import EventRecord, MarketRecord, OutcomeRecord, lookup_odds
from .provider_constants import PROVIDER_CODE

__all__ = [
    "DataSource",
    "LadbrokesClient",
    "extract_events",
    "extract_markets",
    "EventRecord",
    "MarketRecord",
    "OutcomeRecord",
    "lookup_odds",
    "PROVIDER_CODE",
]
