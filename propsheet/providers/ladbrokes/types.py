"""Normalized record types produced from Ladbrokes payloads.

The provider names the same field differently depending on which feed (CMS
module listing, SiteServer drilldown, legacy flat JSON) produced it. Each
record type therefore declares an ordered list of candidate keys per logical
field; the first candidate holding a non-empty value wins. Keep these lists
here so a renamed upstream field is a one-line change.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


EVENT_ID_KEYS: Tuple[str, ...] = ("id", "eventId", "event_id")
EVENT_NAME_KEYS: Tuple[str, ...] = ("name", "title", "event_name")
EVENT_START_KEYS: Tuple[str, ...] = ("date", "start_time", "startTime")
EVENT_COMPETITION_KEYS: Tuple[str, ...] = ("competition", "league", "typeName", "competitionName")
EVENT_CATEGORY_KEYS: Tuple[str, ...] = ("categoryName", "category", "className")

MARKET_ID_KEYS: Tuple[str, ...] = ("id", "marketId", "market_id")
MARKET_NAME_KEYS: Tuple[str, ...] = ("name", "market_name", "type")
MARKET_OUTCOME_KEYS: Tuple[str, ...] = ("outcomes", "selections")

OUTCOME_ID_KEYS: Tuple[str, ...] = ("id", "outcomeId", "selection_id")
OUTCOME_NAME_KEYS: Tuple[str, ...] = ("name", "selection", "runner")

# Decimal odds lookup paths, highest priority first. Nesting depth is fixed,
# so lookups walk these paths instead of recursing into arbitrary objects.
ODDS_FIELD_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("odds_decimal",),
    ("oddsDecimal",),
    ("odds",),
    ("price", "priceDec"),
    ("decimal_odds",),
)


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, dict)) and not value:
        return False
    return True


def first_present(item: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the first non-empty value among `keys`, or None."""
    for key in keys:
        value = item.get(key)
        if _present(value):
            return value
    return None


def has_any_key(item: Any, keys: Sequence[str]) -> bool:
    return isinstance(item, Mapping) and any(_present(item.get(k)) for k in keys)


def parse_decimal(value: Any) -> Optional[float]:
    """Parse a provider price; anything unparseable becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def lookup_odds(item: Any) -> Optional[float]:
    """Walk ODDS_FIELD_PATHS over a mapping or model and return the first numeric value."""
    if isinstance(item, BaseModel):
        item = item.model_dump(by_alias=False)
    if not isinstance(item, Mapping):
        return None
    for path in ODDS_FIELD_PATHS:
        node: Any = item
        for key in path:
            if not isinstance(node, Mapping):
                node = None
                break
            node = node.get(key)
        value = parse_decimal(node)
        if value is not None:
            return value
    return None


def parse_start_time(value: Any) -> Union[datetime, str, None]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch millis are used by some CMS modules
        try:
            seconds = value / 1000.0 if value > 10_000_000_000 else float(value)
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return str(value)
    else:
        text = str(value).strip()
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


class EventRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = ""
    name: str = ""
    start_time: Union[datetime, str, None] = Field(default=None, alias="startTime")
    competition_name: Optional[str] = Field(default=None, alias="competitionName")
    category_name: Optional[str] = Field(default=None, alias="categoryName")

    @field_validator("start_time", mode="before")
    @classmethod
    def _coerce_start(cls, value: Any) -> Union[datetime, str, None]:
        return parse_start_time(value)

    @classmethod
    def from_provider(cls, item: Mapping[str, Any]) -> "EventRecord":
        raw_id = first_present(item, EVENT_ID_KEYS)
        event_id = "" if raw_id is None else str(raw_id)
        name = first_present(item, EVENT_NAME_KEYS)
        competition = first_present(item, EVENT_COMPETITION_KEYS)
        if isinstance(competition, Mapping):
            competition = competition.get("name")
        category = first_present(item, EVENT_CATEGORY_KEYS)
        if isinstance(category, Mapping):
            category = category.get("name")
        return cls(
            id=event_id,
            name=str(name) if name is not None else f"Event {event_id}",
            start_time=first_present(item, EVENT_START_KEYS),
            competition_name=str(competition) if competition is not None else None,
            category_name=str(category) if category is not None else None,
        )

    @property
    def start_datetime(self) -> Optional[datetime]:
        return self.start_time if isinstance(self.start_time, datetime) else None


class OutcomeRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = ""
    name: str = ""
    odds_decimal: Optional[float] = Field(default=None, alias="oddsDecimal")

    @classmethod
    def from_provider(cls, item: Mapping[str, Any]) -> "OutcomeRecord":
        raw_id = first_present(item, OUTCOME_ID_KEYS)
        name = first_present(item, OUTCOME_NAME_KEYS)
        return cls(
            id="" if raw_id is None else str(raw_id),
            name="Selection" if name is None else str(name),
            odds_decimal=lookup_odds(item),
        )


class MarketRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = ""
    name: str = ""
    outcomes: List[OutcomeRecord] = Field(default_factory=list)

    @classmethod
    def from_provider(cls, item: Mapping[str, Any]) -> "MarketRecord":
        raw_id = first_present(item, MARKET_ID_KEYS)
        name = first_present(item, MARKET_NAME_KEYS)
        raw_outcomes = first_present(item, MARKET_OUTCOME_KEYS) or []
        if isinstance(raw_outcomes, Mapping):
            raw_outcomes = [raw_outcomes]
        outcomes = [OutcomeRecord.from_provider(o) for o in raw_outcomes if isinstance(o, Mapping)]
        return cls(
            id="" if raw_id is None else str(raw_id),
            name="Market" if name is None else str(name),
            outcomes=outcomes,
        )


JsonObject = Dict[str, Any]


__all__ = [
    "EventRecord",
    "OutcomeRecord",
    "MarketRecord",
    "JsonObject",
    "EVENT_ID_KEYS",
    "EVENT_NAME_KEYS",
    "EVENT_START_KEYS",
    "ODDS_FIELD_PATHS",
    "first_present",
    "has_any_key",
    "parse_decimal",
    "lookup_odds",
    "parse_start_time",
]
