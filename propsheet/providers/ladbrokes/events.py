"""Event listing extraction.

The CMS feed returns `{"modules": [{"data": [...]}, ...]}`, but cached or
proxied copies of it have shown up as a bare list, an `events` wrapper and a
single event object. Strategies are tried in order and the first non-empty
result wins; nothing in here raises to the caller.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .types import EVENT_ID_KEYS, EventRecord, has_any_key

logger = logging.getLogger(__name__)

_EVENT_HINT_KEYS = ("id", "eventId", "name")


def _from_modules(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("modules"), list):
        return None
    items: list = []
    for module in raw["modules"]:
        if isinstance(module, Mapping) and isinstance(module.get("data"), list):
            items.extend(module["data"])
    return items


def _from_events_key(raw: Any) -> Optional[list]:
    if isinstance(raw, Mapping) and isinstance(raw.get("events"), list):
        return raw["events"]
    return None


def _from_root_list(raw: Any) -> Optional[list]:
    return raw if isinstance(raw, list) else None


def _from_data_key(raw: Any) -> Optional[list]:
    if isinstance(raw, Mapping) and isinstance(raw.get("data"), list):
        return raw["data"]
    return None


def _from_fixture_schedule(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    content = raw.get("fixture_schedule_content")
    if not isinstance(content, Mapping) or not content.get("events"):
        return None
    events = content["events"]
    return events if isinstance(events, list) else [events]


def _from_single_event(raw: Any) -> Optional[list]:
    if has_any_key(raw, EVENT_ID_KEYS[:2]):
        return [raw]
    return None


def _from_property_scan(raw: Any) -> Optional[list]:
    if not isinstance(raw, Mapping):
        return None
    for key, value in raw.items():
        if isinstance(value, list) and value and has_any_key(value[0], _EVENT_HINT_KEYS):
            logger.debug({"ladbrokes_events_scan_hit": {"key": key, "count": len(value)}})
            return value
    return None


EVENT_STRATEGIES: Sequence[Callable[[Any], Optional[list]]] = (
    _from_modules,
    _from_events_key,
    _from_root_list,
    _from_data_key,
    _from_fixture_schedule,
    _from_single_event,
    _from_property_scan,
)


def _raw_event_items(raw: Any) -> list:
    for strategy in EVENT_STRATEGIES:
        items = strategy(raw)
        if items:
            logger.debug({"ladbrokes_events_strategy": {"name": strategy.__name__, "count": len(items)}})
            return items
    return []


def extract_events(raw: Any) -> List[EventRecord]:
    """Normalize an events listing into EventRecords, preserving provider order.

    Unexpected shapes produce an empty list; the caller shows "no events found".
    """
    try:
        items = _raw_event_items(raw)
    except Exception as exc:
        logger.warning({"ladbrokes_events_parse_error": str(exc)})
        return []

    events: List[EventRecord] = []
    for item in items:
        if not isinstance(item, Mapping):
            logger.debug({"ladbrokes_skip_event": {"reason": "not_an_object", "type": type(item).__name__}})
            continue
        try:
            events.append(EventRecord.from_provider(item))
        except Exception as exc:
            logger.debug({"ladbrokes_parse_event_error": str(exc)})
    if not events:
        logger.warning({"ladbrokes_events_empty": {"payload_type": type(raw).__name__}})
    return events


__all__ = ["extract_events", "EVENT_STRATEGIES"]
