"""Ladbrokes provider constants."""

PROVIDER_CODE = "LADBROKES"
EVENT_ID_PLACEHOLDER = "{EVENT_ID}"

__all__ = ["PROVIDER_CODE", "EVENT_ID_PLACEHOLDER"]
