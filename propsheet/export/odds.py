from __future__ import annotations

from typing import Any

from propsheet.providers.ladbrokes.types import lookup_odds

NOT_AVAILABLE = "N/A"


def format_odds(outcome: Any) -> str:
    """Decimal odds to two places, or "N/A" when no price is resolvable.

    Accepts an OutcomeRecord or a raw provider mapping; see ODDS_FIELD_PATHS
    for the lookup order.
    """
    value = lookup_odds(outcome)
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.2f}"


__all__ = ["NOT_AVAILABLE", "format_odds"]
