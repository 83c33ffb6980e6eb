"""Error taxonomy.

Only two kinds of failure ever reach the caller: an upstream fetch that did
not produce a JSON body, and an export action attempted without the user
selection it needs. Shape mismatches and missing prices are absorbed by the
parsers and never raised.
"""

from __future__ import annotations

from typing import Optional


class PropsheetError(Exception):
    """Base class for errors surfaced to the user."""


class FetchError(PropsheetError):
    """Upstream request failed (non-2xx status, network error or timeout)."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        self.message = message
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(f"{prefix}{message}")


class SelectionError(PropsheetError, ValueError):
    """A required user selection (club, player, event) is missing."""


__all__ = ["PropsheetError", "FetchError", "SelectionError"]
