"""Provider integrations.

This package contains provider-specific clients and payload parsers.
"""

from . import ladbrokes as ladbrokes  # re-export namespace

__all__ = ["ladbrokes"]
