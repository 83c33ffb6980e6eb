"""Ordered text-rule tables.

A rule pairs a predicate over case-folded text with the value to produce when
it matches. Tables are evaluated top to bottom and the first hit wins, so
more specific rules must be declared before the general ones they overlap.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

Predicate = Callable[[str], Union[bool, "re.Match[str]", None]]


def contains_all(*words: str) -> Predicate:
    def _pred(text: str) -> bool:
        return all(w in text for w in words)

    return _pred


def contains_any(*words: str) -> Predicate:
    def _pred(text: str) -> bool:
        return any(w in text for w in words)

    return _pred


def matches(pattern: str) -> Predicate:
    compiled = re.compile(pattern)

    def _pred(text: str) -> Optional["re.Match[str]"]:
        return compiled.search(text)

    return _pred


@dataclass(frozen=True)
class Rule(Generic[T]):
    predicate: Predicate
    value: T


@dataclass(frozen=True)
class LabelRule:
    """Rule whose label may reference regex groups: "{0}+" with "(\\d+) or more"."""

    predicate: Predicate
    label: str

    def apply(self, text: str) -> Optional[str]:
        hit = self.predicate(text)
        if not hit:
            return None
        if isinstance(hit, re.Match):
            groups = [g or "" for g in hit.groups()]
            return self.label.format(*groups).strip()
        return self.label


def first_value(rules: Iterable[Rule[T]], text: str, default: T) -> T:
    folded = (text or "").casefold()
    for rule in rules:
        if rule.predicate(folded):
            return rule.value
    return default


def first_label(rules: Sequence[LabelRule], text: str) -> Optional[str]:
    folded = (text or "").casefold().strip()
    for rule in rules:
        label = rule.apply(folded)
        if label is not None:
            return label
    return None


__all__ = [
    "Rule",
    "LabelRule",
    "contains_all",
    "contains_any",
    "matches",
    "first_value",
    "first_label",
]
