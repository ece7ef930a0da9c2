# backend/aiuml/patterns/catalog.py
"""
Pattern Catalog - design pattern entries and the fixed fallback set

The fallback set is returned whenever the model gives us nothing usable,
so pattern suggestions are never empty.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class PatternEntry:
    """A suggested design pattern with a one-line explanation"""
    name: str
    explanation: str

    def to_dict(self) -> dict:
        return {"name": self.name, "explanation": self.explanation}


# ============================================================
# FALLBACK PATTERNS (order is part of the contract)
# ============================================================

STRATEGY_PATTERN = PatternEntry(
    name="Strategy",
    explanation="Handles different implementations dynamically.",
)

SINGLETON_PATTERN = PatternEntry(
    name="Singleton",
    explanation="Ensures a single instance of a resource.",
)

OBSERVER_PATTERN = PatternEntry(
    name="Observer",
    explanation="Notifies dependent objects of state changes.",
)

DEFAULT_PATTERNS: Tuple[PatternEntry, ...] = (
    STRATEGY_PATTERN,
    SINGLETON_PATTERN,
    OBSERVER_PATTERN,
)


def default_patterns() -> List[PatternEntry]:
    """Fresh list so callers can't mutate the shared tuple"""
    return list(DEFAULT_PATTERNS)
