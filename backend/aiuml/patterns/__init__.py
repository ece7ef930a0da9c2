# backend/aiuml/patterns/__init__.py
"""
Design Pattern Suggestions

Asks the model for the most relevant design patterns for a set of
requirements and parses its free-text answer into ordered entries.
Falls back to a fixed default set when nothing usable comes back.
"""

from aiuml.patterns.catalog import (
    DEFAULT_PATTERNS,
    PatternEntry,
    default_patterns,
)
from aiuml.patterns.detector import (
    PatternExtractor,
    build_pattern_prompt,
    parse_pattern_line,
    parse_pattern_lines,
)

__all__ = [
    "DEFAULT_PATTERNS",
    "PatternEntry",
    "default_patterns",
    "PatternExtractor",
    "build_pattern_prompt",
    "parse_pattern_line",
    "parse_pattern_lines",
]
