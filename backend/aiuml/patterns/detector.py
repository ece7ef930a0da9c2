# backend/aiuml/patterns/detector.py
"""
Pattern Detector - asks the model for design pattern suggestions

Single generation call, tolerant line parsing, deterministic fallback.
"""

import logging
import re
from typing import List, Optional

from aiuml.inference.base import TextGenerationClient
from aiuml.patterns.catalog import PatternEntry, default_patterns

logger = logging.getLogger(__name__)

PATTERN_COUNT = 3

# Bullets and list numbering ("1.", "2)", "(3)") in front of the pattern name.
# Digits that belong to the name ("3-Tier") are kept.
LIST_MARKER_RE = re.compile(r"^\s*(?:[(\[]?\d+[.)\]]\s*|\d+\s+|[-*•·+#>]+\s*)+")

EMPHASIS_RE = re.compile(r"^[*_`]+|[*_`]+$")


def build_pattern_prompt(requirements: str) -> str:
    return (
        "Act as a Software Architecture expert. Analyze these requirements: "
        + requirements
        + f"\nIdentify the {PATTERN_COUNT} most relevant design patterns. "
        + "\nOutput format: Pattern Name | Brief Explanation (max 15 words) "
        + "\nOne per line. No other text."
    )


def _clean(text: str) -> str:
    return EMPHASIS_RE.sub("", text.strip()).strip()


def parse_pattern_line(line: str) -> Optional[PatternEntry]:
    """
    "1. Singleton | Ensures one instance" -> PatternEntry("Singleton", "Ensures one instance")
    "- Observer: notifies listeners"      -> PatternEntry("Observer", "notifies listeners")
    Pipe wins over colon. Returns None when neither delimiter is present
    or one side ends up empty.
    """
    text = LIST_MARKER_RE.sub("", line.strip())
    if not text:
        return None

    if "|" in text:
        name, _, explanation = text.partition("|")
    elif ":" in text:
        name, _, explanation = text.partition(":")
    else:
        return None

    # Table-style rows ("Name | Why |") leave a trailing pipe behind
    explanation = explanation.strip().strip("|")

    name = _clean(name)
    explanation = _clean(explanation)
    if not name or not explanation:
        return None

    return PatternEntry(name=name, explanation=explanation)


def parse_pattern_lines(text: str | None) -> List[PatternEntry]:
    entries = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        entry = parse_pattern_line(line)
        if entry is None:
            logger.debug("Dropping unparseable pattern line: %r", line, extra={"stage": "patterns"})
            continue
        entries.append(entry)
    return entries


class PatternExtractor:
    def __init__(self, client: TextGenerationClient):
        self.client = client

    def detect_patterns(self, requirements: str) -> List[PatternEntry]:
        """
        Never returns an empty list. A backend outage or unusable output
        yields the default Strategy / Singleton / Observer set.
        ConfigurationError is not caught: a missing key is fatal.
        """
        logger.info(
            "[STAGE: PATTERNS] Detecting design patterns for requirements...",
            extra={"stage": "patterns"},
        )

        result = self.client.generate(build_pattern_prompt(requirements))

        entries: List[PatternEntry] = []
        if result.succeeded:
            entries = parse_pattern_lines(result.text)
        else:
            logger.error(
                "Pattern detection failed: %s",
                result.error,
                extra={"stage": "patterns"},
            )

        if not entries:
            logger.warning(
                "[STAGE: PATTERNS] No usable suggestions, using defaults",
                extra={"stage": "patterns"},
            )
            return default_patterns()

        return entries
