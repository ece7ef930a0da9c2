"""
Response Sanitizer

Turns raw model output into a structurally complete diagram document.
Never raises: the worst case is a header-only (degenerate) diagram.

Step order matters:
  1. strip code fences (with or without a language tag)
  2. strip a leading bare "mermaid" / "plantuml" line
  3. drop conversational filler lines
  4. dialect-specific structural repair
  5. trim leading / trailing blank lines
"""

import re

from aiuml.dsl import mermaid, plantuml
from aiuml.pipeline.context import DiagramDialect, DiagramNotation

FENCE = "```"

FENCE_TAGS = {"mermaid", "plantuml", "puml", "uml", "text", "txt", "md", "markdown"}

DIALECT_NAME_LINE_RE = re.compile(r"^(mermaid|plantuml|puml)\s*:?$", re.IGNORECASE)

# Case-sensitive prefixes of the trimmed line
FILLER_PREFIXES = ("Note:", "Here", "Certainly", FENCE)


def strip_fences(text: str) -> str:
    cleaned = []
    for line in text.splitlines():
        stripped = line.strip()

        if stripped.startswith(FENCE):
            rest = stripped.lstrip("`").strip()
            if not rest or rest.lower() in FENCE_TAGS:
                continue
            # "```mermaid graph TD" -> "graph TD"; "```classDiagram" -> "classDiagram"
            tag, _, remainder = rest.partition(" ")
            line = remainder.strip() if tag.lower() in FENCE_TAGS else rest
            stripped = line.strip()

        if stripped.endswith(FENCE):
            line = line.rstrip().rstrip("`").rstrip()
            if not line.strip():
                continue

        cleaned.append(line)

    return "\n".join(cleaned)


def strip_dialect_name(text: str) -> str:
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if not line.strip():
            continue
        if DIALECT_NAME_LINE_RE.match(line.strip()):
            del lines[i]
        break
    return "\n".join(lines)


def drop_filler(text: str) -> str:
    return "\n".join(
        line for line in text.splitlines()
        if not line.strip().startswith(FILLER_PREFIXES)
    )


def trim_blank_lines(text: str) -> str:
    lines = [l.rstrip() for l in text.splitlines()]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def sanitize(
    raw_text: str | None,
    dialect: DiagramDialect,
    notation: DiagramNotation = DiagramNotation.MERMAID,
) -> str:
    text = raw_text or ""

    text = strip_fences(text)
    text = strip_dialect_name(text)
    text = drop_filler(text)
    text = trim_blank_lines(text)

    if notation is DiagramNotation.PLANTUML:
        text = plantuml.repair_plantuml(text)
    else:
        text = mermaid.repair_mermaid(text, dialect)

    return trim_blank_lines(text)


def is_structurally_complete(
    document: str,
    dialect: DiagramDialect,
    notation: DiagramNotation = DiagramNotation.MERMAID,
) -> bool:
    if notation is DiagramNotation.PLANTUML:
        return plantuml.has_markers(document)
    return mermaid.has_directive(document, dialect)


def escape_label(message: str) -> str:
    """Single-line, double-quote free text safe inside a quoted node label."""
    return re.sub(r"\s+", " ", message.replace('"', "'")).strip()


def error_document(
    message: str,
    notation: DiagramNotation = DiagramNotation.MERMAID,
) -> str:
    label = escape_label(message)
    if notation is DiagramNotation.PLANTUML:
        return plantuml.error_diagram(label)
    return mermaid.error_diagram(label)
