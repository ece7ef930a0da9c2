import re

from aiuml.pipeline.context import DiagramDialect

FLOWCHART_DIRECTIVE_RE = re.compile(
    r"^(graph|flowchart)(\s+(TD|TB|LR|RL|BT))?\s*;?$",
    re.IGNORECASE,
)

# First-line keywords of every Mermaid diagram type we may get back
ANY_DIRECTIVE_RE = re.compile(
    r"^(graph|flowchart|classDiagram(-v2)?|sequenceDiagram|stateDiagram(-v2)?|"
    r"erDiagram|journey|gantt|pie|mindmap|timeline|gitGraph|"
    r"requirementDiagram|quadrantChart|C4Context)\b",
)

HEADERS = {
    DiagramDialect.CLASS: "classDiagram",
    DiagramDialect.SEQUENCE: "sequenceDiagram",
    DiagramDialect.USE_CASE: "graph LR",
    DiagramDialect.GENERIC: "graph TD",
}

DIRECTIVES = {
    DiagramDialect.CLASS: re.compile(r"^classDiagram(-v2)?\s*$"),
    DiagramDialect.SEQUENCE: re.compile(r"^sequenceDiagram\s*$"),
    DiagramDialect.USE_CASE: FLOWCHART_DIRECTIVE_RE,
    # Generic accepts whatever diagram type the model chose
    DiagramDialect.GENERIC: ANY_DIRECTIVE_RE,
}


def _body_start(lines: list[str]) -> int:
    """
    Index of the first line after the Mermaid prelude:
      - blank lines
      - "%% comment" and "%%{init: ...}%%" lines
      - a "---" ... "---" front matter block at the very top
    """
    i = 0
    while i < len(lines) and not lines[i].strip():
        i += 1

    if i < len(lines) and lines[i].strip() == "---":
        for j in range(i + 1, len(lines)):
            if lines[j].strip() == "---":
                i = j + 1
                break

    while i < len(lines) and (not lines[i].strip() or lines[i].strip().startswith("%%")):
        i += 1
    return i


def has_directive(code: str, dialect: DiagramDialect) -> bool:
    lines = code.splitlines()
    idx = _body_start(lines)
    if idx >= len(lines):
        return False
    return DIRECTIVES[dialect].match(lines[idx].strip()) is not None


def repair_mermaid(code: str, dialect: DiagramDialect) -> str:
    """
    Make sure the diagram opens with the dialect's directive.
      - a correct directive is left untouched
      - another diagram type's directive is replaced
      - plain content gets the directive inserted after the prelude
    Comments, init directives and front matter stay ahead of the directive.
    Mermaid has no closing marker.
    """
    lines = code.splitlines()
    header = HEADERS[dialect]

    idx = _body_start(lines)
    if idx >= len(lines):
        return "\n".join(lines + [header]) if code.strip() else header

    first = lines[idx].strip()
    if DIRECTIVES[dialect].match(first):
        return code

    if ANY_DIRECTIVE_RE.match(first):
        lines[idx] = header
        return "\n".join(lines)

    return "\n".join(lines[:idx] + [header] + lines[idx:])


def error_diagram(message: str) -> str:
    return f'graph TD\n  Error["{message}"]'
