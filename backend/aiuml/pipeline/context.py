import re
from dataclasses import dataclass
from enum import Enum


class InputKind(Enum):
    CODE = "code"
    PROSE = "prose"


class DiagramDialect(Enum):
    CLASS = "CLASS"
    SEQUENCE = "SEQUENCE"
    USE_CASE = "USE_CASE"
    GENERIC = "GENERIC"

    @classmethod
    def parse(cls, value: str | None) -> "DiagramDialect":
        """
        Case-insensitive lookup. "use-case", "use case" and "usecase"
        all map to USE_CASE; anything unknown degrades to GENERIC.
        """
        if not value:
            return cls.GENERIC

        key = re.sub(r"[\s\-]+", "_", value.strip().upper())
        if key == "USECASE":
            key = "USE_CASE"
        try:
            return cls(key)
        except ValueError:
            return cls.GENERIC


class DiagramNotation(Enum):
    MERMAID = "mermaid"
    PLANTUML = "plantuml"

    @classmethod
    def parse(cls, value: str | None) -> "DiagramNotation":
        if not value:
            return cls.MERMAID

        key = value.strip().lower()
        if key == "puml":
            key = "plantuml"
        try:
            return cls(key)
        except ValueError:
            return cls.MERMAID


CODE_MARKERS = re.compile(
    r"[{}]"
    r"|\bimport\s"
    r"|\b(?:public\s+|abstract\s+)?class\s+[A-Z]\w*"
    r"|\binterface\s+[A-Z]\w*"
    r"|\bdef\s+\w+\("
)


def detect_input_kind(raw_input: str) -> InputKind:
    if CODE_MARKERS.search(raw_input or ""):
        return InputKind.CODE
    return InputKind.PROSE


@dataclass(frozen=True)
class PromptContext:
    raw_input: str
    input_kind: InputKind
    dialect: DiagramDialect
    notation: DiagramNotation = DiagramNotation.MERMAID

    @classmethod
    def build(
        cls,
        raw_input: str,
        dialect: DiagramDialect | str | None,
        notation: DiagramNotation | str | None = None,
    ) -> "PromptContext":
        if not isinstance(dialect, DiagramDialect):
            dialect = DiagramDialect.parse(dialect)
        if not isinstance(notation, DiagramNotation):
            notation = DiagramNotation.parse(notation)

        return cls(
            raw_input=raw_input,
            input_kind=detect_input_kind(raw_input),
            dialect=dialect,
            notation=notation,
        )
