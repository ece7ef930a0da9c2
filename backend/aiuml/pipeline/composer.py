"""
Prompt Composer

Builds the two prompts of the diagram pipeline:
  1. extraction  - requirements/code -> entity & relationship list
  2. synthesis   - entity list -> diagram source in the target dialect

Synthesis templates come from a closed table keyed by (notation, dialect).
Each template embeds strict syntax rules so that the raw completion is
already close to well-formed before sanitization.
"""

from typing import Dict, Tuple

from aiuml.pipeline.context import (
    DiagramDialect,
    DiagramNotation,
    InputKind,
    PromptContext,
)


DOMAIN_MODEL_SLOT = "{domain_model}"

FRAMING = {
    InputKind.CODE: "Identify classes, interfaces, and methods from this code: ",
    InputKind.PROSE: "Extract key entities and relationships from these requirements: ",
}


# ============================================================
# MERMAID RULES
# ============================================================

MERMAID_RULES: Dict[DiagramDialect, str] = {
    DiagramDialect.CLASS: (
        "Start with 'classDiagram'. STRICT UML RULES: "
        "\n1. Classes implementing Interfaces MUST use 'Class ..|> Interface' (dashed line with arrow). "
        "\n2. Inheritance uses 'Child --|> Parent'. "
        "\n3. Arrow direction MUST be FROM implementation TO definition. "
        "\n4. Use 'class ClassName { type attr }'. No spaces in names."
    ),
    DiagramDialect.SEQUENCE: (
        "Start with 'sequenceDiagram'. "
        "\n1. Declare every 'participant' before the first message. "
        "\n2. Use '->>' for synchronous calls and '-->>' for asynchronous calls and returns."
    ),
    DiagramDialect.USE_CASE: (
        "Use 'graph LR'. Represent actors as 'Actor((Actor Name))' "
        "and usecases as 'UC1([Use Case Name])'. Link them with arrows '-->'."
    ),
    DiagramDialect.GENERIC: "Start with 'graph TD'.",
}


# ============================================================
# PLANTUML RULES
# ============================================================

PLANTUML_RULES: Dict[DiagramDialect, str] = {
    DiagramDialect.CLASS: (
        "Start with '@startuml' and end with '@enduml'. STRICT UML RULES: "
        "\n1. Classes implementing Interfaces MUST use 'Class ..|> Interface'. "
        "\n2. Inheritance uses 'Child --|> Parent'. "
        "\n3. Arrow direction MUST be FROM implementation TO definition. "
        "\n4. Use 'class ClassName { type attr }' and 'interface Name'. No spaces in names."
    ),
    DiagramDialect.SEQUENCE: (
        "Start with '@startuml' and end with '@enduml'. "
        "\n1. Declare every 'participant' (or 'actor') before the first message. "
        "\n2. Use '->' for synchronous calls and '-->' for asynchronous calls and returns."
    ),
    DiagramDialect.USE_CASE: (
        "Start with '@startuml' and end with '@enduml'. "
        "Declare actors as 'actor \"Actor Name\" as A1' and use cases as "
        "'usecase \"Use Case Name\" as UC1'. Link them with arrows '-->'."
    ),
    DiagramDialect.GENERIC: (
        "Start with '@startuml' and end with '@enduml'. "
        "Use a simple activity flow with 'start', ':Step;' and 'stop'."
    ),
}


NOTATION_LABEL = {
    DiagramNotation.MERMAID: "Mermaid.js",
    DiagramNotation.PLANTUML: "PlantUML",
}


def _synthesis_template(notation: DiagramNotation, dialect: DiagramDialect) -> str:
    rules = PLANTUML_RULES if notation is DiagramNotation.PLANTUML else MERMAID_RULES
    instructions = rules.get(dialect, rules[DiagramDialect.GENERIC])

    return (
        f"Generate {NOTATION_LABEL[notation]} code. {instructions}"
        f"\nModel: {DOMAIN_MODEL_SLOT}"
        "\nOutput ONLY raw code. No markdown."
    )


SYNTHESIS_TEMPLATES: Dict[Tuple[DiagramNotation, DiagramDialect], str] = {
    (notation, dialect): _synthesis_template(notation, dialect)
    for notation in DiagramNotation
    for dialect in DiagramDialect
}


def build_extraction_prompt(context: PromptContext) -> str:
    return (
        "Act as a Senior Architect. "
        + FRAMING[context.input_kind]
        + context.raw_input
        + "\nOutput ONLY a structured list of entities and relationships. No prose."
    )


def compose(
    raw_input: str,
    dialect: DiagramDialect | str | None,
    notation: DiagramNotation | str | None = None,
) -> Tuple[str, str]:
    """
    Returns (extraction_prompt, synthesis_template).
    Pure text transformation; unknown dialects fall back to GENERIC.
    """
    context = PromptContext.build(raw_input, dialect, notation)
    return compose_for(context)


def compose_for(context: PromptContext) -> Tuple[str, str]:
    return (
        build_extraction_prompt(context),
        SYNTHESIS_TEMPLATES[(context.notation, context.dialect)],
    )


def render_synthesis_prompt(template: str, domain_model: str) -> str:
    return template.replace(DOMAIN_MODEL_SLOT, domain_model)
