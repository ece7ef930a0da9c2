"""Tests for prompt composition and dialect resolution"""

import pytest

from aiuml.pipeline.composer import (
    DOMAIN_MODEL_SLOT,
    SYNTHESIS_TEMPLATES,
    compose,
    render_synthesis_prompt,
)
from aiuml.pipeline.context import (
    DiagramDialect,
    DiagramNotation,
    InputKind,
    PromptContext,
    detect_input_kind,
)


@pytest.mark.parametrize(
    "text",
    [
        "public class OrderService { }",
        "import java.util.List;",
        "class Order:\n    pass",
        "def place_order(order):\n    return order",
        "interface Payable",
    ],
)
def test_code_input_detected(text):
    assert detect_input_kind(text) is InputKind.CODE


@pytest.mark.parametrize(
    "text",
    [
        "Customers place orders and pay by card.",
        "The class diagram should show users and their carts.",
        "",
    ],
)
def test_prose_input_detected(text):
    assert detect_input_kind(text) is InputKind.PROSE


@pytest.mark.parametrize(
    "value, expected",
    [
        ("class", DiagramDialect.CLASS),
        ("Sequence", DiagramDialect.SEQUENCE),
        ("USE_CASE", DiagramDialect.USE_CASE),
        ("usecase", DiagramDialect.USE_CASE),
        ("use-case", DiagramDialect.USE_CASE),
        ("use case", DiagramDialect.USE_CASE),
        ("activity", DiagramDialect.GENERIC),
        ("", DiagramDialect.GENERIC),
        (None, DiagramDialect.GENERIC),
    ],
)
def test_dialect_parse(value, expected):
    assert DiagramDialect.parse(value) is expected


def test_notation_parse_defaults_to_mermaid():
    assert DiagramNotation.parse("PlantUML") is DiagramNotation.PLANTUML
    assert DiagramNotation.parse("puml") is DiagramNotation.PLANTUML
    assert DiagramNotation.parse("d2") is DiagramNotation.MERMAID
    assert DiagramNotation.parse(None) is DiagramNotation.MERMAID


def test_extraction_prompt_framing_follows_input_kind():
    code_prompt, _ = compose("public class A {}", "CLASS")
    prose_prompt, _ = compose("Users borrow books.", "CLASS")

    assert code_prompt.startswith("Act as a Senior Architect. Identify classes, interfaces, and methods")
    assert prose_prompt.startswith("Act as a Senior Architect. Extract key entities and relationships")
    assert "Users borrow books." in prose_prompt
    assert prose_prompt.endswith("No prose.")


def test_class_template_rules():
    _, template = compose("Users borrow books.", "class")

    assert "classDiagram" in template
    assert "..|>" in template
    assert "--|>" in template
    assert "No spaces in names" in template
    assert DOMAIN_MODEL_SLOT in template


def test_sequence_template_rules():
    _, template = compose("x", "SEQUENCE")

    assert "sequenceDiagram" in template
    assert "participant" in template
    assert "'->>'" in template and "'-->>'" in template


def test_use_case_template_rules():
    _, template = compose("x", "USE_CASE")

    assert "graph LR" in template
    assert "Actor((Actor Name))" in template
    assert "UC1([Use Case Name])" in template


def test_unknown_dialect_falls_back_to_generic():
    _, template = compose("x", "deployment")

    assert template == SYNTHESIS_TEMPLATES[(DiagramNotation.MERMAID, DiagramDialect.GENERIC)]
    assert "graph TD" in template


def test_plantuml_templates_mention_markers():
    for dialect in DiagramDialect:
        template = SYNTHESIS_TEMPLATES[(DiagramNotation.PLANTUML, dialect)]
        assert "@startuml" in template and "@enduml" in template


def test_render_synthesis_prompt_fills_domain_model():
    _, template = compose("x", "CLASS")

    prompt = render_synthesis_prompt(template, "Order -> Customer")

    assert "Model: Order -> Customer" in prompt
    assert DOMAIN_MODEL_SLOT not in prompt
    # class body braces in the rules survive
    assert "{ type attr }" in prompt


def test_prompt_context_is_immutable():
    context = PromptContext.build("Users borrow books.", "CLASS")

    with pytest.raises(AttributeError):
        context.raw_input = "other"
