"""
Tests for design pattern detection - parsing and fallback
"""

from conftest import ScriptedClient
from aiuml.inference.base import GenerationResult
from aiuml.patterns import (
    DEFAULT_PATTERNS,
    PatternEntry,
    PatternExtractor,
    build_pattern_prompt,
    parse_pattern_line,
    parse_pattern_lines,
)


def test_pipe_and_colon_lines_parsed_in_order():
    text = "Singleton | Ensures one instance\nObserver: notifies listeners\ngarbage line"

    assert parse_pattern_lines(text) == [
        PatternEntry("Singleton", "Ensures one instance"),
        PatternEntry("Observer", "notifies listeners"),
    ]


def test_list_markers_stripped():
    assert parse_pattern_line("1. Factory Method | Creates objects") == PatternEntry(
        "Factory Method", "Creates objects"
    )
    assert parse_pattern_line("- Adapter | Bridges interfaces") == PatternEntry(
        "Adapter", "Bridges interfaces"
    )
    assert parse_pattern_line("• **Facade** | Simplifies a subsystem") == PatternEntry(
        "Facade", "Simplifies a subsystem"
    )


def test_digits_in_pattern_name_are_kept():
    assert parse_pattern_line("3-Tier Architecture | Separates UI, logic and data") == PatternEntry(
        "3-Tier Architecture", "Separates UI, logic and data"
    )
    assert parse_pattern_line("2. 3-Tier Architecture | Layers") == PatternEntry("3-Tier Architecture", "Layers")
    assert parse_pattern_line("(1) Strategy | Swaps algorithms") == PatternEntry("Strategy", "Swaps algorithms")


def test_pipe_takes_precedence_over_colon():
    entry = parse_pattern_line("Repository | Note: abstracts persistence")

    assert entry == PatternEntry("Repository", "Note: abstracts persistence")


def test_lines_without_both_sides_are_dropped():
    assert parse_pattern_line("Just some prose") is None
    assert parse_pattern_line("Here are the patterns:") is None
    assert parse_pattern_line("| empty name") is None
    assert parse_pattern_line("   ") is None


def test_duplicates_are_kept():
    entries = parse_pattern_lines("Strategy | a\nStrategy | b")

    assert [e.explanation for e in entries] == ["a", "b"]


def test_prompt_asks_for_three_pipe_delimited_lines():
    prompt = build_pattern_prompt("A library lends books.")

    assert prompt.startswith("Act as a Software Architecture expert.")
    assert "A library lends books." in prompt
    assert "3 most relevant design patterns" in prompt
    assert "Pattern Name | Brief Explanation" in prompt


def test_detect_patterns_uses_single_call():
    client = ScriptedClient("1. Builder | Step-wise construction\n2. Proxy | Controls access")

    entries = PatternExtractor(client).detect_patterns("Users build reports.")

    assert entries == [
        PatternEntry("Builder", "Step-wise construction"),
        PatternEntry("Proxy", "Controls access"),
    ]
    assert len(client.prompts) == 1


def test_unparseable_output_falls_back_to_defaults():
    client = ScriptedClient("I cannot help with that.\nSorry.")

    entries = PatternExtractor(client).detect_patterns("anything")

    assert entries == list(DEFAULT_PATTERNS)
    assert [e.name for e in entries] == ["Strategy", "Singleton", "Observer"]


def test_backend_failure_falls_back_to_defaults():
    client = ScriptedClient(GenerationResult.failure("All Gemini models failed"))

    entries = PatternExtractor(client).detect_patterns("anything")

    assert entries == list(DEFAULT_PATTERNS)


def test_fallback_list_is_a_fresh_copy():
    first = PatternExtractor(ScriptedClient("nope")).detect_patterns("x")
    first.clear()

    second = PatternExtractor(ScriptedClient("nope")).detect_patterns("x")

    assert len(second) == 3
