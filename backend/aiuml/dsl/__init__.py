# Diagram DSL module
# Cleans raw model output into Mermaid / PlantUML documents

from aiuml.dsl.sanitizer import sanitize, is_structurally_complete, error_document

__all__ = [
    "sanitize",
    "is_structurally_complete",
    "error_document",
]
