import logging
from dataclasses import dataclass, field
from typing import List, Optional

from aiuml.dsl.sanitizer import error_document, is_structurally_complete, sanitize
from aiuml.errors import ConfigurationError, ExhaustionError
from aiuml.inference.base import TextGenerationClient
from aiuml.inference.gemini_client import GeminiClient
from aiuml.patterns import PatternEntry, PatternExtractor
from aiuml.pipeline.composer import compose_for, render_synthesis_prompt
from aiuml.pipeline.context import DiagramDialect, DiagramNotation, PromptContext

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    diagram: str
    dialect: DiagramDialect
    notation: DiagramNotation
    patterns: List[PatternEntry] = field(default_factory=list)


class AnalysisController:
    """
    Entry point for both pipelines:
      - generate_diagram: extraction stage -> synthesis stage -> sanitizer
      - detect_patterns:  single stage, never empty

    Stateless between calls; the client is the only shared collaborator.
    """

    def __init__(self, client: Optional[TextGenerationClient] = None):
        self.client = client or GeminiClient()
        self.pattern_extractor = PatternExtractor(self.client)

    def _run_stage(self, stage: str, prompt: str) -> str:
        result = self.client.generate(prompt)
        if not result.succeeded:
            raise ExhaustionError(stage, result.error or "generation failed")

        logger.info(
            "[STAGE: %s] Completed via %s",
            stage.upper(),
            result.candidate_used,
            extra={"stage": stage},
        )
        return result.text

    def generate_diagram(
        self,
        requirements_text: str,
        diagram_kind: str | None,
        notation: str | None = None,
    ) -> str:
        """
        Always returns a renderable document. Backend outages come back as a
        single-node error diagram; only ConfigurationError escapes.
        """
        context = PromptContext.build(requirements_text, diagram_kind, notation)
        logger.info(
            "[STAGE: START] Architecture Analysis. Type: %s, Notation: %s, Input: %s",
            context.dialect.value,
            context.notation.value,
            context.input_kind.value,
            extra={"stage": "start"},
        )

        extraction_prompt, synthesis_template = compose_for(context)

        try:
            domain_model = self._run_stage("extraction", extraction_prompt)
            raw = self._run_stage(
                "synthesis",
                render_synthesis_prompt(synthesis_template, domain_model),
            )
        except ConfigurationError:
            raise
        except ExhaustionError as e:
            logger.error(
                "[STAGE: ERROR] %s stage exhausted all candidates: %s",
                e.stage,
                e.detail,
                extra={"stage": e.stage},
            )
            return error_document(f"AI Error: {e.detail}", context.notation)
        except Exception as e:
            logger.exception("[STAGE: ERROR] AI Analysis failed", extra={"stage": "error"})
            return error_document(f"AI SERVICE ERROR: {e}", context.notation)

        document = sanitize(raw, context.dialect, context.notation)

        if not is_structurally_complete(document, context.dialect, context.notation):
            # sanitize() repairs markers, so this only fires on a regression
            logger.warning("[STAGE: SANITIZE] Document still incomplete", extra={"stage": "sanitize"})

        return document

    def detect_patterns(self, requirements_text: str) -> List[PatternEntry]:
        return self.pattern_extractor.detect_patterns(requirements_text)

    def analyze(
        self,
        requirements_text: str,
        diagram_kind: str | None = "CLASS",
        notation: str | None = None,
    ) -> AnalysisResult:
        diagram = self.generate_diagram(requirements_text, diagram_kind, notation)
        patterns = self.detect_patterns(requirements_text)

        return AnalysisResult(
            diagram=diagram,
            dialect=DiagramDialect.parse(diagram_kind),
            notation=DiagramNotation.parse(notation),
            patterns=patterns,
        )
