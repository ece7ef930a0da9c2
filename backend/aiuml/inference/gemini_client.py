import logging
from typing import Optional, Sequence

import requests

from aiuml.config import GEMINI_API_KEY, GEMINI_BASE_URL, GEMINI_TIMEOUT
from aiuml.errors import ConfigurationError, TransientProviderError
from aiuml.inference.base import GenerationResult, TextGenerationClient
from aiuml.inference.candidates import DEFAULT_CANDIDATES, ModelCandidate

logger = logging.getLogger(__name__)

PLACEHOLDER_KEYS = {"", "unset", "changeme", "none", "null"}


def is_placeholder_key(api_key: Optional[str]) -> bool:
    """
    True for keys that were never really configured:
      - blank / None
      - "UNSET", "changeme", ...
      - unresolved templates like "${GEMINI_API_KEY}" or "<your-key>"
    """
    if api_key is None:
        return True

    key = api_key.strip()
    if key.lower() in PLACEHOLDER_KEYS:
        return True
    if key.startswith("${") or (key.startswith("<") and key.endswith(">")):
        return True
    return key.lower().startswith("your-api-key") or key.lower().startswith("your_api_key")


def mask_key(api_key: str) -> str:
    if len(api_key) > 8:
        return f"{api_key[:4]}...{api_key[-4:]}"
    return "****"


class GeminiClient(TextGenerationClient):
    """
    Calls the Gemini generateContent endpoint, walking an ordered list of
    (api version, model) candidates until one returns usable text.
    """

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        candidates: Sequence[ModelCandidate] = DEFAULT_CANDIDATES,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = GEMINI_TIMEOUT,
        session=None,
    ):
        self.api_key = api_key
        self.candidates = tuple(candidates)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # None posts through requests.post, one connection per call
        self.session = session

    def ensure_configured(self) -> None:
        if is_placeholder_key(self.api_key):
            logger.error(
                "[CRITICAL] GEMINI_API_KEY is not configured!",
                extra={"stage": "config"},
            )
            raise ConfigurationError("Gemini API key is missing.")

        logger.debug("[AUTH] Using key: %s", mask_key(self.api_key), extra={"stage": "config"})

    def endpoint(self, candidate: ModelCandidate) -> str:
        return f"{self.base_url}/{candidate.api_version}/models/{candidate.model}:generateContent"

    def generate(self, prompt: str) -> GenerationResult:
        self.ensure_configured()

        if not self.candidates:
            return GenerationResult.failure("No Gemini model candidates configured.")

        last_reason = "no response"
        for candidate in self.candidates:
            logger.info("[ATTEMPT] Calling %s...", candidate, extra={"stage": "generate"})
            try:
                text = self._call(candidate, prompt)
            except TransientProviderError as e:
                last_reason = str(e)
                if e.status_code is not None:
                    logger.warning(
                        "[STATUS] %s returned %s",
                        candidate,
                        e.status_code,
                        extra={"stage": "generate"},
                    )
                else:
                    logger.error("[ERROR] %s", e, extra={"stage": "generate"})
                continue

            logger.info("[SUCCESS] Response from %s", candidate, extra={"stage": "generate"})
            return GenerationResult.success(text, candidate)

        return GenerationResult.failure(
            f"All Gemini models failed ({len(self.candidates)} candidates tried). "
            f"Last error: {last_reason}. Check API key project permissions."
        )

    def _call(self, candidate: ModelCandidate, prompt: str) -> str:
        # Key goes both in the query string and the header; different
        # API revisions accept one or the other.
        try:
            http = self.session if self.session is not None else requests
            response = http.post(
                self.endpoint(candidate),
                params={"key": self.api_key},
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.api_key,
                },
                json={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransientProviderError(candidate, f"transport error: {e}") from e

        if not 200 <= response.status_code < 300:
            raise TransientProviderError(
                candidate,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            text = extract_text(response.json())
        except ValueError as e:
            raise TransientProviderError(candidate, f"malformed response: {e}") from e

        if not text.strip():
            raise TransientProviderError(candidate, "empty response text")

        return text


def extract_text(payload: dict) -> str:
    """
    Pull candidates[0].content.parts[*].text out of a generateContent body.
    Raises ValueError when the structure is missing.
    """
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError("no candidates[0].content.parts") from e

    return "".join(
        part.get("text", "") for part in parts if isinstance(part, dict)
    )
