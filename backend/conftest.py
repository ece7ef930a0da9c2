"""Shared fakes for the generation backend."""

from aiuml.inference.base import GenerationResult, TextGenerationClient
from aiuml.inference.candidates import ModelCandidate


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """
    Stands in for requests.Session. Behaviour is keyed by model name:
      - str           -> 200 with that text
      - int           -> that HTTP status, no body
      - Exception     -> raised from post()
      - FakeResponse  -> returned as-is
    Models not listed answer 500.
    """

    def __init__(self, script: dict | None = None):
        self.script = script or {}
        self.calls = []

    def post(self, url, params=None, headers=None, json=None, timeout=None):
        self.calls.append({
            "url": url,
            "params": params,
            "headers": headers,
            "json": json,
            "timeout": timeout,
        })

        model = url.rsplit("/models/", 1)[-1].split(":", 1)[0]
        outcome = self.script.get(model, 500)

        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, FakeResponse):
            return outcome
        if isinstance(outcome, int):
            return FakeResponse(outcome)
        return FakeResponse(200, gemini_body(outcome))


class ScriptedClient(TextGenerationClient):
    """Returns queued results in order; records every prompt it saw."""

    CANDIDATE = ModelCandidate("v1beta", "fake-model")

    def __init__(self, *outputs):
        self.outputs = list(outputs)
        self.prompts = []

    def generate(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        output = self.outputs.pop(0)

        if isinstance(output, Exception):
            raise output
        if isinstance(output, GenerationResult):
            return output
        return GenerationResult.success(output, self.CANDIDATE)

