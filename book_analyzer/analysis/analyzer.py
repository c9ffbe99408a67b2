"""AI-powered book classification and summary."""

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from book_analyzer.analysis.base import BaseAnalyzer
from book_analyzer.analysis.client_base import BaseAnalyzerClient
from book_analyzer.analysis.exceptions import AnalyzerError, AnalyzerTimeoutError
from book_analyzer.analysis.models import SemanticAnalysis
from book_analyzer.analysis.prompt_loader import JSON_SCHEMA, PROMPT_TEMPLATE, load_prompt_file
from book_analyzer.logging.logger import Log

REQUIRED_FIELDS = ("summary", "lcc", "bisac", "lcsh", "fieldOfStudy", "discipline")
DEFAULT_SYSTEM_PROMPT = (
    "You are a precise cataloging assistant. Return only JSON matching the schema."
)

_FENCED_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


class SemanticAnalyzer(BaseAnalyzer):
    """Classifies and summarizes book text using an AI provider."""

    def __init__(
        self,
        *,
        client: BaseAnalyzerClient,
        model: str,
        timeout_seconds: float | None,
        temperature: float = 0.5,
        prompt_dir: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._timeout_seconds = timeout_seconds
        self._temperature = temperature
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_file(PROMPT_TEMPLATE, prompt_dir)
        self._json_schema = load_prompt_file(JSON_SCHEMA, prompt_dir)
        self._json_schema_dict = json.loads(self._json_schema)

    async def analyze(self, text: str) -> SemanticAnalysis:
        """Send the book text to the provider and return its analysis."""
        prompt = self._build_prompt(text)
        Log.debug(f"Analysis prompt: {len(prompt)} chars")

        raw_response = await self._call_ai(prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        result = self._build_result(self._parse_json(raw_response))
        Log.info(
            f"Semantic analysis complete: fieldOfStudy={result.field_of_study!r}, "
            f"discipline={result.discipline!r}"
        )
        return result

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            book_text=text,
            json_schema=self._json_schema,
        )

    async def _call_ai(self, prompt: str) -> str:
        call = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )
        if self._timeout_seconds is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise AnalyzerTimeoutError(
                f"Analyzer did not respond within {self._timeout_seconds} seconds"
            ) from exc

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if not (cleaned.startswith("{") and cleaned.endswith("}")):
            fenced = _FENCED_RE.search(cleaned)
            if fenced:
                cleaned = fenced.group(1).strip()
            else:
                first, last = cleaned.find("{"), cleaned.rfind("}")
                if first >= 0 and last > first:
                    cleaned = cleaned[first:last + 1]

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise AnalyzerError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise AnalyzerError("JSON response must be an object")
        return parsed

    @staticmethod
    def _build_result(data: dict[str, Any]) -> SemanticAnalysis:
        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise AnalyzerError(f"Malformed analysis response, missing: {', '.join(missing)}")
        if not isinstance(data["summary"], str):
            raise AnalyzerError("Malformed analysis response: 'summary' must be a string")
        return SemanticAnalysis(
            summary=data["summary"],
            lcc=data["lcc"],
            bisac=data["bisac"],
            lcsh=data["lcsh"],
            field_of_study=data["fieldOfStudy"],
            discipline=data["discipline"],
        )
