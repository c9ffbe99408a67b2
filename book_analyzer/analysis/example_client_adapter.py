"""Offline analysis provider.

Serves a canned analysis without touching the network, which keeps local runs
and the integration tests deterministic. New providers implement the same
``BaseAnalyzerClient`` contract and are registered in ``AnalyzerFactory``.
"""

import json
from collections.abc import Mapping

from book_analyzer.analysis.client_base import BaseAnalyzerClient
from book_analyzer.analysis.exceptions import AnalyzerError
from book_analyzer.logging.logger import Log

OFFLINE_ANALYSIS: Mapping[str, object] = {
    "summary": "Offline analysis: no summary was generated for this book.",
    "lcc": [],
    "bisac": [],
    "lcsh": [],
    "fieldOfStudy": "Humanities",
    "discipline": "Languages & Literature",
}


class ExampleClientAdapter(BaseAnalyzerClient):
    """Returns ``response`` (default ``OFFLINE_ANALYSIS``) for every request.

    The canned response is checked against the schema's ``required`` keys so a
    stale fixture fails loudly instead of producing a half-empty record.
    """

    def __init__(self, response: Mapping[str, object] | None = None) -> None:
        self._response = dict(OFFLINE_ANALYSIS if response is None else response)

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        required = json_schema.get("required") or []
        missing = [key for key in required if key not in self._response]
        if missing:
            raise AnalyzerError(f"Offline response is missing: {', '.join(missing)}")
        Log.debug(f"Offline analysis for {model}: prompt of {len(user_prompt)} chars ignored")
        return json.dumps(self._response)
