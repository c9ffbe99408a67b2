import httpx
import openai

from book_analyzer.analysis.client_base import BaseAnalyzerClient
from book_analyzer.analysis.exceptions import (
    AnalyzerError,
    AnalyzerNetworkError,
    AnalyzerTimeoutError,
)


class OpenAIClientAdapter(BaseAnalyzerClient):
    """Analysis AI client adapter built on the async OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        max_retries: int = 0,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=max_retries,
            base_url=base_url,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "book_analysis",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise AnalyzerTimeoutError(f"AI provider timed out: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise AnalyzerNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalyzerNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AnalyzerError("AI returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise AnalyzerError("AI returned empty response")
        return content
