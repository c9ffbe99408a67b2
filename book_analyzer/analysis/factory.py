from typing import ClassVar

from book_analyzer.analysis.analyzer import SemanticAnalyzer
from book_analyzer.analysis.base import BaseAnalyzer
from book_analyzer.analysis.example_client_adapter import ExampleClientAdapter
from book_analyzer.analysis.openai_client_adapter import OpenAIClientAdapter
from book_analyzer.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured semantic analyzer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analyzer_provider.lower()
        if provider == "example":
            return SemanticAnalyzer(
                client=ExampleClientAdapter(),
                model="example",
                timeout_seconds=settings.analyzer_timeout_seconds,
                temperature=0.0,
            )
        base_url = cls._resolve_base_url(provider, settings)
        timeout_seconds = settings.analyzer_timeout_seconds
        if timeout_seconds is None:
            raise ValueError(
                f"analyzer_timeout_seconds must be configured for analyzer_provider={provider}"
            )
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=timeout_seconds,
            max_retries=settings.analyzer_max_retries,
            base_url=base_url,
        )
        return SemanticAnalyzer(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            timeout_seconds=timeout_seconds,
            temperature=settings.analyzer_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.analyzer_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "analyzer_openai_compatible_base_url is required for "
                    "analyzer_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown analyzer provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.analyzer_openai_api_key,
            "openai_compatible": settings.analyzer_openai_compatible_api_key,
            "openrouter": settings.analyzer_openrouter_api_key,
            "groq": settings.analyzer_groq_api_key,
            "together": settings.analyzer_together_api_key,
            "deepseek": settings.analyzer_deepseek_api_key,
            "ollama": settings.analyzer_ollama_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.analyzer_openai_model_name,
            "openai_compatible": settings.analyzer_openai_compatible_model_name,
            "openrouter": settings.analyzer_openrouter_model_name,
            "groq": settings.analyzer_groq_model_name,
            "together": settings.analyzer_together_model_name,
            "deepseek": settings.analyzer_deepseek_model_name,
            "ollama": settings.analyzer_ollama_model_name,
        }
        return key_map.get(provider, "") or ""
