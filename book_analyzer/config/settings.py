from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    extract_cover: bool = True
    max_text_length: int = Field(default=200_000, ge=1000)

    analyzer_provider: str = "openai"
    # Required for every provider that makes network calls.
    analyzer_timeout_seconds: float | None = Field(default=None, gt=0)
    analyzer_max_retries: int = Field(default=0, ge=0)
    analyzer_temperature: float = Field(default=0.5, ge=0.0, le=2.0)

    analyzer_openai_api_key: str = ""
    analyzer_openai_model_name: str = "gpt-4o-mini"

    analyzer_openai_compatible_base_url: str = ""
    analyzer_openai_compatible_api_key: str = ""
    analyzer_openai_compatible_model_name: str = ""

    analyzer_openrouter_api_key: str = ""
    analyzer_openrouter_model_name: str = ""
    analyzer_groq_api_key: str = ""
    analyzer_groq_model_name: str = ""
    analyzer_together_api_key: str = ""
    analyzer_together_model_name: str = ""
    analyzer_deepseek_api_key: str = ""
    analyzer_deepseek_model_name: str = ""
    analyzer_ollama_api_key: str = "ollama"
    analyzer_ollama_model_name: str = ""
