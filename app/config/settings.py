from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = 20

    llm_provider: str = "gemini"
    llm_api_key: str = ""
    llm_model_name: str = ""
    llm_base_url: str = ""
    llm_timeout_seconds: int = 30
    llm_temperature: float = 0.0
    llm_system_prompt: str = (
        "You are a document triage assistant. Always answer with a single JSON object."
    )
