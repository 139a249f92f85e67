from typing import ClassVar

from app.config.settings import Settings
from app.llm.client_base import BaseLLMClient
from app.llm.example_client_adapter import ExampleClientAdapter
from app.llm.invoker import ModelInvoker
from app.llm.openai_client_adapter import OpenAIClientAdapter


class ModelInvokerFactory:
    """Creates a ModelInvoker wired to the configured provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    DEFAULT_MODELS: ClassVar[dict[str, str]] = {
        "gemini": "gemini-2.0-flash",
        "openai": "gpt-4o-mini",
    }

    @classmethod
    def create(cls, settings: Settings) -> ModelInvoker:
        """Create a configured invoker from application settings."""
        provider = settings.llm_provider.lower()
        if provider == "example":
            return ModelInvoker(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                system_prompt=settings.llm_system_prompt,
            )
        return ModelInvoker(
            client=cls._create_client(provider, settings),
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.llm_temperature,
            system_prompt=settings.llm_system_prompt,
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseLLMClient:
        return OpenAIClientAdapter(
            api_key=settings.llm_api_key,
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.llm_base_url.strip()
            if not url:
                raise ValueError(
                    "llm_base_url is required for llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.llm_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        model = settings.llm_model_name.strip() or cls.DEFAULT_MODELS.get(provider, "")
        if not model:
            raise ValueError(f"llm_model_name is required for llm_provider={provider}")
        return model
