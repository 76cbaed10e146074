from typing import ClassVar

from app.config.settings import Settings
from app.translation.base import BaseTranslator
from app.translation.example_adapter import ExampleTranslatorAdapter
from app.translation.google_adapter import GoogleTranslatorAdapter
from app.translation.openai_adapter import OpenAITranslatorAdapter


class TranslatorFactory:
    """Creates the configured translation adapter."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("google", "openai", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseTranslator:
        provider = settings.translation_provider.lower()
        if provider == "google":
            return GoogleTranslatorAdapter()
        if provider == "example":
            return ExampleTranslatorAdapter()
        if provider == "openai":
            return cls._create_openai(settings)
        raise ValueError(
            f"Unknown translation provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _create_openai(cls, settings: Settings) -> BaseTranslator:
        model = settings.translation_openai_model_name.strip()
        if not model:
            raise ValueError(
                "translation_openai_model_name is required for translation_provider=openai"
            )
        base_url = settings.translation_openai_base_url.strip() or None
        return OpenAITranslatorAdapter(
            api_key=settings.translation_openai_api_key,
            model=model,
            timeout_seconds=settings.translation_openai_timeout_seconds or 30,
            base_url=base_url,
        )
