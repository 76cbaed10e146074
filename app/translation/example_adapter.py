"""Offline translator adapter.

Makes no network calls. Useful for local development without a translation
provider and as a template for new adapters: implement BaseTranslator and
register the provider in TranslatorFactory.
"""

from app.translation.base import BaseTranslator
from app.translation.exceptions import TranslationError


class ExampleTranslatorAdapter(BaseTranslator):
    """Returns the line tagged with the target language, e.g. "[en] text"."""

    def translate(self, text: str, source: str, target: str) -> str:
        _ = source
        if not text.strip():
            raise TranslationError("Nothing to translate")
        return f"[{target}] {text.strip()}"
