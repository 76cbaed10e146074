from app.translation.base import BaseTranslator
from app.translation.exceptions import TranslationError
from app.translation.factory import TranslatorFactory

__all__ = ["BaseTranslator", "TranslationError", "TranslatorFactory"]
