from deep_translator import GoogleTranslator
from deep_translator.exceptions import (
    RequestError,
    TooManyRequests,
    TranslationNotFound,
)

from app.translation.base import BaseTranslator
from app.translation.exceptions import TranslationError, TranslationNetworkError


class GoogleTranslatorAdapter(BaseTranslator):
    """Translates lines through Google Translate using deep-translator."""

    def __init__(self) -> None:
        self._clients: dict[tuple[str, str], GoogleTranslator] = {}

    def translate(self, text: str, source: str, target: str) -> str:
        try:
            result = self._client(source, target).translate(text)
        except (RequestError, TooManyRequests) as exc:
            raise TranslationNetworkError(f"Google translate request failed: {exc}") from exc
        except TranslationNotFound as exc:
            raise TranslationError(f"No translation found: {exc}") from exc
        except Exception as exc:
            raise TranslationError(f"Google translate failed: {exc}") from exc

        if not result or not str(result).strip():
            raise TranslationError("Google translate returned an empty result")
        return str(result).strip()

    def _client(self, source: str, target: str) -> GoogleTranslator:
        key = (source, target)
        client = self._clients.get(key)
        if client is None:
            client = GoogleTranslator(source=source, target=target)
            self._clients[key] = client
        return client
