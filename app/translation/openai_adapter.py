import httpx
import openai

from app.translation.base import BaseTranslator
from app.translation.exceptions import TranslationError, TranslationNetworkError

SYSTEM_PROMPT = (
    "You are a translator of scanned form fields. Translate the user's line "
    "from language '{source}' to language '{target}'. Reply with the "
    "translation only, on a single line, without quotes or explanations."
)


class OpenAITranslatorAdapter(BaseTranslator):
    """Line translator built on an OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._model = model
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def translate(self, text: str, source: str, target: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=0.0,
                messages=[
                    {
                        "role": "system",
                        "content": SYSTEM_PROMPT.format(source=source, target=target),
                    },
                    {"role": "user", "content": text},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise TranslationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise TranslationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise TranslationError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise TranslationError("AI returned empty response")
        return content.strip()
