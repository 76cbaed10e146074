from abc import ABC, abstractmethod


class BaseTranslator(ABC):
    """Contract for all line translation adapters."""

    @abstractmethod
    def translate(self, text: str, source: str, target: str) -> str:
        """Translate one line of text.

        Args:
            text: A single trimmed, non-empty line.
            source: Source language tag, e.g. "hi".
            target: Target language tag, e.g. "en".

        Returns:
            The translated line.

        Raises:
            TranslationError: on any failure, including an empty result.
        """
