from abc import ABC, abstractmethod
from pathlib import Path


def split_lines(raw_text: str) -> list[str]:
    """Split recognized text into trimmed lines, dropping blank ones."""
    return [line.strip() for line in raw_text.splitlines() if line.strip()]


class BaseTextExtractor(ABC):
    """Contract for all text recognition adapters."""

    @abstractmethod
    def extract(self, image_path: Path, language: str) -> str:
        """Recognize the text in an image.

        Args:
            image_path: Path to a (cropped) image file.
            language: Recognition language tag, e.g. "hin".

        Returns:
            The recognized text as one string, lines separated by newlines.

        Raises:
            ExtractionError: if recognition fails for any reason.
        """
