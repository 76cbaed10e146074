from pathlib import Path

import pytesseract

from app.ocr.base import BaseTextExtractor
from app.processor.exceptions import ExtractionError


class TesseractAdapter(BaseTextExtractor):
    """Recognizes text with the Tesseract engine via pytesseract."""

    def __init__(self, tesseract_cmd: str = "") -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def extract(self, image_path: Path, language: str) -> str:
        if not image_path.exists():
            raise ExtractionError(f"Image not found: {image_path}")
        try:
            text = pytesseract.image_to_string(str(image_path), lang=language)
        except Exception as exc:
            raise ExtractionError(
                f"tesseract recognition failed for {image_path.name}: {exc}"
            ) from exc
        return text or ""
