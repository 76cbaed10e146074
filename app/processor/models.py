from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class UploadedImage:
    """An uploaded file persisted to its batch's temporary storage."""

    filename: str
    path: Path
    batch_id: str
    size_bytes: int


@dataclass(frozen=True)
class Row:
    """One extracted line and its translation.

    The two identifier fields are reserved columns of the exported sheet
    and are always blank when produced by the pipeline.
    """

    source_text: str
    translated_text: str
    identifier_a: str = ""
    identifier_b: str = ""


@dataclass(frozen=True)
class CropBox:
    """Crop rectangle in pixels, origin at the top-left corner."""

    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class CropMargins:
    """Bands removed from every image before recognition."""

    top: int = 30
    bottom: int = 50
    right: int = 100


@dataclass
class ImageOutcome:
    """Rows produced for one image, in line order."""

    filename: str
    rows: list[Row] = field(default_factory=list)
    lines_skipped: int = 0


@dataclass
class BatchResult:
    """Summary of one processed batch."""

    batch_id: str
    images_processed: int = 0
    rows_appended: int = 0
    lines_skipped: int = 0
