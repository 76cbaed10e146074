from abc import ABC, abstractmethod
from pathlib import Path

from app.processor.models import CropBox, CropMargins


def compute_crop_box(width: int, height: int, margins: CropMargins) -> CropBox:
    """Return the rectangle left after removing the fixed margin bands.

    Raises:
        ValueError: if the image is not larger than the margins.
    """
    crop_width = width - margins.right
    crop_height = height - margins.top - margins.bottom
    if crop_width <= 0 or crop_height <= 0:
        raise ValueError(
            f"image {width}x{height} is smaller than crop margins "
            f"(top={margins.top}, bottom={margins.bottom}, right={margins.right})"
        )
    return CropBox(left=0, top=margins.top, width=crop_width, height=crop_height)


class BaseImagePreprocessor(ABC):
    """Contract for image cropping adapters."""

    @abstractmethod
    def crop(self, image_path: Path, output_path: Path) -> Path:
        """Crop the image at image_path and write the result to output_path.

        The source file is left in place.

        Returns:
            Path of the written cropped image.

        Raises:
            PreprocessError: if the image cannot be read, is smaller than the
                margins, or the result cannot be written.
        """
