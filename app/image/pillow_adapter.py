from pathlib import Path

from PIL import Image, UnidentifiedImageError

from app.image.base import BaseImagePreprocessor, compute_crop_box
from app.processor.exceptions import PreprocessError
from app.processor.models import CropMargins


class PillowCropAdapter(BaseImagePreprocessor):
    """Crops fixed margin bands from an image using Pillow."""

    def __init__(self, margins: CropMargins | None = None) -> None:
        self._margins = margins if margins is not None else CropMargins()

    def crop(self, image_path: Path, output_path: Path) -> Path:
        try:
            with Image.open(image_path) as img:
                width, height = img.size
                box = compute_crop_box(width, height, self._margins)
                cropped = img.crop(
                    (box.left, box.top, box.left + box.width, box.top + box.height)
                )
                cropped.save(output_path, format=img.format)
        except ValueError as exc:
            raise PreprocessError(f"cannot crop {image_path.name}: {exc}") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise PreprocessError(f"Pillow crop failed for {image_path.name}: {exc}") from exc
        return output_path
