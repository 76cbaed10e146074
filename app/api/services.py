from dataclasses import dataclass
from pathlib import Path

from app.config.settings import Settings
from app.export.manager import ExportManager, build_export_manager
from app.processor.accumulator import Accumulator
from app.processor.batch_processor import BatchProcessor, build_batch_processor
from app.processor.storage import UploadStorage


@dataclass
class Services:
    """Process-wide collaborators shared by all requests."""

    settings: Settings
    accumulator: Accumulator
    storage: UploadStorage
    batch_processor: BatchProcessor
    export_manager: ExportManager


def build_services(settings: Settings, upload_root: Path | None = None) -> Services:
    """Wire the accumulator, storage, pipeline and exporter from settings."""
    accumulator = Accumulator()
    storage = UploadStorage(upload_root if upload_root is not None else Path(settings.upload_dir))
    return Services(
        settings=settings,
        accumulator=accumulator,
        storage=storage,
        batch_processor=build_batch_processor(settings, accumulator, storage),
        export_manager=build_export_manager(settings, accumulator, storage),
    )
