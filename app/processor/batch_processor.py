import asyncio
import time
from collections.abc import Callable, Sequence
from typing import TypeVar

from app.config.settings import Settings
from app.image.base import BaseImagePreprocessor
from app.image.pillow_adapter import PillowCropAdapter
from app.logging.logger import Log
from app.ocr.base import BaseTextExtractor, split_lines
from app.ocr.tesseract_adapter import TesseractAdapter
from app.processor.accumulator import Accumulator
from app.processor.exceptions import NoFilesError, StageTimeoutError, TooManyFilesError
from app.processor.models import BatchResult, CropMargins, ImageOutcome, Row, UploadedImage
from app.processor.storage import UploadStorage
from app.translation.base import BaseTranslator
from app.translation.exceptions import TranslationError
from app.translation.factory import TranslatorFactory

T = TypeVar("T")


class BatchProcessor:
    """Drives crop -> recognize -> translate over a batch of uploaded images.

    Images are processed in upload order and lines in recognition order.
    Crop and recognition failures are fatal for the rest of the batch, but
    rows already appended for earlier images stay in the accumulator.
    A failed translation only drops its own line.
    """

    def __init__(
        self,
        *,
        preprocessor: BaseImagePreprocessor,
        extractor: BaseTextExtractor,
        translator: BaseTranslator,
        accumulator: Accumulator,
        storage: UploadStorage,
        ocr_language: str = "hin",
        source_language: str = "hi",
        target_language: str = "en",
        max_upload_files: int = 10,
        max_concurrent_images: int = 1,
        stage_timeout_seconds: float = 0.0,
    ) -> None:
        self._preprocessor = preprocessor
        self._extractor = extractor
        self._translator = translator
        self._accumulator = accumulator
        self._storage = storage
        self._ocr_language = ocr_language
        self._source_language = source_language
        self._target_language = target_language
        self._max_upload_files = max_upload_files
        self._max_concurrent_images = max(1, max_concurrent_images)
        self._stage_timeout = stage_timeout_seconds if stage_timeout_seconds > 0 else None

    async def process_uploads(self, files: Sequence[tuple[str, bytes]]) -> BatchResult:
        """Persist a request's files into a new batch and process them.

        Args:
            files: (original filename, content) pairs in upload order.

        Raises:
            NoFilesError: if files is empty.
            TooManyFilesError: if more files than allowed were sent.
            PreprocessOrExtractError: if any image fails to crop or recognize.
        """
        if not files:
            raise NoFilesError("No files uploaded.")
        if len(files) > self._max_upload_files:
            raise TooManyFilesError(
                f"{len(files)} files uploaded, at most {self._max_upload_files} allowed"
            )

        batch_id = self._storage.open_batch()
        try:
            images = [
                self._storage.save(batch_id, filename, content)
                for filename, content in files
            ]
            return await self.process_batch(images, batch_id=batch_id)
        finally:
            self._storage.finish_batch(batch_id)

    async def process_batch(
        self,
        images: Sequence[UploadedImage],
        batch_id: str = "",
    ) -> BatchResult:
        """Run the pipeline over images and append the resulting rows.

        Raises:
            NoFilesError: if images is empty.
            PreprocessOrExtractError: on the first image that fails to crop
                or recognize. Rows from earlier images are kept.
        """
        if not images:
            raise NoFilesError("No files uploaded.")

        batch_id = batch_id or images[0].batch_id
        result = BatchResult(batch_id=batch_id)
        Log.info(f"Processing batch {batch_id}: {len(images)} images")
        started = time.monotonic()

        try:
            if self._max_concurrent_images == 1:
                for image in images:
                    outcome = await self._process_image(image)
                    self._commit_outcome(outcome, result)
            else:
                await self._process_concurrently(images, result)
        except Exception as exc:
            Log.error(
                f"Batch {batch_id} aborted after {result.images_processed} of "
                f"{len(images)} images ({result.rows_appended} rows kept): {exc}"
            )
            raise

        Log.info(
            f"Batch {batch_id} done in {time.monotonic() - started:.1f}s: "
            f"{result.rows_appended} rows appended, {result.lines_skipped} lines skipped"
        )
        return result

    async def _process_concurrently(
        self,
        images: Sequence[UploadedImage],
        result: BatchResult,
    ) -> None:
        """Fan out across images, then append outcomes in upload order.

        On failure, outcomes of images before the first failing index are
        appended and that failure is raised, matching sequential processing.
        Images after a failing one are cancelled since they can no longer be
        committed.
        """
        semaphore = asyncio.Semaphore(self._max_concurrent_images)
        tasks: list[asyncio.Task[ImageOutcome]] = []

        async def bounded(index: int, image: UploadedImage) -> ImageOutcome:
            async with semaphore:
                try:
                    return await self._process_image(image)
                except Exception:
                    for later in tasks[index + 1:]:
                        later.cancel()
                    raise

        tasks.extend(
            asyncio.create_task(bounded(index, image))
            for index, image in enumerate(images)
        )
        try:
            for task in tasks:
                self._commit_outcome(await task, result)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _process_image(self, image: UploadedImage) -> ImageOutcome:
        cropped_path = image.path.with_name(
            f"trimmed-{int(time.time() * 1000)}-{image.path.name}"
        )
        await self._run_stage(
            f"crop {image.filename}", self._preprocessor.crop, image.path, cropped_path
        )
        raw_text = await self._run_stage(
            f"recognize {image.filename}",
            self._extractor.extract,
            cropped_path,
            self._ocr_language,
        )
        lines = split_lines(raw_text)
        Log.info(f"Recognized {len(lines)} lines in {image.filename}")

        outcome = ImageOutcome(filename=image.filename)
        for line in lines:
            translated = await self._translate_line(line, image.filename)
            if translated is None:
                outcome.lines_skipped += 1
                continue
            outcome.rows.append(Row(source_text=line, translated_text=translated))
        return outcome

    async def _translate_line(self, line: str, filename: str) -> str | None:
        """Translate one line; None means the line is dropped."""
        try:
            return await self._run_stage(
                f"translate line of {filename}",
                self._translator.translate,
                line,
                self._source_language,
                self._target_language,
            )
        except StageTimeoutError as exc:
            Log.warning(f"Skipping line of {filename}: {exc}")
        except TranslationError as exc:
            Log.warning(f"Skipping line of {filename}: translation failed: {exc}")
        return None

    async def _run_stage(self, label: str, func: Callable[..., T], *args: object) -> T:
        """Run a blocking capability call off the event loop."""
        call = asyncio.to_thread(func, *args)
        if self._stage_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._stage_timeout)
        except asyncio.TimeoutError as exc:
            raise StageTimeoutError(
                f"{label} exceeded {self._stage_timeout:g}s"
            ) from exc

    def _commit_outcome(self, outcome: ImageOutcome, result: BatchResult) -> None:
        for row in outcome.rows:
            self._accumulator.append(row, batch_id=result.batch_id)
        result.images_processed += 1
        result.rows_appended += len(outcome.rows)
        result.lines_skipped += outcome.lines_skipped
        Log.info(
            f"Image {outcome.filename}: {len(outcome.rows)} rows appended, "
            f"{outcome.lines_skipped} lines skipped"
        )


def build_batch_processor(
    settings: Settings,
    accumulator: Accumulator,
    storage: UploadStorage,
) -> BatchProcessor:
    """Build a BatchProcessor with the configured adapters."""
    margins = CropMargins(
        top=settings.crop_top_px,
        bottom=settings.crop_bottom_px,
        right=settings.crop_right_px,
    )
    return BatchProcessor(
        preprocessor=PillowCropAdapter(margins),
        extractor=TesseractAdapter(settings.tesseract_cmd),
        translator=TranslatorFactory.create(settings),
        accumulator=accumulator,
        storage=storage,
        ocr_language=settings.ocr_language,
        source_language=settings.translation_source_language,
        target_language=settings.translation_target_language,
        max_upload_files=settings.max_upload_files,
        max_concurrent_images=settings.max_concurrent_images,
        stage_timeout_seconds=settings.stage_timeout_seconds,
    )
