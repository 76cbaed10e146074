import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from app.config.settings import Settings
from app.export.base import BaseSpreadsheetWriter
from app.export.exceptions import DeliveryError, EmptyAccumulatorError
from app.export.factory import SpreadsheetWriterFactory
from app.logging.logger import Log
from app.processor.accumulator import Accumulator
from app.processor.storage import UploadStorage


@dataclass(frozen=True)
class ExportArtifact:
    """A spreadsheet generated from one accumulator snapshot.

    Lives for one download attempt only; a retry prepares a new one.
    """

    content: bytes
    filename: str
    media_type: str
    row_count: int
    through_seq: int


class ExportManager:
    """Serializes the accumulator and clears it once delivery succeeded.

    The clear is one-directional: rows and temp files are released only
    after ``send`` completes without error. A failed delivery leaves both
    untouched so the client can retry.
    """

    def __init__(
        self,
        *,
        accumulator: Accumulator,
        storage: UploadStorage,
        writer: BaseSpreadsheetWriter,
        filename: str,
        sheet_name: str = "Data",
    ) -> None:
        self._accumulator = accumulator
        self._storage = storage
        self._writer = writer
        self._filename = filename
        self._sheet_name = sheet_name

    def prepare(self) -> ExportArtifact:
        """Build a fresh artifact from the current accumulator contents.

        Raises:
            EmptyAccumulatorError: if there is nothing to export.
            SpreadsheetWriteError: if the writer fails.
        """
        snapshot = self._accumulator.snapshot()
        if not snapshot.rows:
            raise EmptyAccumulatorError("No data available to download.")

        content = self._writer.write(snapshot.rows, self._sheet_name)
        Log.info(
            f"Prepared export {self._filename}: {len(snapshot)} rows from "
            f"{len(snapshot.batch_ids)} batches, {len(content)} bytes"
        )
        return ExportArtifact(
            content=content,
            filename=self._filename,
            media_type=self._writer.media_type,
            row_count=len(snapshot),
            through_seq=snapshot.through_seq,
        )

    def commit(self, artifact: ExportArtifact) -> None:
        """Drop the delivered rows and purge temp storage.

        Batches still in flight keep their files.
        """
        removed = self._accumulator.discard_through(artifact.through_seq)
        purged = self._storage.purge()
        Log.info(
            f"Export committed: {removed} rows cleared, {purged} upload entries purged, "
            f"{len(self._storage.in_flight_batches())} in-flight batches kept"
        )

    async def deliver(
        self,
        artifact: ExportArtifact,
        send: Callable[[], Awaitable[None]],
    ) -> None:
        """Send the artifact and commit only if sending succeeded.

        Raises:
            DeliveryError: if send fails. Nothing is cleared in that case.
        """
        try:
            await send()
        except Exception as exc:
            Log.error(
                f"Delivery of {artifact.filename} failed, keeping "
                f"{artifact.row_count} rows for retry: {exc}"
            )
            raise DeliveryError(f"Failed to deliver {artifact.filename}: {exc}") from exc
        Log.info(f"Delivered {artifact.filename} ({artifact.row_count} rows)")
        await asyncio.to_thread(self.commit, artifact)


def build_export_manager(
    settings: Settings,
    accumulator: Accumulator,
    storage: UploadStorage,
) -> ExportManager:
    """Build an ExportManager with the configured spreadsheet writer."""
    writer = SpreadsheetWriterFactory.create(settings)
    return ExportManager(
        accumulator=accumulator,
        storage=storage,
        writer=writer,
        filename=SpreadsheetWriterFactory.filename(settings, writer),
        sheet_name=settings.export_sheet_name,
    )
