import shutil
import threading
import time
import uuid
from pathlib import Path

from app.logging.logger import Log
from app.processor.models import UploadedImage


def safe_filename(filename: str) -> str:
    """Reduce a client-supplied filename to a bare base name."""
    name = Path(filename.replace("\\", "/")).name.strip()
    if name in ("", ".", ".."):
        return "upload"
    return name


class UploadStorage:
    """Per-batch temporary storage for uploaded images and their crops.

    Layout: ``{root}/{batch_id}/{filename}``. A batch is "in flight" from
    ``open_batch`` until ``finish_batch``; purging never touches an
    in-flight batch.
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._lock = threading.Lock()
        self._in_flight: set[str] = set()

    @property
    def root(self) -> Path:
        return self._root

    def open_batch(self) -> str:
        batch_id = f"{time.strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"
        with self._lock:
            self._in_flight.add(batch_id)
            self.batch_dir(batch_id).mkdir(parents=True, exist_ok=True)
        Log.debug(f"Opened upload batch {batch_id}")
        return batch_id

    def batch_dir(self, batch_id: str) -> Path:
        return self._root / batch_id

    def save(self, batch_id: str, filename: str, content: bytes) -> UploadedImage:
        """Write one uploaded file into the batch directory.

        Files sharing a name inside one batch get a numeric prefix so no
        upload overwrites another.
        """
        name = safe_filename(filename)
        target = self.batch_dir(batch_id) / name
        counter = 1
        while target.exists():
            target = self.batch_dir(batch_id) / f"{counter}-{name}"
            counter += 1
        target.write_bytes(content)
        return UploadedImage(
            filename=name,
            path=target,
            batch_id=batch_id,
            size_bytes=len(content),
        )

    def finish_batch(self, batch_id: str) -> None:
        with self._lock:
            self._in_flight.discard(batch_id)

    def in_flight_batches(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._in_flight)

    def purge(self) -> int:
        """Remove everything under the root except in-flight batches.

        Leftovers from earlier runs of the service (stale batch directories,
        loose files) are removed too.

        Returns:
            Number of root entries removed.
        """
        if not self._root.exists():
            return 0

        removed = 0
        # Held for the whole sweep so open_batch cannot register a batch
        # whose directory is then removed.
        with self._lock:
            for path in sorted(self._root.iterdir()):
                if path.name in self._in_flight:
                    continue
                try:
                    if path.is_dir() and not path.is_symlink():
                        shutil.rmtree(path)
                    else:
                        path.unlink()
                    removed += 1
                except OSError as exc:
                    Log.warning(f"Failed to purge {path}: {exc}")
        Log.info(f"Purged {removed} entries from {self._root}")
        return removed
