import threading
from dataclasses import dataclass

from app.processor.models import Row


@dataclass(frozen=True)
class AccumulatorSnapshot:
    """Ordered copy of the accumulated rows at one point in time.

    ``through_seq`` is the sequence number of the last row included, so the
    same rows can be discarded later without touching rows appended since.
    """

    rows: tuple[Row, ...]
    through_seq: int
    batch_ids: frozenset[str]

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class _Entry:
    seq: int
    batch_id: str
    row: Row


class Accumulator:
    """Process-wide, append-only store of rows pending export."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[_Entry] = []
        self._last_seq = 0

    def append(self, row: Row, batch_id: str = "") -> int:
        """Append a row and return its sequence number."""
        with self._lock:
            self._last_seq += 1
            self._entries.append(_Entry(seq=self._last_seq, batch_id=batch_id, row=row))
            return self._last_seq

    def snapshot(self) -> AccumulatorSnapshot:
        with self._lock:
            entries = list(self._entries)
            through_seq = entries[-1].seq if entries else self._last_seq
        return AccumulatorSnapshot(
            rows=tuple(e.row for e in entries),
            through_seq=through_seq,
            batch_ids=frozenset(e.batch_id for e in entries if e.batch_id),
        )

    def discard_through(self, seq: int) -> int:
        """Remove every row with a sequence number <= seq.

        Returns:
            Number of rows removed. Zero when those rows are already gone.
        """
        with self._lock:
            kept = [e for e in self._entries if e.seq > seq]
            removed = len(self._entries) - len(kept)
            self._entries = kept
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
