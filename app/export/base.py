from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.processor.models import Row

# Row field -> column header, in sheet order.
EXPORT_COLUMNS: dict[str, str] = {
    "source_text": "Name",
    "translated_text": "Translation",
    "identifier_a": "Aadhaar",
    "identifier_b": "Mobile",
}


class BaseSpreadsheetWriter(ABC):
    """Contract for tabular export adapters."""

    media_type: str = "application/octet-stream"
    extension: str = ""

    @abstractmethod
    def write(self, rows: Sequence[Row], sheet_name: str) -> bytes:
        """Serialize rows into a spreadsheet file.

        Columns follow EXPORT_COLUMNS; rows keep their given order.

        Raises:
            SpreadsheetWriteError: on any serialization failure.
        """
