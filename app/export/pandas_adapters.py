import io
from collections.abc import Sequence
from dataclasses import asdict

import pandas as pd

from app.export.base import EXPORT_COLUMNS, BaseSpreadsheetWriter
from app.export.exceptions import SpreadsheetWriteError
from app.processor.models import Row


def rows_to_dataframe(rows: Sequence[Row]) -> pd.DataFrame:
    """Build a frame with exactly the export columns, in order."""
    df = pd.DataFrame([asdict(row) for row in rows], columns=list(EXPORT_COLUMNS))
    return df.rename(columns=EXPORT_COLUMNS)


class XlsxWriterAdapter(BaseSpreadsheetWriter):
    """Writes an .xlsx workbook with pandas and openpyxl."""

    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def write(self, rows: Sequence[Row], sheet_name: str) -> bytes:
        buf = io.BytesIO()
        try:
            with pd.ExcelWriter(buf, engine="openpyxl") as writer:
                rows_to_dataframe(rows).to_excel(writer, sheet_name=sheet_name, index=False)
        except Exception as exc:
            raise SpreadsheetWriteError(f"xlsx export failed: {exc}") from exc
        return buf.getvalue()


class CsvWriterAdapter(BaseSpreadsheetWriter):
    """Writes UTF-8 CSV with a BOM so spreadsheet apps detect the encoding."""

    media_type = "text/csv"
    extension = "csv"

    def write(self, rows: Sequence[Row], sheet_name: str) -> bytes:
        _ = sheet_name
        try:
            text = rows_to_dataframe(rows).to_csv(index=False)
        except Exception as exc:
            raise SpreadsheetWriteError(f"csv export failed: {exc}") from exc
        return text.encode("utf-8-sig")
