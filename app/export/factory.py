from app.config.settings import Settings
from app.export.base import BaseSpreadsheetWriter
from app.export.pandas_adapters import CsvWriterAdapter, XlsxWriterAdapter


class SpreadsheetWriterFactory:
    """Creates the spreadsheet writer for the configured export format."""

    ADAPTERS: dict[str, type[BaseSpreadsheetWriter]] = {
        "xlsx": XlsxWriterAdapter,
        "csv": CsvWriterAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseSpreadsheetWriter:
        export_format = settings.export_format.lower()
        adapter_cls = cls.ADAPTERS.get(export_format)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown export format '{export_format}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def filename(cls, settings: Settings, writer: BaseSpreadsheetWriter) -> str:
        """Download filename: the configured one, else output.<extension>."""
        return settings.export_filename.strip() or f"output.{writer.extension}"
