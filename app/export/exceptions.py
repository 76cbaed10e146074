class ExportError(Exception):
    """Base exception for all export errors."""


class EmptyAccumulatorError(ExportError):
    """Raised when an export is requested with no accumulated rows."""


class DeliveryError(ExportError):
    """Raised when the exported artifact could not be delivered to the client."""


class SpreadsheetWriteError(ExportError):
    """Raised when rows cannot be serialized into a spreadsheet."""
