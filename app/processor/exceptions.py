class ProcessorError(Exception):
    """Base exception for all batch processing errors."""


class NoFilesError(ProcessorError):
    """Raised when a batch request carries no image files."""


class TooManyFilesError(ProcessorError):
    """Raised when a batch request carries more files than allowed."""


class PreprocessOrExtractError(ProcessorError):
    """Fatal per-image failure: aborts the rest of the batch."""


class PreprocessError(PreprocessOrExtractError):
    """Raised when an image cannot be cropped."""


class ExtractionError(PreprocessOrExtractError):
    """Raised when text recognition fails for an image."""


class StageTimeoutError(PreprocessOrExtractError):
    """Raised when a crop or recognition call exceeds the stage timeout."""
