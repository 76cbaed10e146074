class TranslationError(Exception):
    """Raised when one line cannot be translated."""


class TranslationNetworkError(TranslationError):
    """Raised when the translation provider is unreachable or rejects the call."""
