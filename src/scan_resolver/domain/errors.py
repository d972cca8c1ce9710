"""Errors raised by resolution collaborators."""


class ResolutionError(Exception):
    """Base error for the resolution pipeline."""


class TextExtractionError(ResolutionError):
    """Raised when label text cannot be extracted from an image."""


class InferenceUnavailableError(ResolutionError):
    """Raised when the inference service cannot produce a result."""


class HistoryStorageError(ResolutionError):
    """Raised when user history cannot be written to its slot."""
