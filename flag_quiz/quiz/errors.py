from __future__ import annotations


class QuizError(Exception):
    """Base class for every failure raised by the quiz core."""


class NotFoundError(QuizError, FileNotFoundError):
    pass


class CatalogNotFoundError(NotFoundError):
    pass


class AssetNotFoundError(NotFoundError):
    pass


class CatalogParseError(QuizError, ValueError):
    pass


class QuizIOError(QuizError, OSError):
    pass


class AssetReadError(QuizIOError):
    pass


class InsufficientDataError(QuizError, ValueError):
    """Raised when the catalog cannot supply the requested number of options."""
