"""Custom exception classes."""


class RecipeLensException(Exception):
    """Base exception for RecipeLens application."""

    pass


class ValidationError(RecipeLensException):
    """Raised when input validation fails."""

    pass


class ImageProcessingError(RecipeLensException):
    """Raised when image processing fails."""

    pass


class ExternalServiceError(RecipeLensException):
    """Raised when a call to a third-party API fails."""

    pass


class VisionAPIError(ExternalServiceError):
    """Raised when the image labeling API call fails."""

    pass


class RecipeAPIError(ExternalServiceError):
    """Raised when the recipe search API call fails."""

    pass


class VideoAPIError(ExternalServiceError):
    """Raised when the video generation API call fails."""

    pass


class CatalogError(RecipeLensException):
    """Raised when the known dish table cannot be read."""

    pass


class BackendRequestError(RecipeLensException):
    """Raised by the client when a backend function keeps failing after retries."""

    pass
