"""ViralGif-Engine exception hierarchy."""

from typing import Any


class ViralGifError(Exception):
    """Base exception for all ViralGif errors."""

    status_code: int = 500

    def __init__(self, message: str = "", code: str = "VIRALGIF_ERROR"):
        self.message = message
        self.code = code
        # Pipeline stage the error was raised in, filled in by the orchestrator.
        self.stage: str | None = None
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        """Extra fields merged into the error envelope."""
        return {}


class ValidationError(ViralGifError):
    """Raised when client input is malformed. No quota is consumed."""

    status_code = 400

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, code="VALIDATION_ERROR")


class UnauthenticatedError(ViralGifError):
    """Raised when an endpoint requires a valid session and none was given."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHENTICATED")


class QuotaExceededError(ViralGifError):
    """Raised when admission is refused by the quota gate."""

    status_code = 403

    def __init__(self, message: str, decision=None):
        super().__init__(message, code="QUOTA_EXCEEDED")
        self.decision = decision

    def details(self) -> dict[str, Any]:
        if self.decision is None:
            return {}
        return self.decision.rejection_details()


class UnsupportedIndustryError(ViralGifError):
    """Raised when an industry has no templates."""

    status_code = 400

    def __init__(self, industry: str):
        super().__init__(
            f'Industry "{industry}" not supported or has no templates',
            code="UNSUPPORTED_INDUSTRY",
        )
        self.industry = industry


class TextServiceError(ViralGifError):
    """Raised when the text generation service fails."""

    status_code = 503

    def __init__(self, message: str = "AI service temporarily unavailable. Please try again."):
        super().__init__(message, code="TEXT_SERVICE_UNAVAILABLE")


class MediaServiceError(ViralGifError):
    """Raised when no GIF could be resolved for the selected template."""

    status_code = 503

    def __init__(self, message: str = "GIF service temporarily unavailable. Please try again."):
        super().__init__(message, code="MEDIA_SERVICE_UNAVAILABLE")


class PersistenceError(ViralGifError):
    """Raised when the usage ledger cannot be written."""

    def __init__(self, message: str = "Failed to record usage"):
        super().__init__(message, code="PERSISTENCE_ERROR")


class InternalError(ViralGifError):
    """Catch-all for unexpected failures."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, code="INTERNAL_ERROR")


class CatalogError(ViralGifError):
    """Raised when reference data files are missing or malformed."""

    def __init__(self, message: str = "Invalid reference data"):
        super().__init__(message, code="CATALOG_ERROR")


class InvalidSessionError(ViralGifError):
    """Raised when a session token fails signature validation."""

    status_code = 401

    def __init__(self, message: str = "Invalid session token"):
        super().__init__(message, code="INVALID_SESSION")


class ExpiredSessionError(InvalidSessionError):
    """Raised when a session token is older than the configured TTL."""

    def __init__(self, message: str = "Session expired, please log in again"):
        super().__init__(message)
        self.code = "EXPIRED_SESSION"


class MediaLookupError(ViralGifError):
    """Raised by the media adapter when a single lookup fails."""

    status_code = 503

    def __init__(self, message: str = "Media lookup failed"):
        super().__init__(message, code="MEDIA_LOOKUP_FAILED")
