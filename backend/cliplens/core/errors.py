"""
Error taxonomy shared by the proxy services and routes.

Each error carries the HTTP status the proxy answers with, a short
user-facing message, and optional diagnostic details (usually the raw
provider body).
"""
from typing import Any, Optional


class ClipLensError(Exception):
    """Base exception for all proxy errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ClipLensError):
    """Required input was missing from the request."""
    status_code = 400


class UpstreamNotFound(ClipLensError):
    """Provider resource does not exist yet (e.g. still transcoding)."""
    status_code = 404


class UpstreamError(ClipLensError):
    """Provider call failed for any reason other than not-found."""
    status_code = 500


class ConfigurationError(ClipLensError):
    """A required server-side credential is absent."""
    status_code = 500


def require_fields(**fields: Optional[str]) -> None:
    """
    Raise ValidationError naming every blank field.

    Field names are given in their wire spelling, e.g. require_fields(indexId=...).
    """
    missing = [name for name, value in fields.items() if not value or not str(value).strip()]
    if not missing:
        return
    if len(missing) == 1:
        raise ValidationError(f"{missing[0]} is required")
    names = ", ".join(missing[:-1]) + f" and {missing[-1]}"
    raise ValidationError(f"{names} are required")
