"""
Exceptions raised by the places finder.

Per-attempt failures inside a fallback cascade are handled locally; only
the exhaustion of a whole cascade surfaces as one of these errors.
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the API error envelope."""

    LOCATION_UNAVAILABLE = "LOCATION_UNAVAILABLE"
    GEOCODE_NOT_FOUND = "GEOCODE_NOT_FOUND"
    CASCADE_EXHAUSTED = "CASCADE_EXHAUSTED"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class LocationFailureReason(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"
    UNAVAILABLE = "unavailable"


LOCATION_MESSAGES = {
    LocationFailureReason.PERMISSION_DENIED: (
        "GPS location access denied",
        "Please allow location access in your browser settings and try again.",
    ),
    LocationFailureReason.POSITION_UNAVAILABLE: (
        "GPS location unavailable",
        "Your device cannot determine GPS location. Please check your device settings.",
    ),
    LocationFailureReason.TIMEOUT: (
        "GPS location request timed out",
        "GPS is taking too long. Please try again or move to an area with better GPS signal.",
    ),
    LocationFailureReason.UNKNOWN: (
        "GPS location detection failed",
        "Please try again or check your device location settings.",
    ),
    LocationFailureReason.UNAVAILABLE: (
        "Unable to determine your location",
        "Please enter your address manually for accurate results.",
    ),
}


class PlacesFinderError(Exception):
    """Base exception for the places finder."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class LocationError(PlacesFinderError):
    """Raised when every location tier (or every IP provider) failed."""

    def __init__(self, reason: LocationFailureReason, suggestion: Optional[str] = None):
        headline, default_suggestion = LOCATION_MESSAGES[reason]
        self.reason = reason
        self.suggestion = suggestion or default_suggestion
        super().__init__(
            message=f"{headline}. {self.suggestion}",
            error_code=ErrorCode.LOCATION_UNAVAILABLE,
            details={"reason": reason.value, "suggestion": self.suggestion},
            status_code=503
        )


class GeocodeError(PlacesFinderError):
    """Raised when the geocoding provider has no answer for a query."""

    NOT_FOUND = "NotFound"

    def __init__(self, query: str, kind: str = NOT_FOUND):
        self.query = query
        self.kind = kind
        super().__init__(
            message=f"No geocoding result for '{query}'",
            error_code=ErrorCode.GEOCODE_NOT_FOUND,
            details={"query": query, "kind": kind},
            status_code=404
        )


class CascadeExhausted(PlacesFinderError):
    """Raised by the fallback runner when no attempt produced a result."""

    def __init__(self, label: str, errors: Optional[List[BaseException]] = None):
        self.label = label
        self.errors = errors or []
        super().__init__(
            message=f"All {label} attempts failed",
            error_code=ErrorCode.CASCADE_EXHAUSTED,
            details={"label": label, "attempts": len(self.errors)},
            status_code=503
        )

    @property
    def last_error(self) -> Optional[BaseException]:
        return self.errors[-1] if self.errors else None
