"""
Custom Exception Hierarchy

Only programming / configuration mistakes raise. Blank or malformed clinical
values never do; they resolve to skipped rules and criterion error strings.
"""
from typing import Optional, Dict, Any, Iterable


class OptoScreenError(Exception):
    """Base exception for all evaluation engine errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class UnknownMeasurementCodeError(OptoScreenError, KeyError):
    """A reference range was requested for a code outside the vocabulary."""

    def __init__(
        self,
        measurement_code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"Unknown measurement code: {measurement_code!r}",
            code="UNKNOWN_MEASUREMENT_CODE",
            details={"measurement_code": measurement_code, **(details or {})}
        )
        self.measurement_code = measurement_code


class UnknownProfileError(OptoScreenError):
    """A rule profile name that is not registered."""

    def __init__(
        self,
        profile: str,
        available: Iterable[str] = (),
        details: Optional[Dict[str, Any]] = None
    ):
        available = sorted(available)
        super().__init__(
            message=f"Unknown rule profile {profile!r}; expected one of {available}",
            code="UNKNOWN_RULE_PROFILE",
            details={"profile": profile, "available": available, **(details or {})}
        )
        self.profile = profile
