"""
Custom exception hierarchy for the geopoint package.

This module defines the exceptions raised by the projection registry,
the coordinate string parser and the geometry operations, so that callers
can catch one base class or a precise failure.
"""

from typing import Any, Dict, List, Optional


class GeoPointException(Exception):
    """
    Base exception for all geopoint-specific errors.

    Attributes:
        error_code: String identifier for the error type
        message: User-friendly error message
        details: Technical details for logging/debugging
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GeoPointException.

        Args:
            message: User-friendly error message
            error_code: String identifier for the error type
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}')"
        )


class UnknownProjection(GeoPointException):
    """
    Raised when a projection nickname is not registered.
    """

    def __init__(
        self,
        nickname: Optional[str],
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        error_details["nickname"] = nickname
        message = (
            f"undefined projection {nickname}"
            if nickname is not None
            else "no default projection defined"
        )

        super().__init__(
            message=message,
            error_code="UNKNOWN_PROJECTION",
            details=error_details,
            suggestions=suggestions or ["Register the projection before using its nickname"],
        )
        self.nickname = nickname


class InvalidDefinition(GeoPointException):
    """
    Raised when a reference system definition is rejected.

    Used for empty nicknames, invalid SRID codes and definitions which
    the geodetic engine cannot interpret.
    """

    def __init__(
        self,
        message: str,
        nickname: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        if nickname:
            error_details["nickname"] = nickname

        default_suggestions = [
            "Check the PROJ string, EPSG code or WKT for typos",
            "SRID codes must be positive integers",
        ]

        super().__init__(
            message=message,
            error_code="INVALID_DEFINITION",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class ProjectionError(GeoPointException):
    """
    Raised when the geodetic engine fails to transform coordinates.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        target: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        if source:
            error_details["source"] = source
        if target:
            error_details["target"] = target

        default_suggestions = [
            "Verify both reference systems are compatible",
            "Ensure coordinates are within the area of use of the projection",
        ]

        super().__init__(
            message=message,
            error_code="PROJECTION_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class CoordinateParseError(GeoPointException):
    """
    Raised when coordinate text cannot be turned into a geometry.

    Base class of all parser failures.
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        error_code: str = "PARSE_ERROR",
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        if text is not None:
            error_details["text"] = text

        super().__init__(
            message=message,
            error_code=error_code,
            details=error_details,
            suggestions=suggestions or ["Check the coordinate format and try again"],
        )
        self.text = text


class ValueCountError(CoordinateParseError):
    """Raised when the number of coordinate values does not fit the projection."""

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        got: Optional[int] = None,
        expected: Optional[int] = None,
        error_code: str = "VALUE_COUNT",
    ):
        details: Dict[str, Any] = {}
        if got is not None:
            details["got"] = got
        if expected is not None:
            details["expected"] = expected

        super().__init__(message, text=text, error_code=error_code, details=details)
        self.got = got
        self.expected = expected


class TooFewValues(ValueCountError):
    """Raised when fewer coordinate values are given than required."""

    def __init__(self, text: str, got: int, expected: int):
        super().__init__(
            f"too few values in '{text}' (got {got}, expect {expected})",
            text=text,
            got=got,
            expected=expected,
            error_code="TOO_FEW_VALUES",
        )


class TooManyValues(ValueCountError):
    """Raised when more coordinate values are given than required."""

    def __init__(self, text: str, got: int, expected: int):
        super().__init__(
            f"too many values in '{text}' (got {got}, expect {expected})",
            text=text,
            got=got,
            expected=expected,
            error_code="TOO_MANY_VALUES",
        )


class MissingUTMZone(ValueCountError):
    """Raised when a UTM coordinate does not consist of easting, northing and zone."""

    def __init__(self, text: str, got: int):
        super().__init__(
            "UTM requires 3 values: easting, northing, and zone",
            text=text,
            got=got,
            expected=3,
            error_code="MISSING_UTM_ZONE",
        )


class InvalidUTMZone(CoordinateParseError):
    """
    Raised when a UTM zone is absent, zero or above 60.

    A zone contains a number from 1 up to 60 and an optional latitude
    band letter (C up to X, except I and O).
    """

    def __init__(self, text: str, zone: Optional[Any] = None):
        super().__init__(
            f"illegal UTM zone in {text}",
            text=text,
            error_code="INVALID_UTM_ZONE",
            details={"zone": zone} if zone is not None else None,
            suggestions=["A UTM zone is a number from 1 to 60 with an optional band letter"],
        )
        self.zone = zone


class DMSParseFailure(CoordinateParseError):
    """Raised when a degrees/minutes/seconds coordinate is not understood."""

    def __init__(self, coordinate: str, value: str):
        super().__init__(
            f"dms {coordinate} coordinate not understood: {value}",
            text=value,
            error_code="DMS_PARSE_FAILURE",
            details={"coordinate": coordinate},
            suggestions=["Use a format like 52d07'24\"N, 12.5W or -3.25"],
        )
        self.coordinate = coordinate


class IllegalCoordinateCharacter(CoordinateParseError):
    """Raised when a planar coordinate is not a plain decimal number."""

    def __init__(self, coordinate: str, value: str):
        super().__init__(
            f"illegal character in {coordinate} coordinate {value}",
            text=value,
            error_code="ILLEGAL_COORDINATE_CHARACTER",
            details={"coordinate": coordinate},
            suggestions=["Planar coordinates must be unsigned decimal numbers"],
        )
        self.coordinate = coordinate


class LatLongRequired(CoordinateParseError):
    """Raised when an operation only supports geographic reference systems."""

    def __init__(self, text: str, nickname: str):
        super().__init__(
            f"can only handle latlong coordinates, not {nickname}",
            text=text,
            error_code="LATLONG_REQUIRED",
            details={"nickname": nickname},
        )


class UsageError(GeoPointException):
    """
    Raised when an operation is requested on a geometry which does not support it.

    Used for area or perimeter of open lines and distances between
    unsupported geometry combinations.
    """

    def __init__(
        self,
        message: str,
        geometry_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        error_details = details or {}
        if geometry_type:
            error_details["geometry_type"] = geometry_type

        super().__init__(
            message=message,
            error_code="USAGE_ERROR",
            details=error_details,
            suggestions=suggestions,
        )
