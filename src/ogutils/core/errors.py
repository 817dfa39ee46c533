"""
Custom exception hierarchy for ogutils.

This module defines the exceptions raised by the CRS registry, the
transformation layer and the layer reprojector, so that callers can tell
an unsupported coordinate system apart from a broken layer or a bad
geometry string.
"""

from typing import Any, Dict, List, Optional


class OguException(Exception):
    """
    Base exception for all ogutils errors.

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
        Initialize OguException.

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
        Convert exception to a dictionary.

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


class ValidationError(OguException):
    """
    Raised when a layer is missing required metadata or is inconsistent.

    Reprojection aborts before any clone or transform is made.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ValidationError.

        Args:
            message: User-friendly error message
            field: Name of the layer attribute that failed validation
            details: Technical details about the validation failure
            suggestions: List of suggestions for fixing the layer
        """
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=error_details,
            suggestions=suggestions or ["Check the layer name, geometry type and WKID"],
        )


class CRSError(OguException):
    """
    Raised when coordinate reference system operations fail.

    Base class for the more specific CRS failures below.
    """

    def __init__(
        self,
        message: str,
        source_wkid: Optional[int] = None,
        target_wkid: Optional[int] = None,
        error_code: str = "CRS_ERROR",
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize CRSError.

        Args:
            message: User-friendly error message
            source_wkid: Source WKID, if known
            target_wkid: Target WKID, if known
            error_code: Specific CRS error code
            details: Technical details about the CRS error
            suggestions: List of suggestions for fixing the CRS issue
        """
        error_details = details or {}
        if source_wkid is not None:
            error_details["source_wkid"] = source_wkid
        if target_wkid is not None:
            error_details["target_wkid"] = target_wkid

        default_suggestions = [
            "Verify the coordinate reference system is supported",
            "Use 4490 for CGCS2000 lon/lat or a Gauss-Kruger zone WKID",
        ]

        super().__init__(
            message=message,
            error_code=error_code,
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class UnsupportedCrsError(CRSError):
    """
    Raised when a WKID or zone number cannot be resolved to a known CRS.

    Never substituted with a default CRS.
    """

    def __init__(
        self,
        message: str,
        wkid: Optional[int] = None,
        zone: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize UnsupportedCrsError.

        Args:
            message: User-friendly error message
            wkid: The WKID that could not be resolved
            zone: The zone number that could not be resolved
            details: Technical details
        """
        error_details = details or {}
        if wkid is not None:
            error_details["wkid"] = wkid
        if zone is not None:
            error_details["zone"] = zone

        super().__init__(
            message=message,
            error_code="UNSUPPORTED_CRS",
            details=error_details,
        )
        self.wkid = wkid
        self.zone = zone


class TransformConstructionError(CRSError):
    """
    Raised when the projection library rejects a CRS definition or
    cannot build a transformation between two CRS.
    """

    def __init__(
        self,
        message: str,
        source_wkid: Optional[int] = None,
        target_wkid: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            source_wkid=source_wkid,
            target_wkid=target_wkid,
            error_code="TRANSFORM_CONSTRUCTION_ERROR",
            details=details,
            suggestions=["Check the CRS definition parameters"],
        )


class GeometryParseError(OguException):
    """
    Raised when a stored geometry string cannot be parsed.
    """

    def __init__(
        self,
        message: str,
        fid: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize GeometryParseError.

        Args:
            message: User-friendly error message
            fid: Feature id whose geometry failed to parse
            details: Technical details about the parsing failure
            suggestions: List of suggestions for fixing the geometry
        """
        error_details = details or {}
        if fid is not None:
            error_details["fid"] = fid

        default_suggestions = [
            "Verify the geometry is valid WKT",
            "Check for unbalanced parentheses or missing ordinates",
        ]

        super().__init__(
            message=message,
            error_code="GEOMETRY_PARSE_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class ConfigurationError(OguException):
    """
    Raised when library configuration is invalid.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: User-friendly error message
            config_key: Configuration key that is invalid
            details: Technical details about the configuration error
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        default_suggestions = [
            "Check OGU_* environment variables are set correctly",
            "Verify .env file syntax",
        ]

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )
