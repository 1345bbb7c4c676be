"""
Error handling utilities for document rendering.

This module defines the error taxonomy of the render pipeline and a standard,
user-friendly description of those errors. None of these errors cross the
pipeline boundary: they are logged and the caller observes absent output.
"""

from typing import Dict, Any, Optional
from datetime import datetime


class HTMLViewError(Exception):
    """Base exception for render pipeline errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "htmlview_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.now().isoformat()


class AcquisitionError(HTMLViewError):
    """The source document could not be fetched."""

    def __init__(
        self,
        message: str,
        error_code: str = "acquisition_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, error_code=error_code, details=details)


class ConfigurationError(HTMLViewError):
    """The caller did not supply a usable document source."""

    def __init__(
        self,
        message: str,
        error_code: str = "configuration_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, error_code=error_code, details=details)


class MalformedInputWarning(HTMLViewError):
    """An input node had an unexpected shape and was degraded rather than rejected."""

    def __init__(
        self,
        message: str,
        error_code: str = "malformed_input",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, error_code=error_code, details=details)


def create_error_response(
    error: Exception,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Create a standardized description of an error.

    Args:
        error: The exception that occurred
        request_id: Optional request ID for tracking

    Returns:
        Dict containing the error code, message and a user-facing message
    """
    error_response = {
        "error": "unknown_error",
        "message": str(error) or "An unexpected error occurred while rendering",
        "details": None,
        "timestamp": datetime.now().isoformat(),
        "user_message": "We couldn't render this document."
    }

    if request_id:
        error_response["request_id"] = request_id

    if isinstance(error, HTMLViewError):
        error_response.update({
            "error": error.error_code,
            "message": error.message,
            "details": error.details or None,
            "timestamp": error.timestamp
        })

        if isinstance(error, AcquisitionError):
            if "timeout" in error.message.lower():
                error_response["user_message"] = "The document took too long to download."
            elif error.details.get("status_code"):
                error_response["user_message"] = (
                    f"The document server answered with status {error.details['status_code']}."
                )
            else:
                error_response["user_message"] = "The document couldn't be downloaded. Please check the address."
        elif isinstance(error, ConfigurationError):
            error_response["user_message"] = "Please provide the html or uri of the document to render."
        elif isinstance(error, MalformedInputWarning):
            error_response["user_message"] = "Part of the document could not be read and was skipped."

    return error_response
