"""
Custom Exception Classes for the Community Client

This module defines custom exceptions for better error handling and
categorization of failures across the application.
"""

from typing import Optional


class CommunityClientError(Exception):
    """Base exception for all community client errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(CommunityClientError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


# =============================================================================
# API Errors
# =============================================================================

class ApiError(CommunityClientError):
    """Base exception for community API failures."""
    pass


class ApiRequestError(ApiError):
    """Raised when a request never produced a response (connection error, timeout)."""
    pass


class ApiResponseError(ApiError):
    """Raised when the server answers with a non-2xx status or `success: false`."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# =============================================================================
# Client-side Errors
# =============================================================================

class ValidationError(CommunityClientError):
    """Raised when user input is rejected before any request is sent."""
    pass


class ShareError(CommunityClientError):
    """Raised when a share target cannot be reached."""
    pass


def user_message(error: Exception, default: str) -> str:
    """
    Text to show the user for a failed action.

    Server and validation messages are shown as-is; transport and
    unexpected errors get the default.

    Args:
        error: The exception raised by the action.
        default: Generic message for the action, e.g. "Failed to add comment".

    Returns:
        str: The message for the notifier.
    """
    if isinstance(error, (ApiResponseError, ValidationError)):
        return str(error) or default
    return default
