# src/certificate_checker/exceptions.py

"""
Shared custom exceptions for the Certificate Checker function.

None of these ever escape an invocation: the handler always reports success.
They exist so that degraded paths can be logged with a consistent, structured
payload, and so that configuration faults fail the cold start loudly.

Exception Hierarchy:
- CertificateCheckerError (base)
  - NonRetryableError (should not be retried)
    - InvocationContextError
    - ConfigurationError
"""

from typing import Any, Dict, Optional


class CertificateCheckerError(Exception):
    """Base exception for all Certificate Checker errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = dict(context) if context else {}
        self.correlation_id = correlation_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "correlation_id": self.correlation_id,
            "retryable": False,
        }


class NonRetryableError(CertificateCheckerError):
    """Base class for errors that should not be retried."""
    pass


class InvocationContextError(NonRetryableError):
    """Raised when the runtime-supplied invocation context cannot be read."""

    def __init__(self, reason: str, context_type: Optional[str] = None, **kwargs):
        message = f"Unable to read invocation context: {reason}"
        context = {"reason": reason, "context_type": context_type}
        super().__init__(
            message, error_code="INVALID_INVOCATION_CONTEXT", context=context, **kwargs
        )


class ConfigurationError(NonRetryableError):
    """Raised when there's an error in the application configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)


def get_error_context(error: Exception) -> Dict[str, Any]:
    """Extract error context for logging."""
    if isinstance(error, CertificateCheckerError):
        return error.to_dict()
    return {
        "error_type": error.__class__.__name__,
        "message": str(error),
        "retryable": False,
    }
