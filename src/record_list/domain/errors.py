"""
Custom exception hierarchy for the record_list library.

This module defines a compact exception hierarchy with:
- Consistent error codes for API responses
- HTTP status code suggestions for host web frameworks
- Structured details naming the offending step/option/value

Exception Categories:
- Configuration errors: a list definition is incomplete or inconsistent
  (no implementation for a step, a required option missing)
- Parameter errors: a caller-supplied value cannot be used
  (a page number that is not an integer, an unknown sort order)
- Unknown step: a caller asked for a step the pipeline does not declare

Errors raised by step implementations themselves (e.g. a repository failing
to run a query) are NOT part of this hierarchy and propagate unchanged.

Usage:
    raise MissingOptionError("paginate", "per_page")
    raise ParameterError("Value 'abc' not parsable as an integer", details={"value": "abc"})
"""

from typing import Any, Dict, Optional


class RecordListException(Exception):
    """
    Base exception for all record_list errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code (e.g., "MISSING_OPTION")
        http_status: HTTP status code a web layer should return (default: 500)
        details: Optional dictionary with additional error context
    """

    error_code: str = "INTERNAL_ERROR"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
        http_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
        if http_status:
            self.http_status = http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Configuration Errors (5xx)
# =============================================================================


class ConfigurationError(RecordListException):
    """
    Raised when a list definition is invalid or incomplete.

    HTTP Status: 500 Internal Server Error
    """

    error_code = "CONFIGURATION_ERROR"
    http_status = 500


class StepConfigurationError(ConfigurationError):
    """
    Raised while building a pipeline, or when a step is wired incorrectly.

    HTTP Status: 500 Internal Server Error

    Examples:
        - Step declared without an implementation and no default exists
        - Two steps declared with the same name
        - A callback option that is neither callable nor exposes the method
    """

    error_code = "STEP_CONFIGURATION_ERROR"
    http_status = 500


class MissingOptionError(ConfigurationError):
    """
    Raised when a step executes without a required option.

    HTTP Status: 500 Internal Server Error

    Examples:
        - paginate without per_page in parameters or options
        - retrieve without a repo
    """

    error_code = "MISSING_OPTION"
    http_status = 500

    def __init__(self, step: str, option: str, message: Optional[str] = None):
        super().__init__(
            message or f"Step '{step}' requires the '{option}' option",
            details={"step": step, "option": option},
        )
        self.step = step
        self.option = option


# =============================================================================
# Client Errors (4xx)
# =============================================================================


class ParameterError(RecordListException):
    """
    Raised when a parameter value cannot be interpreted.

    HTTP Status: 422 Unprocessable Entity

    Examples:
        - page="abc"
        - per_page=0
        - order="sideways"
    """

    error_code = "PARAMETER_ERROR"
    http_status = 422


class UnknownStepError(RecordListException):
    """
    Raised when dispatching to a step name the pipeline does not declare.

    HTTP Status: 404 Not Found
    """

    error_code = "UNKNOWN_STEP"
    http_status = 404

    def __init__(self, step: str, declared: Optional[list] = None):
        super().__init__(
            f"Step '{step}' is not declared in this pipeline",
            details={"step": step, "declared_steps": list(declared or [])},
        )
        self.step = step
