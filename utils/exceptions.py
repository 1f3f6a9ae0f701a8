"""
Unified exception hierarchy for the Study Planner API.

All domain exceptions inherit from StudyPlannerError and carry:
- error_code: machine-readable string (e.g. "EXAM_DATE_IN_PAST")
- status_code: HTTP status code
- message: human-readable description
- context: optional structured metadata dict
"""

from typing import Optional, Dict, Any, List


class StudyPlannerError(Exception):
    """Base exception for all Study Planner domain errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.context = context or {}
        super().__init__(message)

    @property
    def public_message(self) -> str:
        """Message safe to return to API clients."""
        return self.message


class ValidationError(StudyPlannerError):
    """400-level validation / bad-request errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INVALID_REQUEST",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=400, context=context)


class ExtractionError(StudyPlannerError):
    """The uploaded document could not be turned into usable text."""

    def __init__(
        self,
        message: str,
        error_code: str = "PDF_EXTRACTION_FAILED",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=400, context=context)


class AuthenticationError(StudyPlannerError):
    """401 missing or invalid bearer token."""

    def __init__(self, message: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(message, error_code=error_code, status_code=401)


class GenerationFailure(StudyPlannerError):
    """Every configured generation backend failed for one request."""

    PUBLIC_MESSAGE = "Failed to generate study plan. Please try again later."

    def __init__(
        self,
        backends: List[str],
        errors: Optional[Dict[str, str]] = None,
    ):
        self.backends = backends
        self.errors = errors or {}
        if backends:
            message = f"Failed to generate study plan with {' and '.join(backends)}."
        else:
            message = "No study plan generation backend is configured."
        super().__init__(
            message,
            error_code="PLAN_GENERATION_FAILED",
            status_code=500,
            context={"backends": backends, "errors": self.errors},
        )

    @property
    def public_message(self) -> str:
        # Provider diagnostics stay in the logs
        return self.PUBLIC_MESSAGE


class StorageError(StudyPlannerError):
    """500-level database / storage failures."""

    def __init__(
        self,
        message: str,
        error_code: str = "STORAGE_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=500, context=context)


class ServiceUnavailableError(StudyPlannerError):
    """An optional external service has no credentials configured."""

    def __init__(self, message: str, error_code: str = "SERVICE_NOT_CONFIGURED"):
        super().__init__(message, error_code=error_code, status_code=503)
