"""Shared error definitions for CaseMatch."""


class CaseMatchError(Exception):
    """Base exception for CaseMatch."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFound(CaseMatchError):
    """Attorney, case or interest record does not exist."""

    status_code = 404


class Forbidden(CaseMatchError):
    """Business rule forbids the operation (transition, retention, duplicate)."""

    status_code = 403


class ValidationFailed(CaseMatchError):
    """Request carried a missing or invalid value."""

    status_code = 422


class StoreError(CaseMatchError):
    """Case store failed; the underlying message is kept for diagnostics."""

    status_code = 500
