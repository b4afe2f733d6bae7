"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_IDENTITY = "DUPLICATE_IDENTITY"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    INVALID_SORT = "INVALID_SORT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ProfileNotFoundError(AppException):
    """Profile not found by id or external auth id."""

    def __init__(self, lookup: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {lookup}",
            status_code=404,
            details={"lookup": lookup},
        )


class DuplicateIdentityError(AppException):
    """A profile with the same external auth id or email already exists."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_IDENTITY,
            message=f"User with {field} already exists",
            status_code=400,
            details={"field": field, "value": value},
        )


class UnknownFieldError(AppException):
    """Field name is not in the single-field update registry."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            error_code=ErrorCode.UNKNOWN_FIELD,
            message=f"Unknown profile field: {field_name}",
            status_code=400,
            details={"field_name": field_name},
        )


class TypeMismatchError(AppException):
    """Value kind does not match the registered field kind."""

    def __init__(self, field_name: str, expected: str, actual: str) -> None:
        super().__init__(
            error_code=ErrorCode.TYPE_MISMATCH,
            message=f"Field '{field_name}' expects a {expected} value, got {actual}",
            status_code=400,
            details={"field_name": field_name, "expected": expected, "actual": actual},
        )


class InvalidSortError(AppException):
    """Sort key is not one of the supported orderings."""

    def __init__(self, sort: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_SORT,
            message=f"Unsupported sort: {sort}",
            status_code=400,
            details={"sort": sort},
        )


class InvalidSearchParameterError(AppException):
    """A search or paging parameter is out of range."""

    def __init__(self, parameter: str, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"parameter": parameter},
        )


class InvalidFieldValueError(AppException):
    """A single-field value has the right kind but is out of range."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"field_name": field_name},
        )
