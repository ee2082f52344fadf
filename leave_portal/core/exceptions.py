from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class ValidationError(AppException):
    """A submission broke one of the field rules; `violation` names which."""
    def __init__(self, violation):
        self.violation = violation
        super().__init__(
            message=violation.message,
            status_code=400,
            error_code=violation.name
        )

class DuplicateRequest(AppException):
    def __init__(self, message: str = "Duplicate leave request exists for these dates"):
        super().__init__(message=message, status_code=400, error_code="DUPLICATE_REQUEST")

class InvalidStatus(AppException):
    def __init__(self, message: str = "Invalid status"):
        super().__init__(message=message, status_code=400, error_code="INVALID_STATUS")

class EmptySelection(AppException):
    def __init__(self, message: str = "No records selected for deletion"):
        super().__init__(message=message, status_code=400, error_code="EMPTY_SELECTION")

class InvalidSelection(AppException):
    def __init__(self, message: str = "Invalid record identifiers"):
        super().__init__(message=message, status_code=400, error_code="INVALID_SELECTION")

class NotFound(AppException):
    def __init__(self, message: str = "Leave request not found"):
        super().__init__(message=message, status_code=404, error_code="NOT_FOUND")

class StorageError(AppException):
    """
    Persistence failure. Callers only ever see the generic message; the
    driver error is logged where it is caught.
    """
    def __init__(self, message: str = "Internal server error", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="STORAGE_ERROR",
            details=details
        )
