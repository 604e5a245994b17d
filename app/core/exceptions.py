from typing import Optional, Any

class PickupError(Exception):
    """
    Base exception for the order API.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ResourceNotFoundError(PickupError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class AuthenticationError(PickupError):
    """
    Raised when a one-time code cannot be verified.
    The message never says which check failed.
    """
    def __init__(self, message: str = "Invalid or expired OTP", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_OTP", status_code=400, details=details)

class ValidationError(PickupError):
    """
    Raised when request input is missing or malformed.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class UploadLimitError(PickupError):
    """
    Raised when an upload exceeds the file count or size limits.
    """
    def __init__(self, message: str = "Upload limit exceeded", details: Optional[Any] = None):
        super().__init__(message, code="UPLOAD_LIMIT", status_code=400, details=details)
