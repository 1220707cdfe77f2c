"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class UnauthorizedError(AppError):
    """Raised when an admin-only operation is called without a valid token."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized: invalid admin token"):
        super().__init__(message, code="UNAUTHORIZED")


class StoreError(AppError):
    """
    Raised when the holdings store cannot be read or written.

    Distinct from an unpriceable holding: the request's side effects did not
    take place.
    """

    status_code = 500

    def __init__(self, operation: str, detail: str):
        super().__init__(f"Failed to {operation} holdings: {detail}", code="STORE_ERROR")
