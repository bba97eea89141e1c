"""
Custom exception classes and error handling.

Every failure leaves the API as `{"error": <message>}` with a status code
that tells the caller whose fault it was.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any, Sequence


class APIException(HTTPException):
    """Base API exception with consistent structure."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class InvalidPayloadError(APIException):
    """Submission input violates a field constraint. Nothing was written."""

    def __init__(self, detail: str = "Invalid payload", field: Optional[str] = None):
        error_code = f"INVALID_PAYLOAD_{field.upper()}" if field else "INVALID_PAYLOAD"
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )
        self.field = field


class StoreUnavailableError(APIException):
    """The database cannot be reached or its schema cannot be ensured."""

    def __init__(self, detail: str = "Database not available"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="STORE_UNAVAILABLE"
        )


class MethodNotAllowedError(APIException):
    """Verb not supported on the resource."""

    def __init__(self, allowed: Sequence[str] = ("GET", "POST")):
        super().__init__(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Method Not Allowed",
            error_code="METHOD_NOT_ALLOWED",
            headers={"Allow": ", ".join(allowed)}
        )
        self.allowed = tuple(allowed)
