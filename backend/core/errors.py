"""Error taxonomy for the API.

Each error carries the HTTP status it maps to and the message returned to
the caller as ``{"error": message}``.
"""
from typing import List, Optional


class ApiError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict:
        return {"error": self.message}


class AuthError(ApiError):
    status_code = 401

    def __init__(self, reason: str):
        super().__init__(f"Unauthorized - {reason}")


class InputValidationError(ApiError):
    status_code = 400

    def __init__(self, details: List[str]):
        super().__init__("Invalid input")
        self.details = details

    def to_body(self) -> dict:
        return {"error": self.message, "details": self.details}


class NotFoundError(ApiError):
    status_code = 404


class ConfigurationError(ApiError):
    status_code = 500


class UpstreamRateLimited(ApiError):
    status_code = 429

    def __init__(self):
        super().__init__("Rate limit exceeded. Please try again later.")


class UpstreamPaymentRequired(ApiError):
    status_code = 402

    def __init__(self):
        super().__init__("Payment required. Please add credits to your Lovable AI workspace.")


class UpstreamUnclassified(ApiError):
    status_code = 500

    def __init__(self, reason):
        super().__init__(f"AI gateway error: {reason}")


class MissingImageInResponse(ApiError):
    status_code = 500

    def __init__(self):
        super().__init__("No image returned from AI")


class StorageError(ApiError):
    """A Supabase table query failed."""
    status_code = 500
