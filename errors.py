"""
errors.py
---------
Typed failures raised by the data-access layer.

Each error carries the HTTP status the request layer should answer with.
Anything that is not an ``AppError`` is reported as a generic 500 with no
detail.
"""


class AppError(Exception):
    """Base class for all expected application failures."""

    status: int = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Serialize as the JSON error body returned to clients."""
        return {"error": {"message": self.message, "status": self.status}}


class ValidationError(AppError):
    """Malformed input, e.g. a partial update with no fields."""

    status = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class AuthError(AppError):
    """Bad credentials."""

    status = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(AppError):
    """A referenced user, post, comment or follow edge does not exist."""

    status = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class ConflictError(AppError):
    """Duplicate like, follow or username, or a self-follow attempt."""

    status = 409

    def __init__(self, message: str = "Conflict"):
        super().__init__(message)


def error_response(exc: Exception) -> tuple[dict, int]:
    """
    Translate an exception into a ``(body, status)`` pair.

    Unclassified exceptions never leak their message.
    """
    if isinstance(exc, AppError):
        return exc.to_dict(), exc.status
    return AppError().to_dict(), AppError.status
