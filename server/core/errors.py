# server/core/errors.py

from fastapi import status


class ApiError(Exception):
    """
    Base for failures that carry their own HTTP status.
    Raised anywhere below the routers and translated into
    {"error": message} by the handlers registered in main.py.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(ApiError):
    # Duplicate usernames have always been answered with 400, not 409.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class InternalError(ApiError):
    pass
