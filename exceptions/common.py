from http import HTTPStatus

from exceptions.base import BaseError


class AuthenticationError(BaseError):
    def __init__(
        self,
        message: str = "Invalid or missing API token",
        status_code: HTTPStatus = HTTPStatus.UNAUTHORIZED,
    ):
        super().__init__(message=message, status_code=status_code)


class AuthorizationError(BaseError):
    def __init__(
        self,
        message: str = "Access to this project is not allowed",
        status_code: HTTPStatus = HTTPStatus.FORBIDDEN,
    ):
        super().__init__(message=message, status_code=status_code)


class ResourceLockedError(BaseError):
    def __init__(
        self,
        message: str = "Resource is busy, retry later",
        status_code: HTTPStatus = HTTPStatus.CONFLICT,
    ):
        super().__init__(message=message, status_code=status_code)


class InternalError(BaseError):
    def __init__(
        self,
        message: str = "Internal server error",
        status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
    ):
        super().__init__(message=message, status_code=status_code)
