from collections.abc import Iterable
from http import HTTPStatus

from exceptions.base import BaseError


class FlowNotFoundError(BaseError):
    def __init__(
        self,
        message: str = "Flow not found",
        status_code: HTTPStatus = HTTPStatus.NOT_FOUND,
    ):
        super().__init__(message=message, status_code=status_code)


class FlowConflictError(BaseError):
    def __init__(
        self,
        message: str = "Flow conflict",
        status_code: HTTPStatus = HTTPStatus.CONFLICT,
    ):
        super().__init__(message=message, status_code=status_code)


class FlowValidationError(BaseError):
    def __init__(
        self,
        message: str = "Flow validation error",
        status_code: HTTPStatus = HTTPStatus.BAD_REQUEST,
    ):
        super().__init__(message=message, status_code=status_code)


class NodeNotFoundError(BaseError):
    def __init__(
        self,
        message: str = "Node not found",
        status_code: HTTPStatus = HTTPStatus.NOT_FOUND,
    ):
        super().__init__(message=message, status_code=status_code)


class FilesNotFoundError(BaseError):
    def __init__(
        self,
        file_names: Iterable[str] = (),
        status_code: HTTPStatus = HTTPStatus.BAD_REQUEST,
    ):
        self.file_names = list(file_names)
        super().__init__(
            message=f"Files not found: {', '.join(self.file_names)}",
            status_code=status_code,
        )


class InvalidConfigurationError(BaseError):
    def __init__(
        self,
        message: str = "Invalid flow configuration",
        status_code: HTTPStatus = HTTPStatus.BAD_REQUEST,
    ):
        super().__init__(message=message, status_code=status_code)


class NoDeployedRevisionError(BaseError):
    def __init__(
        self,
        message: str = "Flow has no deployed revision",
        status_code: HTTPStatus = HTTPStatus.NOT_FOUND,
    ):
        super().__init__(message=message, status_code=status_code)
