from exceptions.base import BaseError
from exceptions.common import (
    AuthenticationError,
    AuthorizationError,
    InternalError,
    ResourceLockedError,
)
from exceptions.flow import (
    FilesNotFoundError,
    FlowConflictError,
    FlowNotFoundError,
    FlowValidationError,
    InvalidConfigurationError,
    NodeNotFoundError,
    NoDeployedRevisionError,
)
from exceptions.source import (
    SourceConflictError,
    SourceNotFoundError,
    SourceNotSupportedError,
    SourceTooLargeError,
    SourceValidationError,
)

__all__ = [
    "BaseError",
    "AuthenticationError",
    "AuthorizationError",
    "InternalError",
    "ResourceLockedError",
    "FilesNotFoundError",
    "FlowConflictError",
    "FlowNotFoundError",
    "FlowValidationError",
    "InvalidConfigurationError",
    "NodeNotFoundError",
    "NoDeployedRevisionError",
    "SourceConflictError",
    "SourceNotFoundError",
    "SourceNotSupportedError",
    "SourceTooLargeError",
    "SourceValidationError",
]
