"""Public API for isapi-deploy"""

from .exceptions import (
    IsapiDeployError,
    PreflightError,
    ValidationError,
    PackagingError,
    UploadError,
    ConfigError,
    ClientError,
    ClientNotFoundError,
    NotAuthenticatedError,
    ClientCommandError,
    CheckerUnavailableError,
)
from .deployer import Deployer

__all__ = [
    "Deployer",
    "IsapiDeployError",
    "PreflightError",
    "ValidationError",
    "PackagingError",
    "UploadError",
    "ConfigError",
    "ClientError",
    "ClientNotFoundError",
    "NotAuthenticatedError",
    "ClientCommandError",
    "CheckerUnavailableError",
]
