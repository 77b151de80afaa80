# isapi_deploy/models/__init__.py
"""Data models for isapi-deploy"""

from .request import DeploymentRequest, Identity
from .result import ValidationResult, StagingPackage, DeploymentOutcome
from .config import ToolConfig, PackageSettings, ValidationSettings, ClientSettings

__all__ = [
    # Request models
    "DeploymentRequest",
    "Identity",

    # Result models
    "ValidationResult",
    "StagingPackage",
    "DeploymentOutcome",

    # Config models
    "ToolConfig",
    "PackageSettings",
    "ValidationSettings",
    "ClientSettings",
]
