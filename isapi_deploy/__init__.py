"""isapi-deploy - Move a legacy ISAPI filter onto Azure App Service.

This tool validates a compiled ISAPI filter DLL, packages it together with
a rendered web.config, and uploads the package to an existing App Service.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.deployer import Deployer

# Data models
from .models import (
    DeploymentRequest,
    DeploymentOutcome,
    ValidationResult,
    StagingPackage,
    ToolConfig,
)

# Exceptions
from .api.exceptions import (
    IsapiDeployError,
    PreflightError,
    ValidationError,
    PackagingError,
    UploadError,
    ConfigError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Deployer",

    # Data models
    "DeploymentRequest",
    "DeploymentOutcome",
    "ValidationResult",
    "StagingPackage",
    "ToolConfig",

    # Exceptions
    "IsapiDeployError",
    "PreflightError",
    "ValidationError",
    "PackagingError",
    "UploadError",
    "ConfigError",
]
