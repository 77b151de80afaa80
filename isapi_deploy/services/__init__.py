# isapi_deploy/services/__init__.py
"""Service layer for isapi-deploy"""

from .config_service import ConfigService

__all__ = [
    "ConfigService",
]
