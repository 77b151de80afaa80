# isapi_deploy/clients/__init__.py
"""Hosting-platform management clients"""

from typing import Optional

from .base import ManagementClient
from .azure_cli import AzureCliClient
from ..models.config import ClientSettings


def create_client(settings: Optional[ClientSettings] = None,
                  subscription: Optional[str] = None) -> ManagementClient:
    """Create the management client described by the settings

    Args:
        settings: Client settings from the tool configuration
        subscription: Subscription identifier for every remote call

    Returns:
        Management client instance
    """
    settings = settings or ClientSettings()
    return AzureCliClient(
        subscription=subscription,
        executable=settings.executable,
        command_timeout=settings.command_timeout
    )


__all__ = [
    "ManagementClient",
    "AzureCliClient",
    "create_client",
]
