# isapi_deploy/clients/base.py
"""Management client abstract base class"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..models.request import Identity


class ManagementClient(ABC):
    """Abstract base class for remote hosting-platform clients

    The active subscription is held by the client instance and passed
    to every remote call. Implementations never rely on ambient
    process-wide context.
    """

    def __init__(self, subscription: Optional[str] = None):
        """
        Initialize management client

        Args:
            subscription: Subscription identifier used for every call
        """
        self.subscription = subscription

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the client can be invoked on this machine

        Returns:
            True if callable
        """
        pass

    @abstractmethod
    def get_version(self) -> Optional[str]:
        """
        Get client version

        Returns:
            Version string or None if unknown
        """
        pass

    @abstractmethod
    def get_identity(self) -> Identity:
        """
        Get the authenticated identity

        Returns:
            Identity of the logged-in operator

        Raises:
            NotAuthenticatedError: If no login is active
        """
        pass

    @abstractmethod
    def resource_exists(self, group: str, name: str) -> bool:
        """
        Check if the hosting resource exists

        Args:
            group: Resource group
            name: Target resource name

        Returns:
            True if exists
        """
        pass

    @abstractmethod
    def stop(self, name: str, group: str) -> None:
        """Stop the hosting target"""
        pass

    @abstractmethod
    def start(self, name: str, group: str) -> None:
        """Start the hosting target"""
        pass

    @abstractmethod
    def deploy_package(self, name: str, group: str, archive_path: Path) -> None:
        """
        Push a zip package to the hosting target

        Args:
            name: Target resource name
            group: Resource group
            archive_path: Local zip archive
        """
        pass

    @abstractmethod
    def get_endpoint(self, name: str, group: str) -> str:
        """
        Get public endpoint URL of the target

        Returns:
            URL such as https://<name>.azurewebsites.net
        """
        pass

    @abstractmethod
    def tail_logs(self, name: str, group: str) -> int:
        """
        Stream target logs to the terminal until interrupted

        Returns:
            Exit status of the streaming process
        """
        pass

    def log_tail_command(self, name: str, group: str) -> str:
        """Command line an operator can run to stream logs"""
        return ""

    def browse_command(self, name: str, group: str) -> str:
        """Command line an operator can run to open the site"""
        return ""
