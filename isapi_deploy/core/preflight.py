# isapi_deploy/core/preflight.py
"""Read-only environment checks run before any state-changing action"""

import logging
from typing import Optional

from packaging.version import InvalidVersion, Version

from ..api.exceptions import ClientError, NotAuthenticatedError, PreflightError
from ..clients.base import ManagementClient
from ..constants import PreflightFailure
from ..models.request import DeploymentRequest, Identity

logger = logging.getLogger(__name__)


class PreflightChecker:
    """Verify client availability, login and target existence"""

    def __init__(self, client: ManagementClient, min_version: Optional[str] = None):
        """
        Initialize preflight checker

        Args:
            client: Management client
            min_version: Lowest acceptable client version, if any
        """
        self.client = client
        self.min_version = min_version

    def check_client(self) -> None:
        """Raise PreflightError(CLIENT_MISSING) if the client cannot be used"""
        if not self.client.is_available():
            raise PreflightError(
                PreflightFailure.CLIENT_MISSING,
                "Management client is not installed or not on PATH"
            )

        if not self.min_version:
            return

        version = self.client.get_version()
        if version is None:
            logger.warning("Could not determine client version, skipping minimum version check")
            return

        try:
            too_old = Version(version) < Version(self.min_version)
        except InvalidVersion:
            logger.warning("Unparseable client version %r, skipping minimum version check", version)
            return

        if too_old:
            raise PreflightError(
                PreflightFailure.CLIENT_MISSING,
                f"Client version {version} is older than required {self.min_version}",
                hint="Upgrade with 'az upgrade'"
            )
        logger.debug("Client version %s satisfies >= %s", version, self.min_version)

    def check_identity(self) -> Identity:
        """Return the logged-in identity or raise PreflightError(NOT_AUTHENTICATED)"""
        try:
            identity = self.client.get_identity()
        except NotAuthenticatedError as e:
            raise PreflightError(PreflightFailure.NOT_AUTHENTICATED, str(e.args[0]))
        except ClientError as e:
            raise PreflightError(
                PreflightFailure.NOT_AUTHENTICATED,
                f"Could not read login state: {e.args[0]}"
            )
        logger.info("Authenticated as %s", identity.get_display_info())
        return identity

    def check_target(self, group: str, name: str) -> None:
        """Raise PreflightError(TARGET_NOT_FOUND) if the target does not exist"""
        try:
            exists = self.client.resource_exists(group, name)
        except ClientError as e:
            raise PreflightError(
                PreflightFailure.TARGET_NOT_FOUND,
                f"Could not look up {group}/{name}: {e.args[0]}"
            )

        if not exists:
            raise PreflightError(
                PreflightFailure.TARGET_NOT_FOUND,
                f"Target '{name}' not found in resource group '{group}'"
            )

    def check(self, request: DeploymentRequest) -> Identity:
        """
        Run all preflight checks in order, stopping at the first failure

        Args:
            request: Deployment request

        Returns:
            Identity of the authenticated operator

        Raises:
            PreflightError: On the first failed check
        """
        self.check_client()
        identity = self.check_identity()
        self.check_target(request.resource_group, request.target_name)
        return identity
