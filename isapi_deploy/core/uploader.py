# isapi_deploy/core/uploader.py
"""Upload & activate stage"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..api.exceptions import ClientError, UploadError
from ..clients.base import ManagementClient
from ..models.request import DeploymentRequest

logger = logging.getLogger(__name__)


class Uploader:
    """Push the package to the hosting target

    With ``force`` the target is bounced around the upload::

        Running -> stop -> Stopped -> upload -> Stopped (replaced) -> start -> Running

    The start is attempted whatever the upload outcome. Without ``force``
    the package is pushed to the live target.
    """

    def __init__(self, client: ManagementClient):
        self.client = client

    @contextmanager
    def stopped_target(self, request: DeploymentRequest) -> Iterator[None]:
        """Stop the target on enter and start it again on exit

        Raises:
            UploadError: If the target cannot be stopped, or cannot be
                restarted after an otherwise successful upload
        """
        name, group = request.target_name, request.resource_group

        try:
            self.client.stop(name, group)
        except ClientError as e:
            raise UploadError(f"Failed to stop {group}/{name}: {e.args[0]}")

        try:
            yield
        except BaseException:
            # keep the original failure, a restart error is only logged
            self._restart(request, raise_on_failure=False)
            raise

        self._restart(request, raise_on_failure=True)

    def _restart(self, request: DeploymentRequest, raise_on_failure: bool) -> None:
        name, group = request.target_name, request.resource_group
        try:
            self.client.start(name, group)
        except ClientError as e:
            message = f"Failed to restart {group}/{name}: {e.args[0]}"
            if raise_on_failure:
                raise UploadError(message)
            logger.error(message)

    def _deploy(self, request: DeploymentRequest, archive_path: Path) -> None:
        try:
            self.client.deploy_package(request.target_name, request.resource_group, archive_path)
        except ClientError as e:
            raise UploadError(f"Package deployment failed: {e.args[0]}")

    def upload(self, request: DeploymentRequest, archive_path: Path) -> None:
        """
        Upload the archive, bouncing the target when ``force`` is set

        Args:
            request: Deployment request
            archive_path: Zip archive to deploy

        Raises:
            UploadError: If any remote call fails
        """
        if request.force:
            logger.info("Stopping %s for a full restart cycle", request.target_name)
            with self.stopped_target(request):
                self._deploy(request, archive_path)
        else:
            self._deploy(request, archive_path)

    def resolve_endpoint(self, request: DeploymentRequest) -> str:
        """Return the target URL, or an empty string if it cannot be read"""
        try:
            return self.client.get_endpoint(request.target_name, request.resource_group)
        except ClientError as e:
            logger.warning("Could not read endpoint URL: %s", e.args[0])
            return ""
