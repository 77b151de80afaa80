# isapi_deploy/clients/azure_cli.py
"""Azure App Service client backed by the az CLI"""

import json
import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Any

from .base import ManagementClient
from ..api.exceptions import ClientCommandError, ClientNotFoundError, NotAuthenticatedError
from ..constants import DEFAULT_CLIENT_EXECUTABLE
from ..models.request import Identity

logger = logging.getLogger(__name__)

NOT_FOUND_MARKERS = (
    "ResourceNotFound",
    "ResourceGroupNotFound",
    "could not be found",
    "was not found",
)


class AzureCliClient(ManagementClient):
    """Management client that shells out to ``az``"""

    def __init__(self,
                 subscription: Optional[str] = None,
                 executable: str = DEFAULT_CLIENT_EXECUTABLE,
                 command_timeout: Optional[float] = None):
        super().__init__(subscription)
        self.executable = executable
        self.command_timeout = command_timeout

    def _build_command(self, args: List[str], scoped: bool = True) -> List[str]:
        command = [self.executable, *args]
        if scoped and self.subscription:
            command.extend(["--subscription", self.subscription])
        return command

    def _resolve(self, command: List[str]) -> List[str]:
        # az ships as az.cmd on Windows, which CreateProcess will not find by bare name
        return [shutil.which(command[0]) or command[0], *command[1:]]

    def _run(self, args: List[str], scoped: bool = True) -> subprocess.CompletedProcess:
        """Run an az command and capture its output

        Raises:
            ClientNotFoundError: If the executable is missing
            ClientCommandError: If the command times out
        """
        command = self._build_command(args, scoped)
        logger.debug("Running: %s", shlex.join(command))

        try:
            return subprocess.run(
                self._resolve(command),
                capture_output=True,
                text=True,
                timeout=self.command_timeout
            )
        except FileNotFoundError:
            raise ClientNotFoundError(self.executable)
        except subprocess.TimeoutExpired:
            raise ClientCommandError(command, -1, f"timed out after {self.command_timeout}s")

    def _run_checked(self, args: List[str], scoped: bool = True) -> str:
        """Run an az command and return stdout, raising on failure"""
        result = self._run(args, scoped)
        if result.returncode != 0:
            raise ClientCommandError(self._build_command(args, scoped), result.returncode, result.stderr)
        return result.stdout

    def _run_json(self, args: List[str], scoped: bool = True) -> Any:
        output = self._run_checked([*args, "--output", "json"], scoped)
        try:
            return json.loads(output or "null")
        except json.JSONDecodeError as e:
            raise ClientCommandError(self._build_command(args, scoped), 0, f"invalid JSON output: {e}")

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def get_version(self) -> Optional[str]:
        try:
            data = self._run_json(["version"], scoped=False)
        except ClientCommandError as e:
            logger.debug("Could not determine az version: %s", e)
            return None
        if isinstance(data, dict):
            return data.get("azure-cli")
        return None

    def get_identity(self) -> Identity:
        result = self._run(["account", "show", "--output", "json"])
        if result.returncode != 0:
            message = result.stderr.strip() or "Not logged in to Azure CLI"
            raise NotAuthenticatedError(message.splitlines()[-1])
        try:
            return Identity.from_account(json.loads(result.stdout))
        except json.JSONDecodeError:
            raise NotAuthenticatedError("Could not parse 'az account show' output")

    def resource_exists(self, group: str, name: str) -> bool:
        args = ["webapp", "show", "--resource-group", group, "--name", name, "--output", "json"]
        result = self._run(args)
        if result.returncode == 0:
            return True
        if any(marker in result.stderr for marker in NOT_FOUND_MARKERS):
            return False
        raise ClientCommandError(self._build_command(args), result.returncode, result.stderr)

    def stop(self, name: str, group: str) -> None:
        logger.info("Stopping %s/%s", group, name)
        self._run_checked(["webapp", "stop", "--resource-group", group, "--name", name])

    def start(self, name: str, group: str) -> None:
        logger.info("Starting %s/%s", group, name)
        self._run_checked(["webapp", "start", "--resource-group", group, "--name", name])

    def deploy_package(self, name: str, group: str, archive_path: Path) -> None:
        logger.info("Deploying %s to %s/%s", archive_path.name, group, name)
        self._run_checked([
            "webapp", "deploy",
            "--resource-group", group,
            "--name", name,
            "--src-path", str(archive_path),
            "--type", "zip",
        ])

    def get_endpoint(self, name: str, group: str) -> str:
        host = self._run_checked([
            "webapp", "show",
            "--resource-group", group,
            "--name", name,
            "--query", "defaultHostName",
            "--output", "tsv",
        ]).strip()
        return f"https://{host}" if host else ""

    def tail_logs(self, name: str, group: str) -> int:
        command = self._build_command(["webapp", "log", "tail", "--resource-group", group, "--name", name])
        logger.debug("Running: %s", shlex.join(command))
        try:
            return subprocess.run(self._resolve(command)).returncode
        except FileNotFoundError:
            raise ClientNotFoundError(self.executable)

    def log_tail_command(self, name: str, group: str) -> str:
        return shlex.join(self._build_command(["webapp", "log", "tail", "--resource-group", group, "--name", name]))

    def browse_command(self, name: str, group: str) -> str:
        return shlex.join(self._build_command(["webapp", "browse", "--resource-group", group, "--name", name]))
