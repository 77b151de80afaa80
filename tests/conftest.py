"""Shared test fixtures."""

import struct
import zipfile
from pathlib import Path
from typing import List, Optional

import pytest

from isapi_deploy.api.exceptions import (
    CheckerUnavailableError,
    ClientCommandError,
    NotAuthenticatedError,
)
from isapi_deploy.checkers.base import DependencyChecker
from isapi_deploy.clients.base import ManagementClient
from isapi_deploy.models import DeploymentRequest, ValidationResult
from isapi_deploy.models.request import Identity

TEMPLATE = """<configuration>
  <system.webServer>
    <isapiFilters>
      <filter name="Legacy" path="D:\\home\\site\\wwwroot\\bin\\IsapiFilter.dll" />
    </isapiFilters>
  </system.webServer>
</configuration>
"""


class FakeClient(ManagementClient):
    """Scripted management client that records every call"""

    def __init__(self,
                 available: bool = True,
                 authenticated: bool = True,
                 exists: bool = True,
                 version: Optional[str] = "2.61.0",
                 fail_stop: bool = False,
                 fail_deploy: bool = False,
                 fail_start: bool = False,
                 endpoint: str = "https://app-legacy.azurewebsites.net",
                 login_timeout: bool = False,
                 subscription: Optional[str] = None):
        super().__init__(subscription)
        self.available = available
        self.authenticated = authenticated
        self.exists = exists
        self.version = version
        self.fail_stop = fail_stop
        self.fail_deploy = fail_deploy
        self.fail_start = fail_start
        self.endpoint = endpoint
        self.login_timeout = login_timeout
        self.calls: List[str] = []
        self.deployed_entries: List[str] = []
        self.deployed_archive: Optional[Path] = None

    def _fail(self, verb: str):
        raise ClientCommandError(["az", "webapp", verb], 1, f"ERROR: {verb} failed")

    def is_available(self):
        return self.available

    def get_version(self):
        return self.version

    def get_identity(self):
        self.calls.append("identity")
        if self.login_timeout:
            raise ClientCommandError(["az", "account", "show"], -1, "timed out after 30s")
        if not self.authenticated:
            raise NotAuthenticatedError("Please run 'az login' to setup account.")
        return Identity(user="ops@example.com", subscription_id="sub-1", subscription_name="Legacy")

    def resource_exists(self, group, name):
        self.calls.append("exists")
        return self.exists

    def stop(self, name, group):
        self.calls.append("stop")
        if self.fail_stop:
            self._fail("stop")

    def start(self, name, group):
        self.calls.append("start")
        if self.fail_start:
            self._fail("start")

    def deploy_package(self, name, group, archive_path):
        self.calls.append("deploy")
        self.deployed_archive = archive_path
        with zipfile.ZipFile(archive_path) as archive:
            self.deployed_entries = archive.namelist()
        if self.fail_deploy:
            self._fail("deploy")

    def get_endpoint(self, name, group):
        return self.endpoint

    def tail_logs(self, name, group):
        self.calls.append("logs")
        return 0

    def log_tail_command(self, name, group):
        return f"az webapp log tail --resource-group {group} --name {name}"


class FakeChecker(DependencyChecker):
    """Checker returning a scripted result"""

    name = "fake"

    def __init__(self, result: Optional[ValidationResult] = None, unavailable: bool = False):
        super().__init__()
        self.result = result or ValidationResult(passed=True, messages=["Architecture: x64"])
        self.unavailable = unavailable
        self.checked: List[Path] = []

    def check(self, path):
        self.checked.append(path)
        if self.unavailable:
            raise CheckerUnavailableError(self.name, "not installed")
        return self.result


def make_pe(path: Path, machine: int = 0x8664, dll: bool = True, magic: int = 0x20B) -> Path:
    """Write a minimal PE image header"""
    pe_offset = 0x80
    data = bytearray(pe_offset)
    data[0:2] = b"MZ"
    struct.pack_into("<I", data, 0x3C, pe_offset)
    characteristics = 0x0002 | (0x2000 if dll else 0)
    data += b"PE\0\0"
    data += struct.pack("<HHIIIHH", machine, 0, 0, 0, 0, 240, characteristics)
    data += struct.pack("<H", magic)
    data += bytes(238)
    path.write_bytes(bytes(data))
    return path


@pytest.fixture
def artifact(tmp_path: Path) -> Path:
    return make_pe(tmp_path / "Filter.dll")


@pytest.fixture
def template(tmp_path: Path) -> Path:
    path = tmp_path / "web.config.template"
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def staging_parent(tmp_path: Path) -> Path:
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def make_request(artifact: Path, template: Path):
    def _make(**overrides) -> DeploymentRequest:
        values = dict(
            resource_group="rg-legacy",
            target_name="app-legacy",
            artifact_path=artifact,
            config_template_path=template,
        )
        values.update(overrides)
        return DeploymentRequest(**values)

    return _make
