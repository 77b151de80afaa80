"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import (
    DEFAULT_PLACEHOLDER,
    DEFAULT_BINARY_DIR,
    DEFAULT_CONFIG_NAME,
    DEFAULT_CHECKER,
    DEFAULT_ARCHITECTURE,
    DEFAULT_CLIENT_EXECUTABLE,
    DEFAULT_CLIENT_MIN_VERSION,
    CONFIG_TEMPLATE_FILE,
    SUPPORTED_CHECKERS,
    PE_MACHINE_TYPES,
)


def _check_str(key: str, value: Any, optional: bool = False) -> None:
    """Raise ValueError unless value is a string (or None when optional)"""
    if value is None and optional:
        return
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {type(value).__name__}: {value!r}")


@dataclass
class PackageSettings:
    """Package assembly settings"""

    placeholder: str = DEFAULT_PLACEHOLDER
    binary_dir: str = DEFAULT_BINARY_DIR
    config_name: str = DEFAULT_CONFIG_NAME
    landing_page: bool = True

    def __post_init__(self):
        _check_str("package.placeholder", self.placeholder)
        _check_str("package.binary_dir", self.binary_dir)
        _check_str("package.config_name", self.config_name)
        if not isinstance(self.landing_page, bool):
            raise ValueError(f"package.landing_page must be true or false: {self.landing_page!r}")

        if not self.placeholder:
            raise ValueError("package.placeholder cannot be empty")
        if not self.binary_dir or self.binary_dir.startswith(("/", "\\")) or ".." in self.binary_dir:
            raise ValueError(f"package.binary_dir must be a relative directory: {self.binary_dir!r}")
        if not self.config_name:
            raise ValueError("package.config_name cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "placeholder": self.placeholder,
            "binary_dir": self.binary_dir,
            "config_name": self.config_name,
            "landing_page": self.landing_page,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PackageSettings':
        """Create from dictionary"""
        return cls(**data)


@dataclass
class ValidationSettings:
    """Artifact validation settings"""

    checker: str = DEFAULT_CHECKER
    architecture: str = DEFAULT_ARCHITECTURE
    disallowed_dependencies: List[str] = field(default_factory=list)

    def __post_init__(self):
        _check_str("validation.checker", self.checker)
        _check_str("validation.architecture", self.architecture)
        if not isinstance(self.disallowed_dependencies, list):
            raise ValueError("validation.disallowed_dependencies must be a list of DLL names")
        for dependency in self.disallowed_dependencies:
            _check_str("validation.disallowed_dependencies entry", dependency)

        if self.checker not in SUPPORTED_CHECKERS:
            raise ValueError(
                f"Unsupported checker: {self.checker}. "
                f"Choose from: {', '.join(SUPPORTED_CHECKERS)}"
            )
        if self.architecture not in PE_MACHINE_TYPES.values():
            raise ValueError(f"Unsupported architecture: {self.architecture}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "checker": self.checker,
            "architecture": self.architecture,
            "disallowed_dependencies": list(self.disallowed_dependencies),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ValidationSettings':
        """Create from dictionary"""
        return cls(**data)


@dataclass
class ClientSettings:
    """Management client settings"""

    executable: str = DEFAULT_CLIENT_EXECUTABLE
    min_version: Optional[str] = DEFAULT_CLIENT_MIN_VERSION
    command_timeout: Optional[float] = None

    def __post_init__(self):
        _check_str("client.executable", self.executable)
        _check_str("client.min_version", self.min_version, optional=True)
        # bool is an int subclass, reject it explicitly
        if self.command_timeout is not None and (
            isinstance(self.command_timeout, bool)
            or not isinstance(self.command_timeout, (int, float))
            or self.command_timeout <= 0
        ):
            raise ValueError(f"client.command_timeout must be a positive number: {self.command_timeout!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "executable": self.executable,
            "min_version": self.min_version,
            "command_timeout": self.command_timeout,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClientSettings':
        """Create from dictionary"""
        return cls(**data)


@dataclass
class ToolConfig:
    """Complete tool configuration

    ``source_path`` is the file the configuration was loaded from, if
    any. Relative paths in the file resolve against its directory.
    """

    subscription: Optional[str] = None
    resource_group: Optional[str] = None
    name: Optional[str] = None
    config_template: Optional[str] = None
    package: PackageSettings = field(default_factory=PackageSettings)
    validation: ValidationSettings = field(default_factory=ValidationSettings)
    client: ClientSettings = field(default_factory=ClientSettings)
    source_path: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self):
        for key in ("subscription", "resource_group", "name", "config_template"):
            _check_str(key, getattr(self, key), optional=True)

    @property
    def base_dir(self) -> Path:
        """Directory relative paths resolve against"""
        if self.source_path is not None:
            return self.source_path.parent
        return Path.cwd()

    def template_path(self) -> Path:
        """Resolve the configured web.config template path"""
        path = Path(self.config_template or CONFIG_TEMPLATE_FILE).expanduser()
        if path.is_absolute():
            return path
        return self.base_dir / path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {}
        for key in ("subscription", "resource_group", "name", "config_template"):
            value = getattr(self, key)
            if value:
                data[key] = value

        data["package"] = self.package.to_dict()
        data["validation"] = self.validation.to_dict()
        data["client"] = self.client.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source_path: Optional[Path] = None) -> 'ToolConfig':
        """Create from dictionary"""
        return cls(
            subscription=data.get("subscription") or None,
            resource_group=data.get("resource_group"),
            name=data.get("name"),
            config_template=data.get("config_template"),
            package=PackageSettings.from_dict(data.get("package") or {}),
            validation=ValidationSettings.from_dict(data.get("validation") or {}),
            client=ClientSettings.from_dict(data.get("client") or {}),
            source_path=source_path,
        )
