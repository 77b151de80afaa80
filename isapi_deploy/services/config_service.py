"""Configuration management service"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import PROJECT_CONFIG_FILE, ENV_CONFIG_PATH
from ..models.config import ToolConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for locating and loading the tool configuration"""

    def __init__(self, config_path: Optional[Path] = None, search_dir: Optional[Path] = None):
        """Initialize config service

        Args:
            config_path: Explicit configuration file (``--config``)
            search_dir: Directory searched for the default config file
        """
        self.explicit_path = Path(config_path) if config_path else None
        self.search_dir = Path(search_dir) if search_dir else Path.cwd()
        self._config: Optional[ToolConfig] = None

    @property
    def config(self) -> ToolConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def find_config_file(self) -> Optional[Path]:
        """Locate the configuration file

        Order: explicit path, ``$ISAPI_DEPLOY_CONFIG``, then
        ``.isapi-deploy.yaml`` in the search directory.

        Returns:
            Path to the configuration file or None when using defaults

        Raises:
            ConfigError: If an explicitly requested file does not exist
        """
        if self.explicit_path:
            if not self.explicit_path.is_file():
                raise ConfigError(f"Configuration file not found: {self.explicit_path}")
            return self.explicit_path

        env_path = os.environ.get(ENV_CONFIG_PATH)
        if env_path:
            path = Path(env_path).expanduser()
            if not path.is_file():
                raise ConfigError(f"Configuration file from ${ENV_CONFIG_PATH} not found: {path}")
            return path

        default_path = self.search_dir / PROJECT_CONFIG_FILE
        if default_path.is_file():
            return default_path

        return None

    def load_config(self) -> ToolConfig:
        """Load configuration from file, falling back to defaults

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is not valid YAML or has invalid values
        """
        config_path = self.find_config_file()

        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            self._config = ToolConfig()
            return self._config

        logger.debug("Loading configuration from %s", config_path)
        content = config_path.read_text(encoding="utf-8")

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {config_path}")

        try:
            self._config = ToolConfig.from_dict(data, source_path=config_path)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}")

        # Unexpanded variables mean the environment did not provide them
        if self._config.subscription and self._config.subscription.startswith("$"):
            logger.warning("Subscription variable %s is not set, ignoring it", self._config.subscription)
            self._config.subscription = None

        return self._config

    @staticmethod
    def dump_config(config: ToolConfig) -> str:
        """Serialize configuration to YAML"""
        return yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False)
