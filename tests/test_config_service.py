"""Tests for configuration loading"""

from pathlib import Path

import pytest
import yaml

from isapi_deploy.api.exceptions import ConfigError
from isapi_deploy.constants import PROJECT_CONFIG_FILE, ENV_CONFIG_PATH
from isapi_deploy.models import ToolConfig
from isapi_deploy.services import ConfigService

CONFIG = """
subscription: ${TEST_SUBSCRIPTION}
resource_group: rg-legacy
name: app-legacy
package:
  placeholder: FILTER_DLL
validation:
  checker: dumpbin
  architecture: x86
  disallowed_dependencies:
    - MFC140D.dll
client:
  command_timeout: 120
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_CONFIG_PATH, raising=False)
    monkeypatch.delenv("TEST_SUBSCRIPTION", raising=False)


def test_defaults_without_file(tmp_path: Path) -> None:
    config = ConfigService(search_dir=tmp_path).load_config()

    assert config == ToolConfig()
    assert config.package.placeholder == "IsapiFilter.dll"
    assert config.validation.checker == "pe-header"


def test_loads_project_file_with_env_expansion(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TEST_SUBSCRIPTION", "sub-42")
    (tmp_path / PROJECT_CONFIG_FILE).write_text(CONFIG, encoding="utf-8")

    config = ConfigService(search_dir=tmp_path).load_config()

    assert config.subscription == "sub-42"
    assert config.resource_group == "rg-legacy"
    assert config.package.placeholder == "FILTER_DLL"
    assert config.validation.architecture == "x86"
    assert config.validation.disallowed_dependencies == ["MFC140D.dll"]
    assert config.client.command_timeout == 120


def test_unset_subscription_variable_is_dropped(tmp_path: Path, caplog) -> None:
    (tmp_path / PROJECT_CONFIG_FILE).write_text(CONFIG, encoding="utf-8")

    config = ConfigService(search_dir=tmp_path).load_config()

    assert config.subscription is None
    assert "TEST_SUBSCRIPTION" in caplog.text


def test_explicit_path_wins(tmp_path: Path) -> None:
    (tmp_path / PROJECT_CONFIG_FILE).write_text("name: from-search-dir\n", encoding="utf-8")
    explicit = tmp_path / "other.yaml"
    explicit.write_text("name: from-explicit\n", encoding="utf-8")

    config = ConfigService(config_path=explicit, search_dir=tmp_path).load_config()

    assert config.name == "from-explicit"


def test_env_path(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "env.yaml"
    path.write_text("name: from-env\n", encoding="utf-8")
    monkeypatch.setenv(ENV_CONFIG_PATH, str(path))

    assert ConfigService(search_dir=tmp_path).load_config().name == "from-env"


def test_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        ConfigService(config_path=tmp_path / "absent.yaml").load_config()


@pytest.mark.parametrize("content, message", [
    ("name: [unclosed\n", "Invalid YAML"),
    ("- a\n- b\n", "must be a mapping"),
    ("validation:\n  checker: objdump\n", "Unsupported checker"),
    ("package:\n  placeholder: ''\n", "placeholder cannot be empty"),
    ("package:\n  compression: 9\n", "Invalid configuration"),
    ("package:\n  binary_dir: 5\n", "binary_dir must be a string"),
    ("package:\n  placeholder: 1234\n", "placeholder must be a string"),
    ("package:\n  landing_page: maybe\n", "landing_page must be true or false"),
    ("validation:\n  checker: 5\n", "checker must be a string"),
    ("validation:\n  disallowed_dependencies: MFC140D.dll\n", "must be a list"),
    ("validation:\n  disallowed_dependencies: [1]\n", "entry must be a string"),
    ("client:\n  executable: [az]\n", "executable must be a string"),
    ("client:\n  min_version: 2.5\n", "min_version must be a string"),
    ("client:\n  command_timeout: soon\n", "command_timeout must be a positive number"),
    ("name: 42\n", "name must be a string"),
])
def test_invalid_files(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / PROJECT_CONFIG_FILE
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        ConfigService(search_dir=tmp_path).load_config()


def test_dump_config_is_loadable() -> None:
    config = ToolConfig(resource_group="rg-legacy", name="app-legacy")

    data = yaml.safe_load(ConfigService.dump_config(config))

    assert ToolConfig.from_dict(data) == config


def test_template_resolves_against_config_directory(tmp_path: Path, monkeypatch) -> None:
    project = tmp_path / "migration"
    project.mkdir()
    config_path = project / PROJECT_CONFIG_FILE
    config_path.write_text("config_template: templates/web.config.template\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    config = ConfigService(config_path=Path("migration") / PROJECT_CONFIG_FILE).load_config()

    assert config.template_path() == Path("migration") / "templates" / "web.config.template"


def test_default_template_without_file_is_in_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    config = ConfigService(search_dir=tmp_path).load_config()

    assert config.source_path is None
    assert config.template_path().resolve() == (tmp_path / "web.config.template").resolve()


def test_absolute_template_is_kept(tmp_path: Path) -> None:
    template = tmp_path / "abs.template"
    config = ToolConfig(config_template=str(template), source_path=tmp_path / "x" / PROJECT_CONFIG_FILE)

    assert config.template_path() == template
