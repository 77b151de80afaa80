"""End-to-end pipeline tests with fake client and checker."""

from pathlib import Path

import pytest

from isapi_deploy.api import Deployer
from isapi_deploy.constants import PipelineStage
from isapi_deploy.models import ToolConfig, ValidationResult

from conftest import FakeChecker, FakeClient


def _failing() -> ValidationResult:
    result = ValidationResult()
    result.add_failure("Depends on debug runtime VCRUNTIME140D.dll; rebuild in Release configuration")
    return result


def _deployer(client, checker=None, staging_parent=None, **kwargs) -> Deployer:
    return Deployer(client, checker=checker or FakeChecker(), staging_parent=staging_parent, **kwargs)


def test_skip_validation_scenario(make_request, staging_parent: Path) -> None:
    """Existing Filter.dll, skip_validation, existing target: uploads and reports the URL."""
    client = FakeClient()
    checker = FakeChecker()

    outcome = _deployer(client, checker, staging_parent).run(make_request(skip_validation=True))

    assert outcome.succeeded
    assert outcome.exit_code == 0
    assert checker.checked == []
    assert "bin/Filter.dll" in client.deployed_entries
    assert outcome.endpoint_url == "https://app-legacy.azurewebsites.net"
    assert outcome.stage_reached is PipelineStage.REPORT
    assert client.calls == ["identity", "exists", "deploy"]


def test_missing_artifact_stops_before_packaging(make_request, staging_parent, tmp_path) -> None:
    client = FakeClient()
    request = make_request(artifact_path=tmp_path / "absent.dll")

    outcome = _deployer(client, staging_parent=staging_parent).run(request)

    assert not outcome.succeeded
    assert outcome.exit_code == 1
    assert outcome.stage_reached is PipelineStage.VALIDATION
    assert "Artifact not found" in outcome.errors[0]
    assert "deploy" not in client.calls
    assert list(staging_parent.iterdir()) == []


@pytest.mark.parametrize("fail_deploy", [False, True])
def test_staging_directory_is_removed(make_request, staging_parent, fail_deploy) -> None:
    client = FakeClient(fail_deploy=fail_deploy)

    outcome = _deployer(client, staging_parent=staging_parent).run(make_request())

    assert outcome.succeeded is not fail_deploy
    # the archive existed while it was being uploaded
    assert client.deployed_archive is not None
    assert client.deployed_archive.parent.parent == staging_parent
    assert not client.deployed_archive.exists()
    assert list(staging_parent.iterdir()) == []


def test_validation_failure_without_force_exits_1_without_upload(make_request, staging_parent) -> None:
    client = FakeClient()

    outcome = _deployer(client, FakeChecker(result=_failing()), staging_parent).run(make_request())

    assert outcome.exit_code == 1
    assert "deploy" not in client.calls
    assert "VCRUNTIME140D.dll" in outcome.errors[0]


def test_validation_failure_with_force_uploads_and_reports_warnings(make_request, staging_parent) -> None:
    client = FakeClient()

    outcome = _deployer(client, FakeChecker(result=_failing()), staging_parent).run(make_request(force=True))

    assert outcome.succeeded
    assert "deploy" in client.calls
    assert any("VCRUNTIME140D.dll" in w for w in outcome.warnings)
    assert outcome.validation is not None and not outcome.validation.passed


def test_failed_upload_after_stop_restarts_and_exits_1(make_request, staging_parent) -> None:
    client = FakeClient(fail_deploy=True)

    outcome = _deployer(client, staging_parent=staging_parent).run(make_request(force=True))

    assert outcome.exit_code == 1
    assert outcome.stage_reached is PipelineStage.UPLOAD
    assert client.calls[-3:] == ["stop", "deploy", "start"]
    assert outcome.endpoint_url == ""


def test_preflight_failure_stops_everything(make_request, staging_parent) -> None:
    client = FakeClient(exists=False)
    checker = FakeChecker()

    outcome = _deployer(client, checker, staging_parent).run(make_request())

    assert outcome.exit_code == 1
    assert outcome.stage_reached is PipelineStage.PREFLIGHT
    assert checker.checked == []
    assert "Provision" in outcome.errors[0]


def test_validate_only_stops_after_validation(make_request, staging_parent) -> None:
    client = FakeClient()

    outcome = _deployer(client, staging_parent=staging_parent).run(make_request(validate_only=True))

    assert outcome.succeeded
    assert outcome.validate_only
    assert outcome.stage_reached is PipelineStage.VALIDATION
    assert "deploy" not in client.calls
    assert list(staging_parent.iterdir()) == []


def test_validate_only_with_force_reports_failures_as_warnings(make_request, staging_parent) -> None:
    client = FakeClient()
    request = make_request(validate_only=True, force=True)

    outcome = _deployer(client, FakeChecker(result=_failing()), staging_parent).run(request)

    assert outcome.succeeded
    assert outcome.warnings
    assert "deploy" not in client.calls


def test_unavailable_checker_is_a_warning(make_request, staging_parent) -> None:
    outcome = _deployer(FakeClient(), FakeChecker(unavailable=True), staging_parent).run(make_request())

    assert outcome.succeeded
    assert any("Validation skipped" in w for w in outcome.warnings)


def test_stage_callback_sees_every_stage(make_request, staging_parent) -> None:
    seen = []
    deployer = _deployer(FakeClient(), staging_parent=staging_parent,
                         on_stage=lambda stage, description: seen.append(stage))

    deployer.run(make_request())

    assert seen == [
        PipelineStage.PREFLIGHT,
        PipelineStage.VALIDATION,
        PipelineStage.PACKAGING,
        PipelineStage.UPLOAD,
        PipelineStage.REPORT,
    ]


def test_outcome_lists_next_steps_and_serializes(make_request, staging_parent) -> None:
    outcome = _deployer(FakeClient(), staging_parent=staging_parent).run(make_request())

    assert any("log tail" in step for step in outcome.next_steps)
    data = outcome.to_dict()
    assert data["succeeded"] is True
    assert data["stage_reached"] == "report"
    assert data["duration"] is not None


def test_custom_placeholder_from_config(make_request, staging_parent, tmp_path) -> None:
    template = tmp_path / "custom.template"
    template.write_text('<filter path="bin\\__FILTER__" />', encoding="utf-8")
    config = ToolConfig.from_dict({"package": {"placeholder": "__FILTER__"}})
    client = FakeClient()

    outcome = _deployer(client, staging_parent=staging_parent, config=config).run(
        make_request(config_template_path=template)
    )

    assert outcome.succeeded
    assert "web.config" in client.deployed_entries


def test_from_config_binds_subscription_to_client() -> None:
    deployer = Deployer.from_config(ToolConfig(subscription="from-file"), subscription="from-cli")
    assert deployer.client.subscription == "from-cli"

    deployer = Deployer.from_config(ToolConfig(subscription="from-file"))
    assert deployer.client.subscription == "from-file"


def test_missing_template_stops_before_packaging(make_request, staging_parent, tmp_path) -> None:
    client = FakeClient()
    request = make_request(config_template_path=tmp_path / "absent.template")

    outcome = _deployer(client, staging_parent=staging_parent).run(request)

    assert outcome.exit_code == 1
    assert outcome.stage_reached is PipelineStage.VALIDATION
    assert "Configuration template not found" in outcome.errors[0]
    assert "deploy" not in client.calls
    assert list(staging_parent.iterdir()) == []
