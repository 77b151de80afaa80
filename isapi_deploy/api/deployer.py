"""Deployer API for the validation-and-package pipeline"""

import logging
from pathlib import Path
from typing import Optional, Callable

from ..checkers import get_checker
from ..checkers.base import DependencyChecker
from ..clients import create_client
from ..clients.base import ManagementClient
from ..constants import PipelineStage
from ..core import (
    PreflightChecker,
    ArtifactValidator,
    PackageAssembler,
    Uploader,
    staging_directory,
)
from ..models import DeploymentRequest, DeploymentOutcome, ToolConfig
from .exceptions import IsapiDeployError

logger = logging.getLogger(__name__)

StageCallback = Callable[[PipelineStage, str], None]


class Deployer:
    """Run preflight, validation, packaging, upload and report in sequence

    Stages run strictly one after another. The first failure ends the run;
    the staging directory is removed on every exit path.
    """

    def __init__(self,
                 client: ManagementClient,
                 checker: Optional[DependencyChecker] = None,
                 config: Optional[ToolConfig] = None,
                 staging_parent: Optional[Path] = None,
                 on_stage: Optional[StageCallback] = None):
        """
        Initialize deployer

        Args:
            client: Management client, already bound to a subscription
            checker: Dependency checker used in the validation stage
            config: Tool configuration
            staging_parent: Directory for staging areas (system temp by default)
            on_stage: Called with (stage, description) as each stage starts
        """
        self.config = config or ToolConfig()
        self.client = client
        self.staging_parent = staging_parent
        self.on_stage = on_stage

        self.preflight = PreflightChecker(client, self.config.client.min_version)
        self.validator = ArtifactValidator(checker)
        self.assembler = PackageAssembler(self.config.package)
        self.uploader = Uploader(client)

    @classmethod
    def from_config(cls,
                    config: ToolConfig,
                    subscription: Optional[str] = None,
                    checker_name: Optional[str] = None,
                    **kwargs) -> 'Deployer':
        """Create a deployer with the configured client and checker"""
        client = create_client(config.client, subscription or config.subscription)
        checker = get_checker(checker_name, config.validation)
        return cls(client, checker=checker, config=config, **kwargs)

    def _enter(self, outcome: DeploymentOutcome, stage: PipelineStage, description: str) -> None:
        outcome.stage_reached = stage
        logger.debug("Stage %s: %s", stage.value, description)
        if self.on_stage:
            self.on_stage(stage, description)

    def run(self, request: DeploymentRequest) -> DeploymentOutcome:
        """
        Execute the pipeline for one request

        Pipeline failures are reported in the outcome, never raised.

        Args:
            request: Deployment request

        Returns:
            DeploymentOutcome
        """
        outcome = DeploymentOutcome(
            succeeded=True,
            resource_group=request.resource_group,
            target_name=request.target_name,
            validate_only=request.validate_only,
        )

        try:
            self._run_stages(request, outcome)
        except IsapiDeployError as e:
            logger.debug("Pipeline stopped at %s: %s", outcome.stage_reached.value, e)
            outcome.add_error(str(e))
        finally:
            outcome.complete()

        return outcome

    def _run_stages(self, request: DeploymentRequest, outcome: DeploymentOutcome) -> None:
        self._enter(outcome, PipelineStage.PREFLIGHT, "Checking client, login and target")
        self.preflight.check(request)

        self._enter(outcome, PipelineStage.VALIDATION, f"Validating {request.artifact_name}")
        validation = self.validator.validate(request)
        outcome.validation = validation

        if validation.skipped:
            if not request.skip_validation:
                outcome.add_warning(f"Validation skipped: {validation.messages[0]}")
        elif not validation.passed:
            for message in validation.messages:
                outcome.add_warning(f"Validation: {message}")

        if request.validate_only:
            outcome.next_steps.append("Re-run without --validate-only to package and upload")
            return

        with staging_directory(self.staging_parent) as staging:
            self._enter(outcome, PipelineStage.PACKAGING, "Assembling package")
            package = self.assembler.assemble(request, staging)

            action = "Stopping, uploading and restarting" if request.force else "Uploading"
            self._enter(outcome, PipelineStage.UPLOAD, f"{action} {package.archive_path.name}")
            self.uploader.upload(request, package.archive_path)

        self._enter(outcome, PipelineStage.REPORT, "Collecting endpoint")
        outcome.endpoint_url = self.uploader.resolve_endpoint(request)

        for command in (
            self.client.log_tail_command(request.target_name, request.resource_group),
            self.client.browse_command(request.target_name, request.resource_group),
        ):
            if command:
                outcome.next_steps.append(command)
