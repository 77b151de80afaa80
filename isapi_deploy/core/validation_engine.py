# isapi_deploy/core/validation_engine.py
"""Artifact validation stage"""

import logging
from pathlib import Path
from typing import Optional

from ..api.exceptions import CheckerUnavailableError, ValidationError
from ..checkers.base import DependencyChecker
from ..models.request import DeploymentRequest
from ..models.result import ValidationResult

logger = logging.getLogger(__name__)


class ArtifactValidator:
    """Confirm the artifact exists and passes the dependency checker

    Policy:
        - a missing artifact always halts, ``force`` does not apply
        - ``skip_validation`` bypasses the checker
        - an unavailable checker degrades to a skipped result with a warning
        - a failed check halts unless ``force`` is set
    """

    def __init__(self, checker: Optional[DependencyChecker] = None):
        self.checker = checker

    def validate(self, request: DeploymentRequest) -> ValidationResult:
        """Validate the request's artifact, see validate_artifact

        The configuration template must also exist, so a bad path fails
        here rather than after packaging has started.
        """
        result = self.validate_artifact(
            request.artifact_path,
            force=request.force,
            skip_validation=request.skip_validation
        )

        if not request.config_template_path.is_file():
            raise ValidationError(f"Configuration template not found: {request.config_template_path}")

        return result

    def validate_artifact(self,
                          artifact: Path,
                          force: bool = False,
                          skip_validation: bool = False) -> ValidationResult:
        """
        Validate an artifact on local disk

        Args:
            artifact: Path to the binary
            force: Let a failed check through with warnings
            skip_validation: Do not run the checker

        Returns:
            ValidationResult (failed only when ``force`` let it through)

        Raises:
            ValidationError: If the artifact is missing or fails without ``force``
        """
        artifact = Path(artifact)

        if not artifact.is_file():
            raise ValidationError(f"Artifact not found: {artifact}")

        if skip_validation:
            logger.info("Skipping dependency check for %s", artifact.name)
            return ValidationResult.skipped_result("Dependency check skipped by request")

        if self.checker is None:
            logger.warning("No dependency checker configured, skipping validation")
            return ValidationResult.skipped_result("No dependency checker configured")

        try:
            result = self.checker.check(artifact)
        except CheckerUnavailableError as e:
            logger.warning("%s; continuing without validation", e)
            return ValidationResult.skipped_result(str(e), checker=self.checker.name)

        if result.passed:
            logger.info("Artifact %s passed %s checks", artifact.name, self.checker.name)
            return result

        if not force:
            raise ValidationError(f"Artifact {artifact.name} failed validation", result.messages)

        for message in result.messages:
            logger.warning("Validation: %s", message)
        logger.warning("Proceeding despite validation failures because --force was given")
        return result
