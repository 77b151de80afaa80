"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import PipelineStage


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ValidationResult:
    """Artifact validation result container"""

    passed: bool = True
    messages: List[str] = field(default_factory=list)
    skipped: bool = False
    checker: Optional[str] = None

    def add_failure(self, message: str) -> None:
        """Add failure message"""
        self.messages.append(message)
        self.passed = False

    def add_message(self, message: str) -> None:
        """Add informational message"""
        self.messages.append(message)

    @classmethod
    def skipped_result(cls, reason: str, checker: Optional[str] = None) -> 'ValidationResult':
        """Create a result for a check that did not run"""
        return cls(passed=True, messages=[reason], skipped=True, checker=checker)

    def __str__(self) -> str:
        if self.skipped:
            status = "skipped"
        else:
            status = "passed" if self.passed else "failed"
        lines = [f"Validation {status}" + (f" ({self.checker})" if self.checker else "")]
        for message in self.messages:
            lines.append(f"  - {message}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "passed": self.passed,
            "skipped": self.skipped,
            "checker": self.checker,
            "messages": list(self.messages),
        }


@dataclass
class StagingPackage:
    """Transient on-disk package assembled immediately before upload"""

    directory_path: Path
    binary_file_name: str
    rendered_config_path: Path
    archive_path: Path
    landing_page_path: Optional[Path] = None

    @property
    def archive_size(self) -> Optional[int]:
        """Get archive size if available"""
        if self.archive_path.exists():
            return self.archive_path.stat().st_size
        return None


@dataclass
class DeploymentOutcome:
    """Final result of a pipeline run"""

    succeeded: bool
    resource_group: str
    target_name: str
    endpoint_url: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stage_reached: PipelineStage = PipelineStage.PREFLIGHT
    validation: Optional[ValidationResult] = None
    validate_only: bool = False
    next_steps: List[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=_utcnow)
    end_time: Optional[datetime] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    @property
    def duration(self) -> Optional[float]:
        """Get run duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.succeeded = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def complete(self) -> None:
        """Mark run as complete"""
        self.end_time = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "succeeded": self.succeeded,
            "resource_group": self.resource_group,
            "target_name": self.target_name,
            "endpoint_url": self.endpoint_url,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "stage_reached": self.stage_reached.value,
            "validation": self.validation.to_dict() if self.validation else None,
            "validate_only": self.validate_only,
            "next_steps": list(self.next_steps),
            "duration": self.duration,
        }
