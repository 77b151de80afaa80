"""Deployment request model"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class DeploymentRequest:
    """Operator-supplied parameters for a single pipeline run"""

    resource_group: str
    target_name: str
    artifact_path: Path
    config_template_path: Path
    subscription: Optional[str] = None
    force: bool = False
    validate_only: bool = False
    skip_validation: bool = False

    def __post_init__(self):
        """Normalize paths and validate identifiers"""
        if not self.resource_group:
            raise ValueError("resource_group is required")
        if not self.target_name:
            raise ValueError("target_name is required")

        # frozen dataclass, so bypass __setattr__
        object.__setattr__(self, "artifact_path", Path(self.artifact_path))
        object.__setattr__(self, "config_template_path", Path(self.config_template_path))

    @property
    def artifact_name(self) -> str:
        """File name of the binary artifact"""
        return self.artifact_path.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "resource_group": self.resource_group,
            "target_name": self.target_name,
            "artifact_path": str(self.artifact_path),
            "config_template_path": str(self.config_template_path),
            "subscription": self.subscription,
            "force": self.force,
            "validate_only": self.validate_only,
            "skip_validation": self.skip_validation,
        }


@dataclass
class Identity:
    """Authenticated management-client account"""

    user: str
    subscription_id: str
    subscription_name: str = ""
    tenant_id: str = ""

    @classmethod
    def from_account(cls, data: Dict[str, Any]) -> 'Identity':
        """Create from `az account show` output"""
        user = data.get("user") or {}
        return cls(
            user=user.get("name", "") if isinstance(user, dict) else str(user),
            subscription_id=data.get("id", ""),
            subscription_name=data.get("name", ""),
            tenant_id=data.get("tenantId", ""),
        )

    def get_display_info(self) -> str:
        """Get display information for the identity"""
        if self.subscription_name:
            return f"{self.user} ({self.subscription_name})"
        return f"{self.user} ({self.subscription_id})"
