# isapi_deploy/checkers/__init__.py
"""Artifact dependency/architecture checkers"""

from typing import Dict, Optional, Type

from .base import DependencyChecker
from .pe_header import PeHeaderChecker
from .dumpbin import DumpbinChecker
from ..api.exceptions import ConfigError
from ..models.config import ValidationSettings

_checkers: Dict[str, Type[DependencyChecker]] = {
    PeHeaderChecker.name: PeHeaderChecker,
    DumpbinChecker.name: DumpbinChecker,
}


def get_checker(name: Optional[str] = None,
                settings: Optional[ValidationSettings] = None) -> DependencyChecker:
    """Create a checker by name

    Args:
        name: Checker name, defaults to the configured one
        settings: Validation settings

    Returns:
        Checker instance

    Raises:
        ConfigError: If the checker name is unknown
    """
    settings = settings or ValidationSettings()
    name = name or settings.checker

    if name not in _checkers:
        raise ConfigError(f"Unknown checker: {name}. Available: {', '.join(sorted(_checkers))}")

    return _checkers[name](
        architecture=settings.architecture,
        disallowed_dependencies=settings.disallowed_dependencies
    )


__all__ = [
    "DependencyChecker",
    "PeHeaderChecker",
    "DumpbinChecker",
    "get_checker",
]
