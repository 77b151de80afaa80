# isapi_deploy/checkers/base.py
"""Dependency checker abstract base class"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List

from ..constants import DEFAULT_ARCHITECTURE, DEBUG_RUNTIME_PATTERNS
from ..models.result import ValidationResult


class DependencyChecker(ABC):
    """Abstract base class for artifact dependency/architecture checkers"""

    name = "base"

    def __init__(self, architecture: str = DEFAULT_ARCHITECTURE,
                 disallowed_dependencies: Iterable[str] = ()):
        """
        Initialize checker

        Args:
            architecture: Required machine architecture (x64, x86, arm64)
            disallowed_dependencies: DLL names that must not be imported
        """
        self.architecture = architecture
        self.disallowed_dependencies = [d.lower() for d in disallowed_dependencies]

    @abstractmethod
    def check(self, path: Path) -> ValidationResult:
        """
        Check an artifact

        Args:
            path: Artifact path

        Returns:
            ValidationResult

        Raises:
            CheckerUnavailableError: If the checker cannot run here
        """
        pass

    def check_dependencies(self, dependencies: List[str], result: ValidationResult) -> None:
        """Flag debug runtimes and disallowed imports"""
        for dependency in dependencies:
            lowered = dependency.lower()
            if any(re.match(pattern, lowered) for pattern in DEBUG_RUNTIME_PATTERNS):
                result.add_failure(f"Depends on debug runtime {dependency}; rebuild in Release configuration")
            elif lowered in self.disallowed_dependencies:
                result.add_failure(f"Depends on disallowed library {dependency}")
