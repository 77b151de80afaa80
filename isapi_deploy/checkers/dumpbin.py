# isapi_deploy/checkers/dumpbin.py
"""Checker backed by the MSVC dumpbin tool"""

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from .base import DependencyChecker
from ..api.exceptions import CheckerUnavailableError
from ..models.result import ValidationResult

logger = logging.getLogger(__name__)

MACHINE_PATTERN = re.compile(r"^\s*[0-9A-Fa-f]+ machine \((?P<arch>[^)]+)\)", re.MULTILINE)
DEPENDENCIES_HEADER = "Image has the following dependencies:"


def parse_machine(output: str) -> Optional[str]:
    """Extract the machine architecture from dumpbin /headers output"""
    match = MACHINE_PATTERN.search(output)
    if match:
        return match.group("arch").lower()
    return None


def parse_dependencies(output: str) -> List[str]:
    """Extract DLL names from dumpbin /dependents output"""
    dependencies = []
    lines = output.splitlines()

    try:
        start = next(i for i, line in enumerate(lines) if DEPENDENCIES_HEADER in line)
    except StopIteration:
        return dependencies

    for line in lines[start + 1:]:
        name = line.strip()
        if not name:
            if dependencies:
                break
            continue
        dependencies.append(name)

    return dependencies


class DumpbinChecker(DependencyChecker):
    """Runs ``dumpbin /headers /dependents`` against the artifact"""

    name = "dumpbin"

    def __init__(self, *args, executable: str = "dumpbin", **kwargs):
        super().__init__(*args, **kwargs)
        self.executable = executable

    def check(self, path: Path) -> ValidationResult:
        tool = shutil.which(self.executable)
        if tool is None:
            raise CheckerUnavailableError(self.name, f"'{self.executable}' not found on PATH")

        command = [tool, "/nologo", "/headers", "/dependents", str(path)]
        logger.debug("Running: %s", " ".join(command))

        try:
            completed = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise CheckerUnavailableError(self.name, str(e))

        result = ValidationResult(checker=self.name)

        if completed.returncode != 0:
            error = completed.stderr.strip() or completed.stdout.strip()
            result.add_failure(f"dumpbin exited with code {completed.returncode}: {error}")
            return result

        machine = parse_machine(completed.stdout)
        if machine is None:
            result.add_failure("Could not determine machine type")
        elif machine != self.architecture:
            result.add_failure(f"Architecture is {machine}, expected {self.architecture}")
        else:
            result.add_message(f"Architecture: {machine}")

        dependencies = parse_dependencies(completed.stdout)
        if dependencies:
            result.add_message(f"Dependencies: {', '.join(dependencies)}")
        self.check_dependencies(dependencies, result)

        return result
