"""Exception definitions for isapi-deploy API"""

from typing import List, Optional

from ..constants import (
    ErrorCode,
    PreflightFailure,
    MSG_CLIENT_MISSING_HINT,
    MSG_NOT_AUTHENTICATED_HINT,
    MSG_TARGET_NOT_FOUND_HINT,
)


class IsapiDeployError(Exception):
    """Base exception for isapi-deploy"""

    def __init__(self, message: str, error_code: str = None, hint: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code
        self.hint = hint

    def __str__(self) -> str:
        message = super().__str__()
        if self.hint:
            return f"{message}\nHint: {self.hint}"
        return message


class PreflightError(IsapiDeployError):
    """Environment is not ready for deployment"""

    _codes = {
        PreflightFailure.CLIENT_MISSING: (ErrorCode.CLIENT_MISSING, MSG_CLIENT_MISSING_HINT),
        PreflightFailure.NOT_AUTHENTICATED: (ErrorCode.NOT_AUTHENTICATED, MSG_NOT_AUTHENTICATED_HINT),
        PreflightFailure.TARGET_NOT_FOUND: (ErrorCode.TARGET_NOT_FOUND, MSG_TARGET_NOT_FOUND_HINT),
    }

    def __init__(self, reason: PreflightFailure, message: str, hint: Optional[str] = None):
        code, default_hint = self._codes[reason]
        super().__init__(message, code, hint or default_hint)
        self.reason = reason


class ValidationError(IsapiDeployError):
    """Artifact is unsuitable for deployment"""

    def __init__(self, message: str, messages: Optional[List[str]] = None):
        super().__init__(message, ErrorCode.VALIDATION_FAILED)
        self.messages = list(messages or [])

    def __str__(self) -> str:
        lines = [super().__str__()]
        for item in self.messages:
            lines.append(f"  - {item}")
        return "\n".join(lines)


class PackagingError(IsapiDeployError):
    """Local I/O error while assembling the package"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PACKAGING_FAILED)


class UploadError(IsapiDeployError):
    """Remote deployment call failed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.UPLOAD_FAILED)


class ConfigError(IsapiDeployError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class ClientError(IsapiDeployError):
    """Management client error"""
    pass


class ClientNotFoundError(ClientError):
    """Management client executable is not installed"""

    def __init__(self, executable: str):
        super().__init__(
            f"Management client not found: {executable}",
            ErrorCode.CLIENT_MISSING,
            MSG_CLIENT_MISSING_HINT,
        )
        self.executable = executable


class NotAuthenticatedError(ClientError):
    """Operator has no active login"""

    def __init__(self, message: str = "Not logged in to the management client"):
        super().__init__(message, ErrorCode.NOT_AUTHENTICATED, MSG_NOT_AUTHENTICATED_HINT)


class ClientCommandError(ClientError):
    """Management client command returned a failure"""

    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        summary = stderr.strip().splitlines()[-1] if stderr.strip() else "no error output"
        message = f"Command '{' '.join(command)}' failed with exit code {returncode}: {summary}"
        super().__init__(message, ErrorCode.CLIENT_COMMAND_FAILED)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class CheckerUnavailableError(IsapiDeployError):
    """Dependency checker cannot run on this machine"""

    def __init__(self, checker: str, reason: str):
        super().__init__(f"Dependency checker '{checker}' unavailable: {reason}",
                         ErrorCode.CHECKER_UNAVAILABLE)
        self.checker = checker
        self.reason = reason
