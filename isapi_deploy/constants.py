"""Global constants for isapi-deploy"""

from enum import Enum

APP_NAME = "isapi-deploy"
LOG_FORMAT = "%(message)s"

# Project identification
PROJECT_CONFIG_FILE = ".isapi-deploy.yaml"
CONFIG_TEMPLATE_FILE = "web.config.template"

# Package layout
DEFAULT_PLACEHOLDER = "IsapiFilter.dll"
DEFAULT_BINARY_DIR = "bin"
DEFAULT_CONFIG_NAME = "web.config"
LANDING_PAGE_NAME = "index.html"
SITE_DIR_NAME = "site"
STAGING_PREFIX = "isapi-deploy-"
ARCHIVE_FILE_PATTERN = "{target}-package.zip"

# Validation
DEFAULT_CHECKER = "pe-header"
SUPPORTED_CHECKERS = ["pe-header", "dumpbin"]
DEFAULT_ARCHITECTURE = "x64"

# PE/COFF machine types
PE_MACHINE_TYPES = {
    0x014C: "x86",
    0x8664: "x64",
    0xAA64: "arm64",
    0x01C4: "arm",
}
PE_CHARACTERISTIC_DLL = 0x2000

# Debug builds of the MSVC runtime are not redistributable
DEBUG_RUNTIME_PATTERNS = [
    r"^msvc[pr]\d+d\.dll$",
    r"^vcruntime\d+d\.dll$",
    r"^vcruntime\d+_\d+d\.dll$",
    r"^ucrtbased\.dll$",
    r"^concrt\d+d\.dll$",
]

# Management client
DEFAULT_CLIENT_EXECUTABLE = "az"
DEFAULT_CLIENT_MIN_VERSION = "2.50.0"

# Environment variables
ENV_CONFIG_PATH = "ISAPI_DEPLOY_CONFIG"
ENV_LOG_LEVEL = "ISAPI_DEPLOY_LOG_LEVEL"


class PipelineStage(Enum):
    PREFLIGHT = "preflight"
    VALIDATION = "validation"
    PACKAGING = "packaging"
    UPLOAD = "upload"
    REPORT = "report"


class PreflightFailure(Enum):
    CLIENT_MISSING = "client_missing"
    NOT_AUTHENTICATED = "not_authenticated"
    TARGET_NOT_FOUND = "target_not_found"


# Error codes
class ErrorCode:
    CLIENT_MISSING = "ID001"
    NOT_AUTHENTICATED = "ID002"
    TARGET_NOT_FOUND = "ID003"
    VALIDATION_FAILED = "ID004"
    PACKAGING_FAILED = "ID005"
    UPLOAD_FAILED = "ID006"
    CONFIG_FORMAT_ERROR = "ID007"
    CLIENT_COMMAND_FAILED = "ID008"
    CHECKER_UNAVAILABLE = "ID009"


# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_ARROW = "→"

# Messages templates
MSG_TARGET_NOT_FOUND_HINT = (
    "Provision the App Service first (for example from the infrastructure templates), "
    "then re-run the deployment."
)
MSG_NOT_AUTHENTICATED_HINT = "Run 'az login' and try again."
MSG_CLIENT_MISSING_HINT = "Install the Azure CLI: https://learn.microsoft.com/cli/azure/install-azure-cli"
