# isapi_deploy/cli/commands/__init__.py
"""CLI commands"""

from . import deploy
from . import validate
from . import doctor
from . import init
from . import logs

__all__ = [
    "deploy",
    "validate",
    "doctor",
    "init",
    "logs",
]
