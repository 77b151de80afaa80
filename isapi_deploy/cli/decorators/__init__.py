# isapi_deploy/cli/decorators/__init__.py
"""CLI decorators"""

from .config import require_config

__all__ = [
    'require_config',
]
