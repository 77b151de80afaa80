# isapi_deploy/core/__init__.py
"""Core pipeline stages"""

from .preflight import PreflightChecker
from .validation_engine import ArtifactValidator
from .package_assembler import PackageAssembler, staging_directory
from .uploader import Uploader

__all__ = [
    "PreflightChecker",
    "ArtifactValidator",
    "PackageAssembler",
    "staging_directory",
    "Uploader",
]
