# isapi_deploy/utils/file_utils.py
"""File operation utilities"""

import hashlib
from pathlib import Path

SIZE_UNITS = ["B", "KB", "MB", "GB"]


def calculate_file_checksum(file_path: Path, algorithm: str = "sha256") -> str:
    """
    Calculate the hex digest of a file, reading it in 64 KiB blocks

    Args:
        file_path: Path to file
        algorithm: Any name accepted by ``hashlib.new``

    Returns:
        Hex digest string
    """
    digest = hashlib.new(algorithm)
    with open(file_path, "rb") as f:
        for block in iter(lambda: f.read(65536), b""):
            digest.update(block)
    return digest.hexdigest()


def format_size(size: int) -> str:
    """Format a byte count for log output, e.g. ``1.50 MB``"""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in SIZE_UNITS[1:-1]:
        if value < 1024:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} {SIZE_UNITS[-1]}"
