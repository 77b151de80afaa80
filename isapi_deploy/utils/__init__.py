"""Utility functions for isapi-deploy"""

from .file_utils import (
    calculate_file_checksum,
    format_size,
)

from .template_utils import (
    render_template,
    replace_placeholder,
)

__all__ = [
    "calculate_file_checksum",
    "format_size",
    "render_template",
    "replace_placeholder",
]
