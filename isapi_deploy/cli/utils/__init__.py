"""CLI utility functions"""

from .output import (
    console,
    format_outcome,
    format_validation_result,
    print_outcome_json,
    print_error,
    print_warning,
    print_success,
)

__all__ = [
    'console',
    'format_outcome',
    'format_validation_result',
    'print_outcome_json',
    'print_error',
    'print_warning',
    'print_success',
]
