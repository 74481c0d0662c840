"""
Utility functions and helpers.
"""

from .data_utils import (
    safe_string_conversion,
    is_null_or_empty,
    normalize_code,
    records_to_dataframe
)
from .error_handler import create_error_context, log_error_details

__all__ = [
    'safe_string_conversion',
    'is_null_or_empty',
    'normalize_code',
    'records_to_dataframe',
    'create_error_context',
    'log_error_details'
]
