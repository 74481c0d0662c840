"""
Data utility functions for record values and null handling.

This module provides helpers for cleaning record values read from data files,
detecting empty values and normalizing region codes.
"""

import pandas as pd
from typing import Any, Dict, List


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a value to string, handling nulls and cleaning whitespace.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if is_null_or_empty(value):
        return ""

    return str(value).strip()


def is_null_or_empty(value: Any) -> bool:
    """
    Check if a value is null, empty, or contains only whitespace.

    Args:
        value: Value to check

    Returns:
        True if value is null/empty, False otherwise
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    if isinstance(value, (list, tuple, dict, set)):
        return False

    return bool(pd.isna(value))


def normalize_code(value: Any) -> str:
    """
    Normalize a region code for case-insensitive comparison and path segments.

    Args:
        value: Raw code value (codes such as '01' or 840 may be numeric in YAML)

    Returns:
        Lower-cased, stripped code, or empty string if null
    """
    return safe_string_conversion(value).lower()


def records_to_dataframe(rows: List[Dict[str, Any]], columns: List[str]) -> pd.DataFrame:
    """
    Build a DataFrame with a fixed column order from a list of row dicts.

    Args:
        rows: Row dictionaries
        columns: Column order for the resulting frame

    Returns:
        DataFrame with exactly the given columns
    """
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows).reindex(columns=columns)
