"""
Utility functions for shellres.

This module provides helper functions shared by the parser, writer and CLI.
"""
import numpy as np
import logging
from typing import Union, Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

def update_dict_recursively(base_dict: dict, update_with: dict) -> dict:
    """
    Recursively update a dictionary with another dictionary.

    Args:
        base_dict: Base dictionary to update
        update_with: Dictionary containing updates

    Returns:
        Updated dictionary
    """
    for k, v_update in update_with.items():
        if isinstance(v_update, dict) and k in base_dict and isinstance(base_dict[k], dict):
            update_dict_recursively(base_dict[k], v_update)
        else:
            base_dict[k] = v_update
    return base_dict

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path

def safe_divide(a: float, b: float, fill_value: float = np.nan) -> float:
    """
    Divide two scalars, returning fill_value when the denominator is zero.

    Args:
        a: Numerator
        b: Denominator
        fill_value: Value to use when denominator is zero

    Returns:
        a / b, or fill_value
    """
    if b == 0:
        return fill_value
    return float(a) / float(b)

def format_sci(value: float) -> str:
    """Format a float in C-style scientific notation with six decimals (e.g. 6.000000e-12)."""
    return f"{value:e}"

def format_id_list(ids: Iterable[int]) -> str:
    # Every id is followed by ", " including the last; the line always ends with a newline.
    return "".join(f"{i}, " for i in ids) + "\n"
