"""
Utilities module for shellres.

This module provides various utility functions and configuration management
for the shellres package.
"""

from .config_manager import AnalysisConfig, ConfigManager
from .helpers import (
    update_dict_recursively,
    ensure_directory,
    safe_divide,
    format_sci,
    format_id_list
)

__all__ = [
    'AnalysisConfig',
    'ConfigManager',
    'update_dict_recursively',
    'ensure_directory',
    'safe_divide',
    'format_sci',
    'format_id_list'
]
