"""
Plot styling module for shellres.

This module provides predefined styles and color schemes for histogram plots.
"""
from typing import Dict, Any, Optional

# Default style parameters
DEFAULT_STYLE = {
    'figure.figsize': (8, 6),
    'figure.dpi': 100,
    'font.size': 12,
    'axes.labelsize': 14,
    'axes.titlesize': 16,
    'xtick.labelsize': 12,
    'ytick.labelsize': 12,
    'axes.grid': True,
    'grid.alpha': 0.3,
    'grid.linestyle': '--',
    'axes.spines.top': False,
    'axes.spines.right': False
}

COLOR_SCHEMES = {
    'default': {
        'bar': '#1f77b4',
        'edge': '#0b3c5d',
        'mean': '#d62728',
    },
    'scientific': {
        'bar': '#777777',
        'edge': '#000000',
        'mean': '#e41a1c',
    }
}

def get_style(style: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge style overrides into the default rcParams.

    Args:
        style: Dictionary of style parameters to override defaults
    """
    merged = dict(DEFAULT_STYLE)
    if style:
        merged.update(style)
    return merged

def get_colors(color_scheme: str = 'default') -> Dict[str, str]:
    if color_scheme not in COLOR_SCHEMES:
        raise ValueError(f"Unknown color scheme: {color_scheme}. Must be one of: {list(COLOR_SCHEMES.keys())}")
    return COLOR_SCHEMES[color_scheme]
