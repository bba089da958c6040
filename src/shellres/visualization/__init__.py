"""
Visualization module for shellres.

This module provides plotting capabilities for residence time histograms.
"""

from .histogram_plotter import HistogramPlotter
from .styles import DEFAULT_STYLE, COLOR_SCHEMES, get_style, get_colors

__all__ = [
    'HistogramPlotter',
    'DEFAULT_STYLE',
    'COLOR_SCHEMES',
    'get_style',
    'get_colors'
]
