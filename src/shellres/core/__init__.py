"""
Core module for shellres.

This module provides the data structures and bookkeeping engines for
residence time analysis.
"""

from .atom import Atom
from .residence import (
    ResidenceRecord,
    FrameTransition,
    ResidenceTracker,
    entering_atoms,
    leaving_atoms
)
from .histogram import Bin, ResidenceHistogram, HistogramBinner, mean_residence_time

__all__ = [
    'Atom',
    'ResidenceRecord',
    'FrameTransition',
    'ResidenceTracker',
    'entering_atoms',
    'leaving_atoms',
    'Bin',
    'ResidenceHistogram',
    'HistogramBinner',
    'mean_residence_time',
]
