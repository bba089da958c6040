"""
Input/Output module for shellres.

This module provides the streaming trajectory parser and the writers for
the log, histogram and summary outputs.
"""

from .loader import (
    FrameStreamParser,
    ParseResult,
    LineKind,
    TrajectoryParseError,
    classify_line,
    parse_atom_fields
)
from .writer import ResultWriter, write_histogram, save_analysis_results

__all__ = [
    'FrameStreamParser',
    'ParseResult',
    'LineKind',
    'TrajectoryParseError',
    'classify_line',
    'parse_atom_fields',
    'ResultWriter',
    'write_histogram',
    'save_analysis_results'
]
