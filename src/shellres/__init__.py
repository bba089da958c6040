"""
First-shell residence time analysis (shellres) package
"""

__version__ = "0.1.0"

# Core components
from .core.atom import Atom
from .core.residence import ResidenceRecord, FrameTransition, ResidenceTracker
from .core.histogram import Bin, ResidenceHistogram, HistogramBinner

# IO components
from .io.loader import FrameStreamParser, ParseResult, TrajectoryParseError
from .io.writer import ResultWriter, write_histogram

# Pipeline
from .analysis import ResidenceAnalysis, AnalysisResult

# Utility components
from .utils.config_manager import AnalysisConfig, ConfigManager

__all__ = [
    # Core
    'Atom',
    'ResidenceRecord',
    'FrameTransition',
    'ResidenceTracker',
    'Bin',
    'ResidenceHistogram',
    'HistogramBinner',
    # IO
    'FrameStreamParser',
    'ParseResult',
    'TrajectoryParseError',
    'ResultWriter',
    'write_histogram',
    # Pipeline
    'ResidenceAnalysis',
    'AnalysisResult',
    # Utils
    'AnalysisConfig',
    'ConfigManager',
]
