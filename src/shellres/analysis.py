"""
Top-level residence time analysis pipeline.

Parser -> tracker -> binner -> writers, in a single pass over the trajectory.
"""
from dataclasses import dataclass
from pathlib import Path
import logging
from typing import Any, Dict, Optional

from .core.histogram import HistogramBinner, ResidenceHistogram
from .io.loader import FrameStreamParser, ParseResult
from .io.writer import ResultWriter, save_analysis_results, write_histogram
from .utils.config_manager import AnalysisConfig

logger = logging.getLogger(__name__)

@dataclass
class AnalysisResult:
    parse: ParseResult
    histogram: ResidenceHistogram

    @property
    def frame_count(self) -> int:
        return self.parse.frame_count

    def summary(self) -> Dict[str, Any]:
        mean_shell = self.parse.mean_shell_members if self.parse.frame_count else None
        return {
            'frame_count': self.parse.frame_count,
            'n_residences': len(self.parse.residences),
            'n_counted': self.histogram.total_count,
            'n_dropped_overflow': self.histogram.n_dropped,
            'n_open_at_eof': self.parse.n_open_at_eof,
            'n_flushed_at_eof': self.parse.n_flushed,
            'mean_residence_time': self.histogram.mean_residence_time,
            'mean_shell_members': mean_shell,
        }

class ResidenceAnalysis:
    """
    Runs the full analysis described by an AnalysisConfig.

    Args:
        config: Analysis settings, including the input and output paths
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config if config is not None else AnalysisConfig()

    def run(self) -> AnalysisResult:
        """
        Parse the trajectory, bin the completed residences and write all outputs.

        Raises:
            FileNotFoundError: If the trajectory cannot be opened
            OSError: If an output file cannot be created
        """
        cfg = self.config
        with ResultWriter(cfg.log_path) as writer:
            parser = FrameStreamParser(cfg, on_transition=writer.write_transition,
                                       on_flush=writer.write_residences)
            parse_result = parser.parse_file(cfg.input_path)

        histogram = HistogramBinner(cfg.bin_width).build(parse_result.residences, parse_result.frame_count)
        write_histogram(cfg.output_path, histogram)

        result = AnalysisResult(parse=parse_result, histogram=histogram)
        if cfg.summary_path:
            save_analysis_results({**result.summary(), 'config': cfg.to_dict()}, cfg.summary_path)
        if cfg.plot_path:
            # matplotlib is only loaded when a plot is requested
            from .visualization.histogram_plotter import HistogramPlotter
            HistogramPlotter(histogram, Path(cfg.plot_path)).generate_plot()

        logger.info(f"Processed {parse_result.frame_count} frames, "
                    f"{len(parse_result.residences)} completed residences.")
        return result
