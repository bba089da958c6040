"""
Result writing module for shellres.

This module writes the frame-transition log, the residence lines and the
histogram file, and optionally a JSON summary of the run.
"""
from pathlib import Path
import logging
from typing import Any, Dict, Iterable, Optional, TextIO, Union
import json

from ..core.histogram import ResidenceHistogram
from ..core.residence import FrameTransition, ResidenceRecord
from ..utils.helpers import format_id_list, format_sci

logger = logging.getLogger(__name__)

def write_histogram(filename: Union[str, Path], histogram: ResidenceHistogram) -> Path:
    """
    Write one `bottom, center, top, count` line per bin, in ascending order.

    Args:
        filename: Output path
        histogram: Histogram to write

    Returns:
        Path of the written file
    """
    filepath = Path(filename)
    logger.info(f"Writing histogram to {filepath}")
    try:
        f = open(filepath, 'w')
    except OSError as e:
        raise OSError(f"Failed to create new fragment file: {filepath} ({e})") from e
    with f:
        for b in histogram.bins:
            f.write(f"{format_sci(b.bottom)}, {format_sci(b.center)}, {format_sci(b.top)}, {b.count}\n")
    return filepath

def save_analysis_results(results: Dict[str, Any], filename: Union[str, Path]) -> Path:
    """
    Save analysis results to a JSON file.

    Args:
        results: Analysis results dictionary to save
        filename: Output path
    """
    filepath = Path(filename)
    logger.info(f"Saving analysis results to {filepath}")
    with open(filepath, 'w') as f:
        json.dump(results, f, indent=4)
    return filepath

class ResultWriter:
    """
    Writes the per-run log file progressively while the trajectory is parsed.

    Frame blocks are written only for frames where shell membership changed;
    every completed residence gets one line, numbered in completion order.
    """

    def __init__(self, log_path: Union[str, Path]):
        """
        Create (truncate) the log file.

        Args:
            log_path: Path of the log file

        Raises:
            OSError: If the log file cannot be created
        """
        self.log_path = Path(log_path)
        try:
            self._log: Optional[TextIO] = open(self.log_path, 'w')
        except OSError as e:
            raise OSError(f"Failed to create new fragment file: {self.log_path} ({e})") from e
        self.n_residences_written = 0

    def __enter__(self) -> 'ResultWriter':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._log is not None:
            self._log.close()
            self._log = None

    def _write(self, text: str) -> None:
        if self._log is None:
            raise ValueError(f"Log file {self.log_path} is already closed")
        self._log.write(text)

    def write_transition(self, transition: FrameTransition) -> None:
        if transition.changed:
            self._write(f"Frame number {transition.frame_index}:\n")
            self._write("Current Atoms:\n")
            self._write(format_id_list(transition.current))
            if transition.leaving:
                self._write("Atoms Leaving\n")
                self._write(format_id_list(transition.leaving))
            if transition.entering:
                self._write("Atoms Entering\n")
                self._write(format_id_list(transition.entering))
        self.write_residences(transition.closed)

    def write_residences(self, records: Iterable[ResidenceRecord]) -> None:
        for record in records:
            self._write(f"Residence #{self.n_residences_written}: t = {format_sci(record.residence_time)}"
                        f"({record.first_frame}-{record.last_frame})\n")
            self.n_residences_written += 1
