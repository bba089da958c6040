"""
Fixed-width histogram of residence times.
"""
from dataclasses import dataclass
import numpy as np
import logging
from typing import List, Optional, Sequence

from .residence import ResidenceRecord

logger = logging.getLogger(__name__)

@dataclass
class Bin:
    bottom: float
    center: float
    top: float
    count: int = 0

@dataclass
class ResidenceHistogram:
    bins: List[Bin]
    bin_width: float
    n_records: int = 0
    mean_residence_time: Optional[float] = None  # None when there were no completed residences

    @property
    def counts(self) -> np.ndarray:
        return np.array([b.count for b in self.bins], dtype=np.int64)

    @property
    def centers(self) -> np.ndarray:
        return np.array([b.center for b in self.bins], dtype=np.float64)

    @property
    def tops(self) -> np.ndarray:
        return np.array([b.top for b in self.bins], dtype=np.float64)

    @property
    def total_count(self) -> int:
        return int(self.counts.sum()) if self.bins else 0

    @property
    def n_dropped(self) -> int:
        """Records whose time reached or exceeded the top of the last bin."""
        return self.n_records - self.total_count

def mean_residence_time(records: Sequence[ResidenceRecord]) -> Optional[float]:
    if len(records) == 0:
        return None
    return float(np.mean([r.residence_time for r in records]))

class HistogramBinner:
    """
    Builds contiguous bins starting at zero and counts residence times into them.

    Args:
        bin_width: Width of every bin, in the same unit as residence times
    """

    def __init__(self, bin_width: float):
        if bin_width <= 0:
            raise ValueError("bin_width must be positive.")
        self.bin_width = bin_width

    def generate_bins(self, n_bins: int) -> List[Bin]:
        """
        Bin i covers [i * bin_width, i * bin_width + bin_width).

        Args:
            n_bins: Number of bins (the pipeline uses the frame count)
        """
        if n_bins < 0:
            raise ValueError(f"Number of bins must be non-negative, got {n_bins}")
        bottoms = np.arange(n_bins, dtype=np.float64) * self.bin_width
        centers = bottoms + self.bin_width / 2.0
        tops = bottoms + self.bin_width
        return [Bin(bottom=float(b), center=float(c), top=float(t))
                for b, c, t in zip(bottoms, centers, tops)]

    def assign(self, records: Sequence[ResidenceRecord], bins: List[Bin]) -> List[Bin]:
        """
        Increment the first bin whose top is strictly greater than each record's time.

        Times at or beyond the last top (and NaN) are not counted.
        """
        if not bins or len(records) == 0:
            return bins
        tops = np.array([b.top for b in bins], dtype=np.float64)
        times = np.array([r.residence_time for r in records], dtype=np.float64)
        # side='right' yields the first index whose top > time
        indices = np.searchsorted(tops, times, side='right')
        for idx in indices[indices < len(bins)]:
            bins[idx].count += 1
        return bins

    def build(self, records: Sequence[ResidenceRecord], frame_count: int) -> ResidenceHistogram:
        """
        Generate `frame_count` bins and count the completed records into them.

        Args:
            records: Completed residence records
            frame_count: Number of frames in the trajectory

        Returns:
            ResidenceHistogram with bins and the mean residence time
        """
        bins = self.generate_bins(frame_count)
        mean_time = mean_residence_time(records)
        if mean_time is None:
            logger.info("No completed residences found")
        else:
            logger.info(f"Average residence time = {mean_time:e}")
            self.assign(records, bins)

        histogram = ResidenceHistogram(bins=bins, bin_width=self.bin_width,
                                       n_records=len(records), mean_residence_time=mean_time)
        logger.debug(f"Bin count = {histogram.total_count}")
        if histogram.n_dropped > 0:
            logger.warning(f"{histogram.n_dropped} residence(s) longer than the last bin top "
                           f"({frame_count * self.bin_width:e}) were not counted.")
        return histogram
