"""
Visualization module for residence time histograms.
"""
import numpy as np
import matplotlib
matplotlib.use('Agg')  # non-interactive backend
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional, Tuple, Union
import logging

from ..core.histogram import ResidenceHistogram
from ..utils.helpers import ensure_directory
from .styles import get_colors, get_style

logger = logging.getLogger(__name__)

class HistogramPlotter:
    def __init__(self, histogram: ResidenceHistogram, output_path: Union[str, Path], **kwargs):
        """
        Initialize HistogramPlotter with a histogram and plotting parameters.

        Args:
            histogram: ResidenceHistogram to plot
            output_path: Path to save the plot
            **kwargs: Additional plotting parameters
        """
        self.histogram = histogram
        self.output_path = Path(output_path)

        self.default_params = {
            'title': 'First-shell residence times',
            'xlabel': 'Residence time (ps)',
            'ylabel': 'Count',
            'time_scale': 1e12,  # seconds -> ps
            'max_time': None,  # in plotted units; None trims trailing empty bins
            'show_mean': True,
            'color_scheme': 'default',
            'dpi': 300,
            'style': None,
        }
        self.plot_params = {**self.default_params, **kwargs}

    def _visible_range(self) -> int:
        counts = self.histogram.counts
        max_time = self.plot_params['max_time']
        if max_time is not None:
            centers = self.histogram.centers * self.plot_params['time_scale']
            return int(np.searchsorted(centers, max_time, side='right'))
        nonzero = np.nonzero(counts)[0]
        return int(nonzero[-1]) + 1 if nonzero.size else len(counts)

    def _plot(self) -> Tuple[plt.Figure, plt.Axes]:
        scale = self.plot_params['time_scale']
        colors = get_colors(self.plot_params['color_scheme'])
        n_shown = self._visible_range()

        fig, ax = plt.subplots()
        centers = self.histogram.centers[:n_shown] * scale
        counts = self.histogram.counts[:n_shown]
        ax.bar(centers, counts, width=self.histogram.bin_width * scale,
               color=colors['bar'], edgecolor=colors['edge'], align='center')

        mean_time = self.histogram.mean_residence_time
        if self.plot_params['show_mean'] and mean_time is not None:
            ax.axvline(mean_time * scale, color=colors['mean'], linestyle='--',
                       label=f"mean = {mean_time * scale:.3g}")
            ax.legend()

        ax.set_xlabel(self.plot_params['xlabel'])
        ax.set_ylabel(self.plot_params['ylabel'])
        ax.set_title(self.plot_params['title'])
        return fig, ax

    def generate_plot(self) -> Optional[Path]:
        if not self.histogram.bins:
            logger.warning(f"Histogram has no bins. Output file {self.output_path} not created.")
            return None

        fig = None
        try:
            with plt.rc_context(get_style(self.plot_params['style'])):
                fig, _ = self._plot()
                fig.tight_layout()
                ensure_directory(self.output_path.parent)
                fig.savefig(self.output_path, dpi=self.plot_params['dpi'], bbox_inches='tight')
            logger.info(f"Plot saved to: {self.output_path}")
            return self.output_path
        finally:
            if fig is not None:
                plt.close(fig)
