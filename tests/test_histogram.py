import logging
import pytest
import numpy as np
from shellres.core.histogram import HistogramBinner, ResidenceHistogram, mean_residence_time
from shellres.core.residence import ResidenceRecord

BIN_WIDTH = 6e-12

def records(*times):
    return [ResidenceRecord(atom_id=i, residence_time=t) for i, t in enumerate(times)]

def test_binner_rejects_non_positive_width():
    with pytest.raises(ValueError):
        HistogramBinner(0.0)

def test_generate_bins_layout():
    bins = HistogramBinner(BIN_WIDTH).generate_bins(10)
    assert len(bins) == 10
    assert bins[0].bottom == 0.0
    for i, b in enumerate(bins):
        assert b.bottom == i * BIN_WIDTH
        assert b.top == b.bottom + BIN_WIDTH
        assert b.center == b.bottom + BIN_WIDTH / 2
        assert b.count == 0
    for lower, upper in zip(bins[:-1], bins[1:]):
        np.testing.assert_allclose(lower.top, upper.bottom, rtol=1e-12)

def test_generate_bins_exactly_contiguous_for_binary_width():
    bins = HistogramBinner(0.25).generate_bins(16)
    assert all(lower.top == upper.bottom for lower, upper in zip(bins[:-1], bins[1:]))

def test_generate_zero_bins():
    assert HistogramBinner(BIN_WIDTH).generate_bins(0) == []
    with pytest.raises(ValueError):
        HistogramBinner(BIN_WIDTH).generate_bins(-1)

def test_assign_by_first_top_exceeding_time():
    binner = HistogramBinner(BIN_WIDTH)
    bins = binner.generate_bins(4)
    binner.assign(records(0.0, 2e-12, 7e-12, 1.3e-11, 1.9e-11), bins)
    assert [b.count for b in bins] == [2, 1, 1, 1]

def test_time_equal_to_top_goes_to_next_bin():
    binner = HistogramBinner(BIN_WIDTH)
    bins = binner.generate_bins(3)
    binner.assign(records(bins[0].top, bins[1].top), bins)
    assert [b.count for b in bins] == [0, 1, 1]

def test_overflow_and_nan_are_dropped():
    binner = HistogramBinner(BIN_WIDTH)
    histogram = binner.build(records(2e-12, 3.5 * BIN_WIDTH, 1.0, float('nan')), frame_count=3)
    assert histogram.total_count == 1
    assert histogram.total_count < histogram.n_records
    assert histogram.n_dropped == 3

def test_negative_time_lands_in_first_bin():
    binner = HistogramBinner(BIN_WIDTH)
    bins = binner.assign(records(-1e-12), binner.generate_bins(2))
    assert [b.count for b in bins] == [1, 0]

def test_build_reports_mean(caplog):
    with caplog.at_level(logging.INFO):
        histogram = HistogramBinner(BIN_WIDTH).build(records(2e-12, 4e-12), frame_count=5)
    assert histogram.mean_residence_time == pytest.approx(3e-12)
    assert len(histogram.bins) == 5
    np.testing.assert_array_equal(histogram.counts, [2, 0, 0, 0, 0])
    assert "Average residence time = 3.000000e-12" in caplog.text

def test_build_without_residences(caplog):
    with caplog.at_level(logging.INFO):
        histogram = HistogramBinner(BIN_WIDTH).build([], frame_count=4)
    assert histogram.mean_residence_time is None
    assert histogram.total_count == 0
    assert len(histogram.bins) == 4
    assert "No completed residences found" in caplog.text
    assert "Average residence time" not in caplog.text

def test_mean_residence_time():
    assert mean_residence_time([]) is None
    assert mean_residence_time(records(1.0, 2.0, 6.0)) == pytest.approx(3.0)

def test_histogram_arrays():
    binner = HistogramBinner(1.0)
    histogram = ResidenceHistogram(bins=binner.generate_bins(3), bin_width=1.0)
    np.testing.assert_allclose(histogram.centers, [0.5, 1.5, 2.5])
    np.testing.assert_allclose(histogram.tops, [1.0, 2.0, 3.0])
    assert histogram.total_count == 0
