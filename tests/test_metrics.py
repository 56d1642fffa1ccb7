import pytest

from ndx_vol_dash.analytics import compute_metrics
from ndx_vol_dash.domain import Metrics
from ndx_vol_dash.utils import EmptySeries


def test_three_day_scenario(make_series):
    series = make_series([(100, 90), (110, 95), (105, 100)])

    metrics = compute_metrics(series)

    assert [obs.volatility for obs in series] == [10, 15, 5]
    assert metrics.current == 5
    assert metrics.avg_7d == pytest.approx(30 / 7)
    assert metrics.avg_30d == pytest.approx(30 / 30)
    assert metrics.avg_100d == pytest.approx(10.0)
    assert metrics.max_7d == 15
    assert metrics.min_7d == 5
    assert metrics.max_30d == 15
    assert metrics.min_30d == 5


def test_short_windows_divide_by_nominal_length_but_long_window_by_count(make_series):
    series = make_series([(12, 10), (14, 10), (16, 10)])

    metrics = compute_metrics(series)

    assert metrics.avg_7d == pytest.approx(12 / 7)
    assert metrics.avg_100d == pytest.approx(12 / 3)
    assert metrics.avg_7d != pytest.approx(metrics.avg_100d)


def test_full_windows_use_trailing_slices(make_series):
    # volatilities 1..120
    series = make_series([(float(v), 0.0) for v in range(1, 121)])

    metrics = compute_metrics(series)

    assert metrics.current == 120
    assert metrics.avg_7d == pytest.approx(sum(range(114, 121)) / 7)
    assert metrics.avg_30d == pytest.approx(sum(range(91, 121)) / 30)
    assert metrics.avg_100d == pytest.approx(sum(range(21, 121)) / 100)
    assert (metrics.min_7d, metrics.max_7d) == (114, 120)
    assert (metrics.min_30d, metrics.max_30d) == (91, 120)


def test_max_not_below_min_for_any_length(make_series):
    pattern = [7.0, 3.0, 11.0, 2.0, 9.0, 5.0]
    for length in range(1, 45):
        volatilities = [pattern[i % len(pattern)] + i * 0.1 for i in range(length)]
        series = make_series([(v, 0.0) for v in volatilities])

        metrics = compute_metrics(series)

        for window, high, low in ((7, metrics.max_7d, metrics.min_7d), (30, metrics.max_30d, metrics.min_30d)):
            trailing = volatilities[-window:]
            assert high >= low
            assert min(trailing) <= low <= high <= max(trailing)


def test_current_is_last_volatility(make_series):
    series = make_series([(50, 40), (80, 20), (31, 30)])

    assert compute_metrics(series).current == series[-1].volatility


def test_repeated_calls_give_equal_snapshots(make_series):
    series = make_series([(100, 90), (110, 95), (105, 100), (120, 99)])

    assert compute_metrics(series) == compute_metrics(series)


def test_empty_series_raises():
    with pytest.raises(EmptySeries):
        compute_metrics(())


def test_inverted_range_propagates_as_negative(make_series):
    series = make_series([(100, 90), (95, 100)])

    metrics = compute_metrics(series)

    assert metrics.current == -5
    assert metrics.min_7d == -5


def test_zero_snapshot():
    assert Metrics.zero().as_dict() == {
        "current": 0.0,
        "avg_7d": 0.0,
        "avg_30d": 0.0,
        "avg_100d": 0.0,
        "max_7d": 0.0,
        "max_30d": 0.0,
        "min_7d": 0.0,
        "min_30d": 0.0,
    }
