import datetime as dt

import numpy as np
import pytest

from climate_outlook.analytics.stats import (
    compute_stats,
    decadal_trend,
    exceedance_probability,
    summarize,
    trend_factor,
)
from climate_outlook.data.schemas import StatResult, TrendAdjustment

from conftest import make_records


def yearly(values, first_year=2000, key="temperature"):
    return make_records([
        {"date": f"{first_year + i}-06-01", "lat": 0.0, "lon": 0.0, key: v}
        for i, v in enumerate(values)
    ])


LINEAR = yearly([10 + 0.1 * i for i in range(12)])
LINEAR_TREND = 0.1 / 10.55 * 100 * 10


def test_summarize_uses_linear_interpolation():
    mean, median, p90, p10 = summarize(np.arange(1, 11, dtype="float64"))
    assert mean == pytest.approx(5.5)
    assert median == pytest.approx(5.5)
    assert p90 == pytest.approx(9.1)
    assert p10 == pytest.approx(1.9)


def test_exceedance_probability_is_inclusive():
    assert exceedance_probability(np.array([1.0, 2, 3, 4, 5]), 3) == pytest.approx(60.0)
    assert exceedance_probability(np.array([]), 3) == 0.0


def test_empty_subset_gives_zero_bundle():
    records = make_records([{"date": "2020-01-01", "other": 1.0}])
    result = compute_stats(records, ["temperature"])["temperature"]
    assert result == StatResult()
    assert result.to_dict()["meta"] == {"samples": 0, "yearMin": None, "yearMax": None}


def test_unknown_variable_gives_zero_bundle():
    results = compute_stats(LINEAR, ["temperature", "ozone"])
    assert results["ozone"].samples == 0
    assert results["ozone"].mean == 0.0
    assert results["temperature"].samples == 12


def test_single_value():
    result = compute_stats(yearly([4.2]), ["temperature"], {"temperature": {"high": 4.2}})["temperature"]
    assert result.mean == result.median == result.percentile90 == result.percentile10 == pytest.approx(4.2)
    assert result.probability == 100.0
    assert result.trend == 0.0
    assert result.historical_data == [4.2]


def test_trend_needs_twelve_points():
    assert decadal_trend(yearly([10 + i for i in range(11)]), "temperature") == 0.0
    assert decadal_trend(LINEAR, "temperature") == pytest.approx(LINEAR_TREND)


def test_trend_zero_mean_is_zero():
    assert decadal_trend(yearly([-1.0, 1.0] * 6), "temperature") == 0.0


def test_trend_single_year_is_zero():
    records = make_records([{"date": f"2010-01-{d:02d}", "temperature": float(d)} for d in range(1, 15)])
    assert decadal_trend(records, "temperature") == 0.0


def test_trend_factor():
    assert trend_factor(10.0, 2030, 2020) == pytest.approx(1.1)
    assert trend_factor(10.0, 2020, 2020) == 1.0


def test_trend_adjustment_to_last_year_changes_nothing():
    plain = compute_stats(LINEAR, ["temperature"])["temperature"]
    adjusted = compute_stats(LINEAR, ["temperature"], trend_adjust=TrendAdjustment(True, 2011))["temperature"]
    assert adjusted.mean == pytest.approx(plain.mean)
    assert adjusted.historical_data == pytest.approx(plain.historical_data)


def test_trend_adjustment_scales_mean_only():
    factor = 1 + LINEAR_TREND / 100
    thresholds = {"temperature": {"high": 11.0}}
    plain = compute_stats(LINEAR, ["temperature"], thresholds)["temperature"]
    adjusted = compute_stats(
        LINEAR,
        ["temperature"],
        thresholds=thresholds,
        trend_adjust=TrendAdjustment(enable=True, target_year=2021),
    )["temperature"]

    assert adjusted.mean == pytest.approx(plain.mean * factor)
    assert adjusted.median == pytest.approx(plain.median)
    assert adjusted.percentile90 == pytest.approx(plain.percentile90)
    assert adjusted.percentile10 == pytest.approx(plain.percentile10)
    # probability uses the scaled series: 10.1 * factor already exceeds 11
    assert plain.probability == pytest.approx(2 / 12 * 100)
    assert adjusted.probability == pytest.approx(11 / 12 * 100)
    assert adjusted.historical_data[0] == pytest.approx(10.0 * factor)


def test_disabled_trend_adjustment_is_ignored():
    plain = compute_stats(LINEAR, ["temperature"])["temperature"]
    adjusted = compute_stats(LINEAR, ["temperature"], trend_adjust=TrendAdjustment(False, 2100))["temperature"]
    assert adjusted == plain


def test_trend_adjustment_defaults_to_current_year():
    years_ahead = dt.date.today().year - 2011
    factor = 1 + LINEAR_TREND / 100 * years_ahead / 10
    plain = compute_stats(LINEAR, ["temperature"])["temperature"]
    adjusted = compute_stats(LINEAR, ["temperature"], trend_adjust=TrendAdjustment(enable=True))["temperature"]
    assert adjusted.mean == pytest.approx(plain.mean * factor)


def test_history_keeps_last_thirty_in_order():
    values = [float(i) for i in range(40)]
    result = compute_stats(yearly(values, first_year=1980), ["temperature"])["temperature"]
    assert result.historical_data == values[-30:]
    assert result.samples == 40
    assert (result.year_min, result.year_max) == (1980, 2019)


def test_non_numeric_threshold_gives_zero_probability():
    for spec in [{"high": "hot"}, {"high": True}, {"low": 5}, None]:
        result = compute_stats(LINEAR, ["temperature"], {"temperature": spec})["temperature"]
        assert result.probability == 0.0


def test_to_dict_uses_wire_names():
    payload = compute_stats(LINEAR, ["temperature"])["temperature"].to_dict()
    assert set(payload) == {
        "probability", "trend", "mean", "median", "percentile90", "percentile10", "historicalData", "meta",
    }
    assert payload["meta"] == {"samples": 12, "yearMin": 2000, "yearMax": 2011}
