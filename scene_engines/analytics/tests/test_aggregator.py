from datetime import date, datetime, timezone

from scene_engines.analytics.aggregator import aggregate_monthly, parse_day_key, parse_views, shift_month

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_empty_input_yields_zero_window():
    buckets = aggregate_monthly({}, window_months=6, now=NOW)
    assert [b.month for b in buckets] == ["2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"]
    assert all(b.count == 0 for b in buckets)


def test_sums_views_by_month():
    daily = {"20240115": {"s1": {"views": 3}}, "20240220": {"s1": {"views": 5}}}
    buckets = {b.month: b.count for b in aggregate_monthly(daily, now=NOW)}
    assert buckets["2024-01"] == 3
    assert buckets["2024-02"] == 5
    assert buckets["2024-03"] == 0
    assert len(buckets) == 6


def test_history_outside_window_is_kept_and_sorted():
    daily = {"20220105": {"s1": {"views": 2}, "s2": {"views": 4}}}
    buckets = aggregate_monthly(daily, now=NOW)
    assert buckets[0].month == "2022-01"
    assert buckets[0].count == 6
    assert len(buckets) == 7


def test_bad_keys_and_views_are_skipped():
    daily = {
        "2024-01-15": {"s1": {"views": 100}},
        "20240230": {"s1": {"views": 100}},
        "20240110": {"s1": {"views": "7"}, "s2": {"views": "lots"}, "s3": {}, "s4": {"views": 2.5}},
    }
    buckets = {b.month: b.count for b in aggregate_monthly(daily, now=NOW)}
    assert buckets["2024-01"] == 7
    assert buckets["2024-02"] == 0


def test_non_object_input_is_empty_history():
    assert len(aggregate_monthly(None, now=NOW)) == 6
    assert len(aggregate_monthly(["x"], window_months=3, now=NOW)) == 3


def test_helpers():
    assert shift_month(date(2024, 1, 31), -1) == "2023-12"
    assert shift_month(date(2023, 11, 1), 3) == "2024-02"
    assert parse_day_key("20240229") == date(2024, 2, 29)
    assert parse_day_key("2024011") is None
    assert parse_views(None) == 0
    assert parse_views(True) is None
    assert parse_views(-3) is None
