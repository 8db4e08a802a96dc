from tvagent.utils.interval_mapper import IntervalMap, secondary_range


def test_primary_tokens():
    intervals = IntervalMap()
    assert intervals.primary_token("1h") == "60"
    assert intervals.primary_token("4h") == "240"
    assert intervals.primary_token("1D") == "d"
    assert intervals.primary_token("1M") == "m"


def test_secondary_tokens():
    intervals = IntervalMap()
    assert intervals.secondary_token("1h") == "1h"
    assert intervals.secondary_token("1W") == "1wk"


def test_unmapped_interval_defaults_to_daily():
    intervals = IntervalMap()
    assert intervals.primary_token("2h") == "d"
    assert intervals.secondary_token("4h") == "1d"


def test_secondary_range_covers_limit():
    assert secondary_range("1d", 10) == "1mo"
    assert secondary_range("1d", 500) == "2y"
    assert secondary_range("1wk", 500) == "10y"
    assert secondary_range("1mo", 5000) == "max"


def test_secondary_range_respects_intraday_history():
    assert secondary_range("1m", 5000) == "5d"
    assert secondary_range("5m", 5000) == "1mo"
    assert secondary_range("1h", 5000) == "1y"
    assert secondary_range("1m", 10) == "1d"
