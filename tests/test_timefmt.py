from datetime import datetime

from ndx_vol_dash.utils import format_update_time


def test_format_update_time():
    assert format_update_time(datetime(2024, 3, 6, 5, 0, 0)) == "2024/03/06 05:00:00"


def test_format_missing_time():
    assert format_update_time(None) == "n/a"
