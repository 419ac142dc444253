from datetime import time

import pytest

from app.utils.slots import hourly_windows


def test_default_window_is_nine_to_ten_pm():
    windows = hourly_windows()

    assert len(windows) == 13
    assert windows[0] == (time(9), time(10))
    assert windows[-1] == (time(21), time(22))


def test_window_ending_at_midnight():
    assert hourly_windows(22, 24)[-1] == (time(23), time(23, 59, 59))


def test_invalid_window_rejected():
    with pytest.raises(ValueError):
        hourly_windows(22, 9)
