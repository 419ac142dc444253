from datetime import time

from app.core.config import settings


def hourly_windows(open_hour: int | None = None, close_hour: int | None = None):
    """One (start, end) pair per hour; 9 -> 22 gives 09:00-10:00 ... 21:00-22:00."""
    open_hour = settings.SLOT_OPEN_HOUR if open_hour is None else open_hour
    close_hour = settings.SLOT_CLOSE_HOUR if close_hour is None else close_hour

    if not 0 <= open_hour < close_hour <= 24:
        raise ValueError(f"Invalid operating window {open_hour}-{close_hour}")

    windows = []
    for hour in range(open_hour, close_hour):
        # 24:00 is not a valid time, close the last window at 23:59:59
        end = time(hour + 1) if hour + 1 < 24 else time(23, 59, 59)
        windows.append((time(hour), end))
    return windows
