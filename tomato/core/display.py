from __future__ import annotations

import math


TIME_IS_UP = "Time is up!"


def format_remaining(remaining_seconds: float) -> str:
    """Render remaining time for the round label.

    A minute or more rounds up to whole minutes, anything from one second up
    to a minute is shown in truncated seconds, and below one second the round
    is over.
    """
    if remaining_seconds >= 60:
        return f"{math.ceil(remaining_seconds / 60)} Minutes left in round"
    whole_seconds = int(remaining_seconds)
    if whole_seconds >= 1:
        return f"{whole_seconds} Seconds left in round"
    return TIME_IS_UP
