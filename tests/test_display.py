import pytest

from tomato.core.display import TIME_IS_UP, format_remaining


@pytest.mark.parametrize(
    ("remaining", "expected"),
    [
        (61, "2 Minutes left in round"),
        (60, "1 Minutes left in round"),
        (59, "59 Seconds left in round"),
        (0, "Time is up!"),
        (25 * 60, "25 Minutes left in round"),
        (120.5, "3 Minutes left in round"),
        (59.9, "59 Seconds left in round"),
        (1.0, "1 Seconds left in round"),
        (0.99, "Time is up!"),
        (-12.0, "Time is up!"),
    ],
)
def test_format_remaining_buckets(remaining: float, expected: str) -> None:
    assert format_remaining(remaining) == expected


def test_time_is_up_sentinel() -> None:
    assert TIME_IS_UP == "Time is up!"
