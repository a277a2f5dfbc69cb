import pytest

from todo_app.services.stats import build_stats, completion_rate

pytestmark = pytest.mark.unit


def test_completion_rate_is_zero_for_empty_list():
    assert completion_rate(0, 0) == 0


@pytest.mark.parametrize(
    "completed,total,expected",
    [
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds half up
        (5, 5, 100),
        (0, 7, 0),
    ],
)
def test_completion_rate_rounds_to_nearest_percent(completed, total, expected):
    assert completion_rate(completed, total) == expected


def test_completion_rate_matches_rounded_ratio_for_small_totals():
    for total in range(1, 60):
        for completed in range(total + 1):
            exact = 100 * completed / total
            assert abs(completion_rate(completed, total) - exact) <= 0.5


def test_build_stats_derives_pending():
    stats = build_stats(total=10, completed=4, overdue=2)

    assert stats.pending == 6
    assert stats.overdue == 2
    assert stats.completion_rate == 40
