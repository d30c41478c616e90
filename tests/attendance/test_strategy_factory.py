import pytest

from src.farm_ledger.farm_ledger.attendance.factory import AttendanceStrategyFactory, next_status
from src.farm_ledger.farm_ledger.attendance.strategies.absent_strategy import AbsentStrategy
from src.farm_ledger.farm_ledger.attendance.strategies.half_strategy import HalfDayStrategy
from src.farm_ledger.farm_ledger.attendance.strategies.present_strategy import PresentStrategy
from src.farm_ledger.farm_ledger.attendance.strategies.unmarked_strategy import UnmarkedStrategy
from src.farm_ledger.farm_ledger.core.enums import AttendanceStatus

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
H = AttendanceStatus.HALF
U = AttendanceStatus.UNMARKED

OTHER_TOTALS = [0, 0.25, 0.5, 0.75, 1]


def test_factory_picks_strategy_for_each_mark():
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_status(U), UnmarkedStrategy)
    assert isinstance(factory.for_status(P), PresentStrategy)
    assert isinstance(factory.for_status(A), AbsentStrategy)
    assert isinstance(factory.for_status(H), HalfDayStrategy)


def test_factory_treats_raw_empty_string_as_unmarked():
    assert isinstance(AttendanceStrategyFactory().for_status(""), UnmarkedStrategy)


@pytest.mark.parametrize(
    "current, other, expected",
    [
        (U, 0, P),
        (U, 0.5, H),
        (U, 0.25, H),
        (U, 0.75, A),
        (U, 1, A),
        (P, 0, A),
        (P, 1, A),
        (A, 0, H),
        (A, 0.5, H),
        (A, 0.75, U),
        (H, 0, U),
        (H, 0.5, U),
    ],
)
def test_next_status_transitions(current, other, expected):
    assert next_status(current, other) == expected


def test_full_ring_when_worker_is_free():
    seen = [U]
    for _ in range(4):
        seen.append(next_status(seen[-1], 0))

    assert seen == [U, P, A, H, U]


@pytest.mark.parametrize("other", OTHER_TOTALS)
def test_four_steps_from_unmarked_return_to_unmarked(other):
    status = U
    for _ in range(4):
        status = next_status(status, other)

    assert status == U


@pytest.mark.parametrize("other", OTHER_TOTALS)
@pytest.mark.parametrize("start", [U, P, A, H])
def test_cycling_never_pushes_day_over_cap(start, other):
    status = start
    visited_unmarked = start == U
    for _ in range(4):
        status = next_status(status, other)
        assert status.value_in_days + other <= 1.0
        visited_unmarked = visited_unmarked or status == U

    assert visited_unmarked


@pytest.mark.parametrize("other", OTHER_TOTALS)
def test_next_status_is_pure(other):
    for start in (U, P, A, H):
        assert next_status(start, other) == next_status(start, other)


def test_present_elsewhere_lands_on_absent():
    assert next_status(U, 1.0) == A
