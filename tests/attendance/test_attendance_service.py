from __future__ import annotations

import pytest

from src.farm_ledger.farm_ledger.attendance.model import MonthGroupInstance, MonthSheet
from src.farm_ledger.farm_ledger.attendance.service import AttendanceService
from src.farm_ledger.farm_ledger.core.enums import AttendanceStatus
from src.farm_ledger.farm_ledger.core.exceptions import ValidationError
from tests.fakes import InMemoryAttendance, InMemoryGroups, InMemoryWorkers

MONTH = "2025-01"
DAY = "2025-01-10"


@pytest.fixture
def attendance_repo():
    sheet = MonthSheet(
        month=MONTH,
        groups=(
            MonthGroupInstance(instance_id="i-a", group_id="gA"),
            MonthGroupInstance(instance_id="i-b", group_id="gB"),
        ),
    )
    return InMemoryAttendance([sheet])


@pytest.fixture
def svc(attendance_repo, workers, groups):
    return AttendanceService(
        attendance_repo,
        InMemoryWorkers({w.worker_id: w for w in workers}),
        InMemoryGroups({g.group_id: g for g in groups}),
    )


def test_cycle_persists_each_step(svc, attendance_repo):
    first = svc.cycle_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1")
    second = svc.cycle_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1")

    assert first.status == AttendanceStatus.PRESENT
    assert first.day_total == 1.0
    assert second.status == AttendanceStatus.ABSENT
    assert attendance_repo.saved_marks[-1] == ("i-a", DAY, "w1", AttendanceStatus.ABSENT)


def test_present_in_group_a_then_cycling_in_group_b_lands_on_absent(svc):
    svc.cycle_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1")
    result = svc.cycle_attendance(month=MONTH, instance_id="i-b", date=DAY, worker_id="w1")

    assert result.status == AttendanceStatus.ABSENT
    assert result.day_total == 1.0
    assert result.exceeded is False


def test_direct_write_over_cap_is_flagged_not_rejected(svc):
    svc.set_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w2", status="P")
    result = svc.set_attendance(month=MONTH, instance_id="i-b", date=DAY, worker_id="w2", status="H")

    assert result.status == AttendanceStatus.HALF
    assert result.exceeded is True
    assert svc.exceeded_marks(MONTH) == [{"date": DAY, "worker_id": "w2", "day_total": 1.5}]


def test_cycle_rejects_date_outside_month(svc, attendance_repo):
    with pytest.raises(ValidationError):
        svc.cycle_attendance(month=MONTH, instance_id="i-a", date="2025-02-01", worker_id="w1")
    assert attendance_repo.saved_marks == []


def test_cycle_rejects_unknown_instance_and_deleted_worker(svc):
    with pytest.raises(ValidationError):
        svc.cycle_attendance(month=MONTH, instance_id="nope", date=DAY, worker_id="w1")
    with pytest.raises(ValidationError):
        svc.cycle_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w4")


def test_activate_group_creates_instance_once(svc, attendance_repo):
    inst = svc.activate_group("2025-02", "gA")
    again = svc.activate_group("2025-02", "gA")

    assert again.instance_id == inst.instance_id
    assert len(attendance_repo.get_month_sheet("2025-02").groups) == 1


def test_activate_group_rejects_deleted_group(svc):
    with pytest.raises(ValidationError):
        svc.activate_group("2025-02", "gX")


def test_set_day_tags_forwards_normalised_codes(svc, attendance_repo):
    svc.set_day_tags(month=MONTH, instance_id="i-a", date=DAY, activity_code="WD", area_code="")

    assert attendance_repo.saved_tags == [("i-a", DAY, "WD", None)]
    entry = attendance_repo.get_month_sheet(MONTH).instance("i-a").day(DAY)
    assert entry.activity_code == "WD"


def test_set_day_tags_keeps_existing_marks(svc, attendance_repo):
    svc.set_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1", status="P")
    svc.set_day_tags(month=MONTH, instance_id="i-a", date=DAY, activity_code="SP", area_code="N1")

    entry = attendance_repo.get_month_sheet(MONTH).instance("i-a").day(DAY)
    assert (entry.activity_code, entry.area_code) == ("SP", "N1")
    assert entry.status_of("w1") == AttendanceStatus.PRESENT


@pytest.mark.parametrize("bad", ["Present", "p ", "X", 1, None])
def test_set_attendance_rejects_unknown_status_and_keeps_mark(svc, attendance_repo, bad):
    svc.set_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1", status="P")

    with pytest.raises(ValidationError):
        svc.set_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1", status=bad)

    entry = attendance_repo.get_month_sheet(MONTH).instance("i-a").day(DAY)
    assert dict(entry.attendance) == {"w1": AttendanceStatus.PRESENT}
    assert len(attendance_repo.saved_marks) == 1


def test_set_attendance_empty_status_clears_mark(svc, attendance_repo):
    svc.set_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1", status="P")
    result = svc.set_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id="w1", status="")

    assert result.status == AttendanceStatus.UNMARKED
    assert "w1" not in attendance_repo.get_month_sheet(MONTH).instance("i-a").day(DAY).attendance


@pytest.mark.parametrize("worker_id", ["ghost", "w4"])
def test_set_attendance_rejects_unknown_or_deleted_worker(svc, attendance_repo, worker_id):
    with pytest.raises(ValidationError):
        svc.set_attendance(month=MONTH, instance_id="i-a", date=DAY, worker_id=worker_id, status="P")
    assert attendance_repo.saved_marks == []
