import pytest

from time_attendance.core.exceptions import ValidationError
from time_attendance.shifts.service import ShiftService


def _grace(repo):
    return {s.shift_id: s.late_grace_period for s in repo.list_all()}


def test_update_grace_periods_applies_all(shifts_repo):
    svc = ShiftService(shifts_repo)

    svc.update_grace_periods([{"id": "shift1", "lateGracePeriod": 5}, {"id": "shift3", "lateGracePeriod": "30"}])

    assert _grace(shifts_repo) == {"shift1": 5, "shift2": 15, "shift3": 30}


def test_unknown_shift_rejects_whole_batch(shifts_repo):
    svc = ShiftService(shifts_repo)

    with pytest.raises(ValidationError):
        svc.update_grace_periods([{"id": "shift1", "lateGracePeriod": 5}, {"id": "nope", "lateGracePeriod": 1}])

    assert _grace(shifts_repo) == {"shift1": 15, "shift2": 15, "shift3": 15}


def test_negative_grace_rejects_whole_batch(shifts_repo):
    svc = ShiftService(shifts_repo)

    with pytest.raises(ValidationError):
        svc.update_grace_periods([{"id": "shift1", "lateGracePeriod": 5}, {"id": "shift2", "lateGracePeriod": -1}])

    assert _grace(shifts_repo)["shift1"] == 15


def test_payload_must_be_a_list(shifts_repo):
    with pytest.raises(ValidationError):
        ShiftService(shifts_repo).update_grace_periods({"id": "shift1"})


def test_start_and_end_times_are_not_editable(shifts_repo):
    svc = ShiftService(shifts_repo)
    before = {s.shift_id: (s.start_time, s.end_time) for s in shifts_repo.list_all()}

    svc.update_grace_periods([{"id": "shift1", "lateGracePeriod": 10, "startTime": "09:00"}])

    assert {s.shift_id: (s.start_time, s.end_time) for s in shifts_repo.list_all()} == before


def test_shift_json_uses_hh_mm(default_shifts):
    assert default_shifts[1].to_json() == {
        "id": "shift2",
        "name": "Afternoon",
        "startTime": "16:30",
        "endTime": "00:30",
        "lateGracePeriod": 15,
    }
