from __future__ import annotations

from typing import Any, Sequence

from ..common.validators import require_int
from ..core.exceptions import ValidationError
from .model import Shift
from .repository import ShiftRepository


class ShiftService:
    """Use case: list shifts and edit their grace periods (admin)."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def list_all(self) -> Sequence[Shift]:
        return self._shifts.list_all()

    def update_grace_periods(self, items: Any) -> Sequence[Shift]:
        """Validate the whole batch up front, then apply it in one transaction."""
        if not isinstance(items, list):
            raise ValidationError("Expected a list of shifts")

        known = {s.shift_id for s in self._shifts.list_all()}
        grace_by_id: dict[str, int] = {}
        for item in items:
            if not isinstance(item, dict):
                raise ValidationError("Each shift must be an object with id and lateGracePeriod")
            shift_id = str(item.get("id") or "").strip()
            if shift_id not in known:
                raise ValidationError(f"Unknown shift: {shift_id or '-'}")
            minutes = require_int(item.get("lateGracePeriod"), "lateGracePeriod")
            if minutes < 0:
                raise ValidationError("lateGracePeriod must not be negative")
            grace_by_id[shift_id] = minutes

        if grace_by_id:
            self._shifts.update_grace_periods(grace_by_id)
        return self._shifts.list_all()
