from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def update_grace_periods(self, grace_by_id: Mapping[str, int]) -> None:
        """Apply all updates or none of them."""
        raise NotImplementedError
