"""Manufacturing bay record."""

from pydantic import Field

from ....core.config import settings
from ...shared.base import StoreRecord


class Bay(StoreRecord):
    """A physical production slot. Owned by the external store."""

    name: str
    bay_number: int
    team: str | None = "General"
    is_active: bool | None = True
    staff_count: int | None = Field(default=0, ge=0)
    assembly_staff_count: int | None = Field(default=0, ge=0)
    electrical_staff_count: int | None = Field(default=0, ge=0)
    hours_per_person_per_week: float | None = None

    @property
    def active(self) -> bool:
        """Bays count as active unless explicitly switched off."""
        return self.is_active is not False

    @property
    def staffed(self) -> bool:
        return (self.staff_count or 0) > 0

    @property
    def weekly_capacity_hours(self) -> float:
        hours = self.hours_per_person_per_week or settings.DEFAULT_HOURS_PER_PERSON_PER_WEEK
        return hours * (self.staff_count or 0)

    @property
    def team_type(self) -> str:
        assembly = self.assembly_staff_count or 0
        electrical = self.electrical_staff_count or 0
        if assembly > 0 and electrical > 0:
            return "Mixed"
        if assembly > 0:
            return "Assembly"
        return "Electrical"
