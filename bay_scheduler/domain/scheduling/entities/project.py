"""Project record with manufacturing phase milestones."""

from datetime import date

from pydantic import Field

from ...shared.base import StoreRecord
from ..value_objects.enums import Phase, ProjectStatus

# Literal defaults; they sum to 115, not 100.
DEFAULT_PHASE_PERCENTAGES: dict[Phase, float] = {
    Phase.FAB: 27.0,
    Phase.PAINT: 7.0,
    Phase.PRODUCTION: 60.0,
    Phase.IT: 7.0,
    Phase.NTC: 7.0,
    Phase.QC: 7.0,
}

# phase -> (start milestone, end milestones in fallback order)
PHASE_MILESTONES: dict[Phase, tuple[str, tuple[str, ...]]] = {
    Phase.FAB: ("fabrication_start", ("paint_start", "production_start")),
    Phase.PAINT: ("paint_start", ("production_start",)),
    Phase.PRODUCTION: ("production_start", ("it_start", "ntc_testing_date")),
    Phase.IT: ("it_start", ("ntc_testing_date",)),
    Phase.NTC: ("ntc_testing_date", ("qc_start_date",)),
    Phase.QC: ("qc_start_date", ("ship_date", "delivery_date")),
}


class Project(StoreRecord):
    """A manufacturing project. Owned by the external store."""

    project_number: str
    name: str = ""
    total_hours: float | None = Field(default=None, ge=0)
    percent_complete: float | None = Field(default=0, ge=0)
    status: ProjectStatus = ProjectStatus.ACTIVE

    fab_percentage: float | None = None
    paint_percentage: float | None = None
    production_percentage: float | None = None
    it_percentage: float | None = None
    ntc_percentage: float | None = None
    qc_percentage: float | None = None

    start_date: date | None = None
    estimated_completion_date: date | None = None
    fabrication_start: date | None = None
    paint_start: date | None = None
    production_start: date | None = None
    it_start: date | None = None
    ntc_testing_date: date | None = None
    qc_start_date: date | None = None
    ship_date: date | None = None
    delivery_date: date | None = None

    def phase_percentage(self, phase: Phase) -> float:
        """Share of total hours for ``phase``; unset values use the defaults."""
        value = getattr(self, f"{Phase(phase).value}_percentage")
        if value is None:
            return DEFAULT_PHASE_PERCENTAGES[Phase(phase)]
        return value

    def phase_milestones(self, phase: Phase) -> tuple[date | None, date | None]:
        """Start milestone and the first present end milestone for ``phase``."""
        start_field, end_fields = PHASE_MILESTONES[Phase(phase)]
        end = next(
            (getattr(self, name) for name in end_fields if getattr(self, name)),
            None,
        )
        return getattr(self, start_field), end

    @property
    def completion_date(self) -> date | None:
        return self.delivery_date or self.estimated_completion_date
