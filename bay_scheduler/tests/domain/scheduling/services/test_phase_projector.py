"""
Unit Tests for the Phase Hour Projector

Tests phase windows, milestone fallbacks, proportional spreading of phase
hours over periods, and conservation of hours across a full cover.
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bay_scheduler.domain.scheduling.services.phase_projector import (
    phase_breakdown,
    phase_hours,
    phase_window,
    total_phase_hours,
)
from bay_scheduler.domain.scheduling.value_objects.enums import Phase

from ..fixtures import ProjectFactory


@pytest.fixture
def fab_project():
    """500 hours, fabrication Jan 1-10 2025 (paint starts Jan 11)."""
    return ProjectFactory.create(
        total_hours=500,
        fab_percentage=27,
        fabrication_start=date(2025, 1, 1),
        paint_start=date(2025, 1, 11),
    )


class TestPhaseWindow:
    def test_phase_ends_the_day_before_next_milestone(self, fab_project):
        window = phase_window(fab_project, Phase.FAB)
        assert window.start == date(2025, 1, 1)
        assert window.end == date(2025, 1, 10)
        assert window.duration_days == 10

    def test_fab_falls_back_to_production_start(self):
        project = ProjectFactory.create(
            fabrication_start=date(2025, 1, 1), production_start=date(2025, 2, 1)
        )
        assert phase_window(project, "fab").end == date(2025, 1, 31)

    def test_qc_falls_back_to_delivery_date(self):
        project = ProjectFactory.create(
            qc_start_date=date(2025, 5, 1), delivery_date=date(2025, 5, 15)
        )
        assert phase_window(project, Phase.QC).end == date(2025, 5, 14)

    def test_missing_boundary_has_no_window(self):
        project = ProjectFactory.create(paint_start=date(2025, 1, 11))
        assert phase_window(project, Phase.PAINT) is None
        assert phase_window(project, Phase.FAB) is None


class TestPhaseHours:
    def test_whole_phase_inside_period(self, fab_project):
        """500 h at 27% over a 10-day phase fully inside January."""
        assert phase_hours(
            fab_project, Phase.FAB, date(2025, 1, 1), date(2025, 1, 31)
        ) == pytest.approx(135.0)

    def test_partial_overlap_is_proportional(self, fab_project):
        assert phase_hours(
            fab_project, Phase.FAB, date(2025, 1, 1), date(2025, 1, 5)
        ) == pytest.approx(67.5)

    def test_single_shared_day(self, fab_project):
        assert phase_hours(
            fab_project, Phase.FAB, date(2025, 1, 10), date(2025, 1, 20)
        ) == pytest.approx(13.5)

    def test_disjoint_period_gets_nothing(self, fab_project):
        assert phase_hours(fab_project, Phase.FAB, date(2025, 2, 1), date(2025, 2, 28)) == 0

    def test_missing_total_hours(self):
        project = ProjectFactory.create(
            total_hours=None,
            fabrication_start=date(2025, 1, 1),
            paint_start=date(2025, 1, 11),
        )
        assert phase_hours(project, Phase.FAB, date(2025, 1, 1), date(2025, 1, 31)) == 0

    def test_zero_length_phase(self):
        project = ProjectFactory.create(
            fabrication_start=date(2025, 1, 1), paint_start=date(2025, 1, 1)
        )
        assert phase_hours(project, Phase.FAB, date(2025, 1, 1), date(2025, 1, 31)) == 0

    def test_explicit_zero_percentage_is_honoured(self):
        project = ProjectFactory.create(
            paint_percentage=0,
            paint_start=date(2025, 1, 1),
            production_start=date(2025, 1, 8),
        )
        assert phase_hours(project, Phase.PAINT, date(2025, 1, 1), date(2025, 1, 31)) == 0

    def test_unset_percentage_uses_default(self):
        project = ProjectFactory.create(total_hours=1000)
        assert total_phase_hours(project, Phase.PRODUCTION) == pytest.approx(600.0)
        assert total_phase_hours(project, Phase.QC) == pytest.approx(70.0)

    def test_breakdown_reports_every_phase(self, fab_project):
        breakdown = phase_breakdown(fab_project, date(2025, 1, 1), date(2025, 1, 31))
        assert list(breakdown) == list(Phase)
        assert breakdown[Phase.FAB] == pytest.approx(135.0)
        assert breakdown[Phase.PAINT] == 0


class TestHourConservation:
    @given(
        st.integers(min_value=1, max_value=200),
        st.integers(min_value=1, max_value=45),
        st.integers(min_value=0, max_value=30),
        st.floats(min_value=1, max_value=100_000, allow_nan=False),
    )
    @settings(max_examples=200, deadline=None)
    def test_periods_covering_the_phase_sum_to_phase_total(
        self, phase_days, chunk_days, lead_days, total_hours
    ):
        """Hours spread over any gapless cover of the phase add back up."""
        start = date(2025, 3, 1)
        project = ProjectFactory.create(
            total_hours=total_hours,
            fabrication_start=start,
            paint_start=start + timedelta(days=phase_days),
        )

        cursor = start - timedelta(days=lead_days)
        last_day = start + timedelta(days=phase_days - 1)
        spread = 0.0
        while cursor <= last_day:
            period_end = cursor + timedelta(days=chunk_days - 1)
            spread += phase_hours(project, Phase.FAB, cursor, period_end)
            cursor = period_end + timedelta(days=1)

        assert spread == pytest.approx(total_phase_hours(project, Phase.FAB), rel=1e-9)
