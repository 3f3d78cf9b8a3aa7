"""
Unit Tests for the Utilization Calculator

Covers the occupancy model (system of record), the weighted peak-load model,
status labels and load classification.
"""

from datetime import date

import pytest
from freezegun import freeze_time

from bay_scheduler.domain.scheduling.services.utilization import (
    assess_bays,
    bay_status_info,
    calculate_utilization,
    classify_bay_load,
    decay_factor,
    occupancy_utilization,
    overall_load_insight,
    peak_load_utilization,
)
from bay_scheduler.domain.scheduling.value_objects.enums import (
    AssignmentStatus,
    BayLoadStatus,
    UtilizationModel,
)

from ..fixtures import AssignmentFactory, BayFactory, ProjectFactory

NOW = date(2025, 3, 3)  # Monday


class TestOccupancyModel:
    def test_counts_open_assignments_per_bay(self):
        bays = [
            BayFactory.create(id=1),
            BayFactory.create(id=2),
            BayFactory.create(id=3, is_active=False),
        ]
        assignments = [
            AssignmentFactory.create(bay_id=1, start_date=date(2025, 3, 1), end_date=date(2025, 3, 20)),
            AssignmentFactory.create(bay_id=1, start_date=date(2025, 4, 1), end_date=date(2025, 4, 20)),
            AssignmentFactory.create(bay_id=2, start_date=date(2025, 3, 1), end_date=date(2025, 3, 3)),
            AssignmentFactory.create(
                bay_id=2,
                start_date=date(2025, 3, 1),
                end_date=date(2025, 3, 20),
                status=AssignmentStatus.COMPLETE,
            ),
            AssignmentFactory.create(bay_id=2, start_date=date(2025, 1, 1), end_date=date(2025, 3, 2)),
            AssignmentFactory.create(bay_id=3, start_date=date(2025, 3, 1), end_date=date(2025, 3, 20)),
        ]

        report = occupancy_utilization(bays, assignments, NOW)

        assert report.model == UtilizationModel.OCCUPANCY
        assert report.is_system_of_record
        assert report.bay_utilization == {1: 100.0, 2: 50.0}
        assert report.fleet_utilization == pytest.approx(75.0)

    def test_unset_active_flag_counts_as_active(self):
        bays = [BayFactory.create(id=1, is_active=None)]
        report = occupancy_utilization(bays, [], NOW)
        assert report.bay_utilization == {1: 0.0}

    @freeze_time("2025-03-03")
    def test_defaults_to_today(self):
        bays = [BayFactory.create(id=1)]
        assignments = [
            AssignmentFactory.create(bay_id=1, start_date=date(2025, 3, 1), end_date=date(2025, 3, 3))
        ]
        assert occupancy_utilization(bays, assignments).bay_utilization == {1: 50.0}

    def test_no_active_bays(self):
        report = occupancy_utilization([BayFactory.create(id=1, is_active=False)], [], NOW)
        assert report.fleet_utilization == 0.0
        assert report.bay_utilization == {}


class TestPeakLoadModel:
    def _bay(self, **overrides):
        fields = {"id": 1, "staff_count": 1, "hours_per_person_per_week": 40}
        fields.update(overrides)
        return BayFactory.create(**fields)

    def test_current_week_load(self):
        """28 h over 7 days, all in the current week, against 40 h capacity."""
        assignments = [
            AssignmentFactory.create(
                bay_id=1, start_date=date(2025, 3, 3), end_date=date(2025, 3, 10), total_hours=28
            )
        ]
        report = peak_load_utilization([self._bay()], assignments, now=NOW)

        assert report.model == UtilizationModel.PEAK_LOAD
        assert not report.is_system_of_record
        assert report.bay_utilization[1] == pytest.approx(70.0)

    def test_later_weeks_are_discounted(self):
        assignments = [
            AssignmentFactory.create(
                bay_id=1, start_date=date(2025, 3, 17), end_date=date(2025, 3, 24), total_hours=40
            )
        ]
        report = peak_load_utilization([self._bay()], assignments, now=NOW)
        assert report.bay_utilization[1] == pytest.approx(90.0)

    def test_capped_at_one_hundred(self):
        assignments = [
            AssignmentFactory.create(
                bay_id=1, start_date=date(2025, 3, 3), end_date=date(2025, 3, 10), total_hours=1000
            )
        ]
        report = peak_load_utilization([self._bay()], assignments, now=NOW)
        assert report.bay_utilization[1] == 100.0

    def test_falls_back_to_project_hours(self):
        project = ProjectFactory.create(id=77, total_hours=28)
        assignments = [
            AssignmentFactory.create(
                bay_id=1, project_id=77, start_date=date(2025, 3, 3), end_date=date(2025, 3, 10)
            )
        ]
        report = peak_load_utilization([self._bay()], assignments, [project], now=NOW)
        assert report.bay_utilization[1] == pytest.approx(70.0)

    def test_default_hours_per_person(self):
        bay = self._bay(hours_per_person_per_week=None, staff_count=2)
        assignments = [
            AssignmentFactory.create(
                bay_id=1, start_date=date(2025, 3, 3), end_date=date(2025, 3, 10), total_hours=40
            )
        ]
        report = peak_load_utilization([bay], assignments, now=NOW)
        assert report.bay_utilization[1] == pytest.approx(50.0)

    def test_unstaffed_bays_are_excluded(self):
        report = peak_load_utilization(
            [self._bay(), self._bay(id=2, staff_count=0)], [], now=NOW
        )
        assert report.bay_utilization == {1: 0.0}

    def test_zero_length_and_finished_assignments_are_ignored(self):
        assignments = [
            AssignmentFactory.create(
                bay_id=1, start_date=date(2025, 3, 4), end_date=date(2025, 3, 4), total_hours=100
            ),
            AssignmentFactory.create(
                bay_id=1, start_date=date(2025, 2, 1), end_date=date(2025, 3, 1), total_hours=100
            ),
        ]
        report = peak_load_utilization([self._bay()], assignments, now=NOW)
        assert report.bay_utilization[1] == 0.0

    def test_decay_factor(self):
        assert decay_factor(0) == 1.0
        assert decay_factor(5) == pytest.approx(0.75)
        assert decay_factor(15) == pytest.approx(0.25)
        assert decay_factor(20) == pytest.approx(0.25)


class TestCalculateUtilization:
    def test_defaults_to_occupancy(self):
        report = calculate_utilization([BayFactory.create(id=1)], [], now=NOW)
        assert report.model == UtilizationModel.OCCUPANCY

    def test_peak_load_by_name(self):
        report = calculate_utilization([BayFactory.create(id=1)], [], "peak_load", NOW)
        assert report.model == UtilizationModel.PEAK_LOAD

    def test_unknown_model_is_rejected(self):
        with pytest.raises(ValueError):
            calculate_utilization([], [], "throughput", NOW)


class TestStatusLabels:
    @pytest.mark.parametrize(
        "utilization, expected",
        [
            (0, "Available"),
            (50, "Near Capacity"),
            (100, "At Capacity"),
            (20, "Mostly Available"),
            (60, "Mixed Capacity"),
            (80, "Mostly At Capacity"),
        ],
    )
    def test_bay_status_info(self, utilization, expected):
        assert bay_status_info(utilization).status == expected


class TestLoadClassification:
    def test_thresholds(self):
        bay = BayFactory.create(id=1, name="Bay 1")
        assert classify_bay_load(bay, 20).status == BayLoadStatus.UNDERUTILIZED
        assert classify_bay_load(bay, 30).status == BayLoadStatus.BALANCED
        assert classify_bay_load(bay, 85).status == BayLoadStatus.BALANCED
        assert classify_bay_load(bay, 90).status == BayLoadStatus.OVERLOADED

    def test_assessment_carries_recommendations(self):
        bay = BayFactory.create(
            id=1, name="Bay 1", staff_count=3, assembly_staff_count=2, electrical_staff_count=1
        )
        assessment = classify_bay_load(bay, 92.4)
        assert assessment.utilization == 92
        assert assessment.team_type == "Mixed"
        assert assessment.weekly_capacity == 120
        assert assessment.recommendations

    def test_overall_insight(self):
        bays = [BayFactory.create(id=1), BayFactory.create(id=2)]
        mixed = assess_bays(
            bays,
            calculate_utilization(bays, [], "occupancy", NOW).model_copy(
                update={"bay_utilization": {1: 10.0, 2: 95.0}}
            ),
        )
        assert "balance workload" in overall_load_insight(mixed)

        idle = [classify_bay_load(bay, 0) for bay in bays]
        assert overall_load_insight(idle).startswith("All teams are underutilized")

        balanced = [classify_bay_load(bay, 50) for bay in bays]
        assert overall_load_insight(balanced).startswith("Team workloads are well-balanced")
