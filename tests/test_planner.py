"""Tests for per-day shift coverage planning."""

import pytest
from datetime import date, datetime, time

from shifthelper.domain.models import (
    DEFAULT_SHIFT_DEFINITIONS,
    Employee,
    OperatingHours,
    RecurringDayAvailability,
    ShiftDefinition,
    ShiftType,
    UnavailableException,
)
from shifthelper.scheduling.planner import ShiftCoveragePlanner

MONDAY = date(2024, 1, 15)
OPEN = OperatingHours(is_open=True, open_time=time(6, 0), close_time=time(22, 0))

MORNING = ShiftDefinition("m", ShiftType.MORNING, "Manhã", time(6, 0), time(14, 0), 2)
AFTERNOON = ShiftDefinition("a", ShiftType.AFTERNOON, "Tarde", time(14, 0), time(22, 0), 1)


@pytest.fixture
def planner():
    return ShiftCoveragePlanner()


def create_employee(
    emp_id: str,
    updated_at=None,
    recurring=None,
    exceptions=(),
) -> Employee:
    return Employee(
        id=emp_id,
        name=f"Employee {emp_id}",
        recurring_availability=recurring or {},
        temporary_availability=tuple(exceptions),
        availability_updated_at=updated_at,
    )


class TestPlanShift:
    """Tests for staffing a single shift."""

    def test_assigns_up_to_minimum(self, planner):
        employees = [create_employee(str(i)) for i in range(4)]
        plan = planner.plan_shift(MONDAY, MORNING, employees)

        assert plan.shift.assigned_count == 2
        assert plan.conflict is None
        assert plan.assigned_ids == frozenset({"0", "1"})

    def test_skips_already_assigned(self, planner):
        employees = [create_employee("A"), create_employee("B")]
        plan = planner.plan_shift(MONDAY, AFTERNOON, employees, frozenset({"A"}))

        assert [a.id for a in plan.shift.assignees] == ["B"]
        assert plan.assigned_ids == frozenset({"A", "B"})

    def test_input_set_not_mutated(self, planner):
        already = frozenset({"A"})
        planner.plan_shift(MONDAY, AFTERNOON, [create_employee("B")], already)
        assert already == frozenset({"A"})

    def test_conflict_when_understaffed(self, planner):
        employees = [
            create_employee("A"),
            create_employee(
                "B", exceptions=[UnavailableException("x", MONDAY, MONDAY, reason="Férias")]
            ),
        ]
        plan = planner.plan_shift(MONDAY, MORNING, employees)

        assert plan.shift.assigned_count == 1
        assert plan.conflict is not None
        assert plan.conflict.required == 2
        assert plan.conflict.available == 1
        assert plan.conflict.shortfall == 1
        assert [(u.id, u.reason) for u in plan.conflict.unavailable_employees] == [
            ("B", "Férias")
        ]

    def test_already_assigned_not_listed_as_unavailable(self, planner):
        plan = planner.plan_shift(
            MONDAY, MORNING, [create_employee("A")], frozenset({"A"})
        )
        assert plan.conflict.available == 0
        assert plan.conflict.unavailable_employees == ()

    def test_orders_by_oldest_availability_update(self, planner):
        employees = [
            create_employee("new", datetime(2024, 1, 10)),
            create_employee("old", datetime(2023, 6, 1)),
            create_employee("never"),
        ]
        plan = planner.plan_shift(MONDAY, MORNING, employees)
        assert [a.id for a in plan.shift.assignees] == ["never", "old"]

    def test_no_employees(self, planner):
        plan = planner.plan_shift(MONDAY, AFTERNOON, [])
        assert plan.shift.assignees == ()
        assert plan.conflict.available == 0
        assert plan.conflict.required == 1


class TestPlanDay:
    """Tests for staffing every shift of a day."""

    def test_closed_day_is_empty(self, planner):
        plan = planner.plan_day(
            MONDAY, OperatingHours.closed(), DEFAULT_SHIFT_DEFINITIONS,
            [create_employee("A")],
        )
        assert plan.shifts == ()
        assert plan.conflicts == ()

    def test_one_shift_per_employee_per_day(self, planner):
        employees = [create_employee(str(i)) for i in range(3)]
        plan = planner.plan_day(MONDAY, OPEN, [MORNING, AFTERNOON], employees)

        ids = [a.id for s in plan.shifts for a in s.assignees]
        assert len(ids) == len(set(ids)) == 3
        assert plan.conflicts == ()

    def test_earlier_definitions_claim_first(self, planner):
        employees = [create_employee("A"), create_employee("B")]
        plan = planner.plan_day(MONDAY, OPEN, [MORNING, AFTERNOON], employees)

        assert [a.id for a in plan.shifts[0].assignees] == ["A", "B"]
        assert plan.shifts[1].assignees == ()
        assert [c.shift_id for c in plan.conflicts] == ["a"]

    def test_shift_order_follows_definitions(self, planner):
        plan = planner.plan_day(
            MONDAY, OPEN, [AFTERNOON, MORNING], [create_employee("A")]
        )
        assert [s.shift_id for s in plan.shifts] == ["a", "m"]

    def test_window_routes_employee_to_matching_shift(self, planner):
        evening = create_employee(
            "E", recurring={1: RecurringDayAvailability(True, time(15, 0), time(23, 0))}
        )
        plan = planner.plan_day(MONDAY, OPEN, [MORNING, AFTERNOON], [evening])

        assert plan.shifts[0].assignees == ()
        assert [a.id for a in plan.shifts[1].assignees] == ["E"]
        morning_conflict = plan.conflicts[0]
        assert morning_conflict.unavailable_employees[0].reason == "Disponível apenas 15:00-23:00"
