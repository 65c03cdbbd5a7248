from collections.abc import Callable
from datetime import datetime

import pytest

from educenter.adapters.clock import FixedClock
from educenter.adapters.ids import SequentialIdGenerator
from educenter.domain.context import OperationContext
from educenter.domain.entities import (
    ClassFee,
    SchoolClass,
    Snapshot,
    Student,
    Teacher,
)
from educenter.domain.seed import get_default_settings


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 5, 15, 9, 30))


@pytest.fixture
def ids() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def ctx(clock: FixedClock, ids: SequentialIdGenerator) -> OperationContext:
    return OperationContext(clock=clock, ids=ids)


@pytest.fixture
def snapshot() -> Snapshot:
    """
    Small center: two students, two teachers, two classes.

    C1 is billed per session (100,000) and taught by T2 (per session).
    C2 is billed monthly (300,000) and taught by T1 (monthly salary).
    S1 attends both classes, S2 only C1.
    """
    return Snapshot(
        students=[
            Student(id="S1", name="An", created_at="2024-01-01"),
            Student(id="S2", name="Binh", created_at="2024-01-01"),
        ],
        teachers=[
            Teacher(id="T1", name="Thu", salary_type="MONTHLY", rate=5_000_000),
            Teacher(id="T2", name="Tam", salary_type="PER_SESSION", rate=200_000),
        ],
        classes=[
            SchoolClass(
                id="C1",
                name="Math 6",
                teacher_ids=["T2"],
                student_ids=["S1", "S2"],
                fee=ClassFee(type="PER_SESSION", amount=100_000),
            ),
            SchoolClass(
                id="C2",
                name="English 6",
                teacher_ids=["T1"],
                student_ids=["S1"],
                fee=ClassFee(type="MONTHLY", amount=300_000),
            ),
        ],
        settings=get_default_settings(),
    )


@pytest.fixture
def assert_balanced() -> Callable[[Snapshot], None]:
    """Check that every balance equals the sum of that student's ledger."""

    def _check(snap: Snapshot) -> None:
        for student in snap.students:
            ledger = sum(t.amount for t in snap.transactions if t.student_id == student.id)
            assert student.balance == ledger, f"{student.id}: {student.balance} != {ledger}"

    return _check
