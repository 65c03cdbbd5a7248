"""
Applicator component unit tests.

Tests for wire parsing, dispatch and all-or-nothing application.
"""

from __future__ import annotations

import logging

import pytest

from educenter.components.applicator import HANDLERS, apply_operation, parse_operation, run
from educenter.components.applicator.models import AddStudent, GenerateInvoices
from educenter.domain.errors import (
    DuplicateIdError,
    InvalidPayloadError,
    NotFoundError,
    UnknownOperationError,
)


class TestParseOperation:
    """Test wire operation validation."""

    def test_selects_payload_model_by_op(self) -> None:
        op = parse_operation(
            {"op": "addStudent", "payload": {"student": {"name": "Cuong"}, "classIds": ["C1"]}}
        )
        assert isinstance(op, AddStudent)
        assert op.payload.class_ids == ["C1"]

    def test_unknown_op(self) -> None:
        with pytest.raises(UnknownOperationError, match="fooBar"):
            parse_operation({"op": "fooBar", "payload": {}})

    def test_missing_op(self) -> None:
        with pytest.raises(InvalidPayloadError):
            parse_operation({"payload": {}})

    def test_not_an_object(self) -> None:
        with pytest.raises(InvalidPayloadError):
            parse_operation(["addStudent"])

    def test_invalid_payload_names_field(self) -> None:
        with pytest.raises(InvalidPayloadError) as exc:
            parse_operation({"op": "addStudent", "payload": {"student": {}}})
        assert "payload.student.name" in exc.value.message

    def test_month_out_of_range(self) -> None:
        with pytest.raises(InvalidPayloadError, match="month"):
            parse_operation({"op": "generateInvoices", "payload": {"month": 13, "year": 2024}})

    def test_payloadless_operation(self) -> None:
        op = parse_operation({"op": "clearAllTransactions"})
        assert op.payload is None

    def test_unknown_collection_rejected(self) -> None:
        with pytest.raises(InvalidPayloadError):
            parse_operation({"op": "clearCollections", "payload": ["settings"]})

    def test_every_handler_has_a_model(self) -> None:
        """Each registered op name parses as its own variant."""
        for name in HANDLERS:
            with pytest.raises(InvalidPayloadError):
                parse_operation({"op": name, "payload": 12345})


class TestApplyOperation:
    """Test dispatch and atomicity."""

    def test_input_snapshot_not_mutated(self, snapshot, ctx) -> None:
        before = snapshot.model_copy(deep=True)
        op = GenerateInvoices(op="generateInvoices", payload={"month": 5, "year": 2024})
        result = apply_operation(snapshot, op, ctx)

        assert snapshot == before
        assert len(result.invoices) == 1

    def test_failure_discards_working_copy(self, snapshot, ctx) -> None:
        """A handler that fails after mutating leaves nothing behind."""
        before = snapshot.model_copy(deep=True)
        raw = {
            "op": "updateAttendance",
            "payload": [
                {"classId": "C1", "studentId": "S1", "date": "2024-05-02", "status": "PRESENT"},
                {"classId": "C1", "studentId": "S404", "date": "2024-05-02", "status": "PRESENT"},
            ],
        }
        with pytest.raises(NotFoundError):
            run(snapshot, raw, ctx)
        assert snapshot == before

    def test_logs_applied_and_rejected(self, snapshot, ctx, caplog) -> None:
        caplog.set_level(logging.INFO, logger="educenter.components.applicator.component")
        run(snapshot, {"op": "addStaff", "payload": {"staff": {"name": "Mai"}}}, ctx)
        with pytest.raises(DuplicateIdError):
            run(snapshot, {"op": "addStudent", "payload": {"student": {"id": "S1", "name": "X"}}}, ctx)

        messages = [r.getMessage() for r in caplog.records]
        assert "Applied addStaff" in messages
        assert any(m.startswith("Rejected addStudent") for m in messages)


class TestRun:
    """Test parse + apply end to end on wire documents."""

    def test_rename_student_over_the_wire(self, snapshot, ctx) -> None:
        raw = {
            "op": "updateStudent",
            "payload": {
                "originalId": "S2",
                "updatedStudent": {"id": "S2B", "name": "Binh"},
                "classIds": ["C2"],
            },
        }
        result = run(snapshot, raw, ctx)
        wire = result.to_wire()

        assert [s["id"] for s in wire["students"]] == ["S1", "S2B"]
        c2 = next(c for c in wire["classes"] if c["id"] == "C2")
        assert c2["studentIds"] == ["S1", "S2B"]

    def test_add_class_wire_key(self, snapshot, ctx) -> None:
        raw = {
            "op": "addClass",
            "payload": {"class": {"id": "C3", "name": "Art", "fee": {"type": "PER_COURSE", "amount": 900000}}},
        }
        result = run(snapshot, raw, ctx)
        assert result.find_class("C3").fee.amount == 900_000
