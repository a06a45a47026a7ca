"""Tests for the patient-care tools.

Each test calls a tool the way tools/call does (raw JSON arguments bound
through the registry) against a fresh in-memory store holding one
patient, John Smith (id 1). We verify results and that failures come back
as ``{"error": ...}`` payloads.
"""

from __future__ import annotations

import json
import threading
from datetime import date, datetime, timedelta
from typing import Any

import pytest

from patientcare import records
from patientcare.mcp.invoker import call_tool
from patientcare.mcp.registry import ToolRegistry
from patientcare.records import PatientCareStore
from patientcare.seed import seed_sample_data
from patientcare.tools.care import add_months


async def _call(registry: ToolRegistry, name: str, /, **arguments: Any) -> Any:
    tool = registry.get(name)
    assert tool is not None, name
    return json.loads(await call_tool(tool, arguments))


# --- patients ---


@pytest.mark.asyncio
async def test_get_patient_by_name(registry: ToolRegistry) -> None:
    patient = await _call(registry, "get_patient_by_name", name="John Smith")
    assert patient["patient_id"] == "PAT001"
    assert patient["date_of_birth"] == "1980-05-15"


@pytest.mark.asyncio
async def test_get_patient_by_name_not_found(registry: ToolRegistry) -> None:
    result = await _call(registry, "get_patient_by_name", name="Nobody")
    assert result == {"error": "Patient not found with name: Nobody"}


@pytest.mark.asyncio
async def test_get_patient_by_id_accepts_numeric_text(registry: ToolRegistry) -> None:
    patient = await _call(registry, "get_patient_by_id", patient_id="1")
    assert patient["name"] == "John Smith"


@pytest.mark.asyncio
async def test_create_patient(registry: ToolRegistry) -> None:
    created = await _call(
        registry,
        "create_patient",
        name="Ana Ruiz",
        patient_id="PAT010",
        date_of_birth="1992-03-04",
        gender="Female",
        contact_number="555-0110",
        email="ana@example.com",
        address="9 Elm St",
    )
    assert created["id"] == 2
    assert created["date_of_birth"] == "1992-03-04"

    patients = await _call(registry, "get_all_patients")
    assert [p["name"] for p in patients] == ["John Smith", "Ana Ruiz"]


@pytest.mark.asyncio
async def test_create_patient_duplicate_id(registry: ToolRegistry) -> None:
    result = await _call(
        registry,
        "create_patient",
        name="Other John",
        patient_id="PAT001",
        date_of_birth="1990-01-01",
        gender="Male",
        contact_number="",
        email="",
        address="",
    )
    assert "PAT001" in result["error"]


@pytest.mark.asyncio
async def test_create_patient_bad_date(registry: ToolRegistry) -> None:
    result = await _call(
        registry,
        "create_patient",
        name="X",
        patient_id="PAT011",
        date_of_birth="15/05/1980",
        gender="",
        contact_number="",
        email="",
        address="",
    )
    assert "error" in result


@pytest.mark.asyncio
async def test_create_patient_missing_field(registry: ToolRegistry) -> None:
    result = await _call(registry, "create_patient", name="X", patient_id="PAT012")
    assert result == {"error": "Missing required parameter: date_of_birth"}


# --- care plans and progress notes ---


@pytest.mark.asyncio
async def test_care_plan_not_found(registry: ToolRegistry) -> None:
    result = await _call(registry, "get_care_plan", patient_id=1)
    assert result == {"error": "Care plan not found for patient ID: 1"}


@pytest.mark.asyncio
async def test_update_care_plan_creates_then_replaces(registry: ToolRegistry) -> None:
    first = await _call(
        registry,
        "update_care_plan",
        patient_id=1,
        goals="Lower BP",
        interventions="Diet",
        medications="Lisinopril",
        status="Active",
    )
    today = date.today()
    assert first["start_date"] == today.isoformat()
    assert first["review_date"] == add_months(today, 3).isoformat()

    second = await _call(
        registry,
        "update_care_plan",
        patient_id="1",
        goals="Maintain BP",
        interventions="Exercise",
        medications="None",
        status="Under Review",
    )
    assert second["id"] == first["id"]

    plan = await _call(registry, "get_care_plan", patient_id=1)
    assert plan["goals"] == "Maintain BP"
    assert plan["status"] == "Under Review"


@pytest.mark.asyncio
async def test_update_care_plan_unknown_patient(registry: ToolRegistry) -> None:
    result = await _call(
        registry,
        "update_care_plan",
        patient_id=42,
        goals="g",
        interventions="i",
        medications="m",
        status="Active",
    )
    assert result == {"error": "Patient not found"}


@pytest.mark.asyncio
async def test_progress_notes(registry: ToolRegistry) -> None:
    assert await _call(registry, "get_progress_notes", patient_id=1) == []

    before = datetime.now()
    note = await _call(
        registry,
        "add_progress_note",
        patient_id=1,
        note="BP 130/85",
        provider="Dr. Sarah Johnson",
        note_type="Follow-up",
    )
    assert note["patient_id"] == 1
    assert datetime.fromisoformat(note["date_time"]) >= before - timedelta(seconds=1)

    notes = await _call(registry, "get_progress_notes", patient_id=1)
    assert [n["note"] for n in notes] == ["BP 130/85"]


# --- appointments ---


@pytest.mark.asyncio
async def test_schedule_and_cancel_appointment(registry: ToolRegistry) -> None:
    appt = await _call(
        registry,
        "schedule_appointment",
        patient_id=1,
        appointment_date="2030-01-15T10:00:00",
        reason="Check-up",
        provider="Dr. Chen",
    )
    assert appt["status"] == "Scheduled"
    assert appt["appointment_date"] == "2030-01-15T10:00:00"

    cancelled = await _call(registry, "cancel_appointment", appointment_id=appt["id"])
    assert cancelled["status"] == "Cancelled"

    appts = await _call(registry, "get_appointments", patient_id=1)
    assert [a["status"] for a in appts] == ["Cancelled"]


@pytest.mark.asyncio
async def test_schedule_appointment_unknown_patient(registry: ToolRegistry) -> None:
    result = await _call(
        registry,
        "schedule_appointment",
        patient_id=5,
        appointment_date="2030-01-15T10:00:00",
        reason="r",
        provider="p",
    )
    assert result == {"error": "Patient not found"}


@pytest.mark.asyncio
async def test_cancel_unknown_appointment(registry: ToolRegistry) -> None:
    result = await _call(registry, "cancel_appointment", appointment_id=123)
    assert result == {"error": "Appointment not found"}


# --- helpers and seed data ---


@pytest.mark.parametrize(
    ("start", "months", "expected"),
    [
        (date(2024, 1, 15), 3, date(2024, 4, 15)),
        (date(2024, 11, 30), 3, date(2025, 2, 28)),
        (date(2024, 8, 31), 6, date(2025, 2, 28)),
        (date(2023, 11, 29), 3, date(2024, 2, 29)),
    ],
)
def test_add_months(start: date, months: int, expected: date) -> None:
    assert add_months(start, months) == expected


def test_seed_sample_data() -> None:
    store = PatientCareStore()
    seed_sample_data(store)
    seed_sample_data(store)  # second call is a no-op

    patients = store.list_patients()
    assert [p.patient_id for p in patients] == ["PAT001", "PAT002"]
    assert len(store.list_progress_notes(1)) == 2
    assert store.get_care_plan(2) is not None
    assert len(store.list_appointments(2)) == 1


def test_store_returns_copies(store: PatientCareStore) -> None:
    patient = store.get_patient(1)
    assert patient is not None
    patient.name = "Changed"
    assert store.get_patient(1).name == "John Smith"  # type: ignore[union-attr]


def test_get_store_is_a_single_shared_instance(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(records, "_store", None)
    barrier = threading.Barrier(8)
    seen: list[PatientCareStore] = []

    def worker() -> None:
        barrier.wait()
        seen.append(records.get_store())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 8
    assert all(s is seen[0] for s in seen)
