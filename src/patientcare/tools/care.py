"""Care tools — care plans and progress notes.

Tools registered:
- get_progress_notes  — All progress notes for a patient
- add_progress_note   — Record a new progress note, stamped now
- get_care_plan       — The patient's current care plan
- update_care_plan    — Replace (or create) the care plan
"""

from __future__ import annotations

import calendar
from datetime import date, datetime

from patientcare.mcp.models import ToolParam
from patientcare.mcp.registry import ToolRegistry
from patientcare.records import (
    CarePlan,
    PatientCareStore,
    ProgressNote,
    RecordNotFoundError,
)
from patientcare.tools.patient import PATIENT_ID_PARAM

# A new or updated care plan is due for review this many months out.
REVIEW_INTERVAL_MONTHS = 3


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the end of shorter months."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class CareTools:
    """Care plan and progress note tools over a :class:`PatientCareStore`."""

    def __init__(self, store: PatientCareStore) -> None:
        self.store = store

    def register_tools(self, registry: ToolRegistry) -> None:
        registry.register(
            "get_progress_notes",
            "Get all progress notes for a specific patient",
            [PATIENT_ID_PARAM],
            self.get_progress_notes,
        )
        registry.register(
            "get_care_plan",
            "Get the care plan for a specific patient",
            [PATIENT_ID_PARAM],
            self.get_care_plan,
        )
        registry.register(
            "update_care_plan",
            "Update or create a care plan for a patient",
            [
                PATIENT_ID_PARAM,
                ToolParam(name="goals", description="Health goals for the patient"),
                ToolParam(name="interventions", description="Planned interventions"),
                ToolParam(name="medications", description="Prescribed medications"),
                ToolParam(
                    name="status",
                    description="Status of the care plan (e.g., Active, Under Review)",
                ),
            ],
            self.update_care_plan,
        )
        registry.register(
            "add_progress_note",
            "Add a new progress note for a patient",
            [
                PATIENT_ID_PARAM,
                ToolParam(name="note", description="Content of the progress note"),
                ToolParam(name="provider", description="Name of the healthcare provider"),
                ToolParam(
                    name="note_type",
                    description="Type of note (e.g., Assessment, Treatment)",
                ),
            ],
            self.add_progress_note,
        )

    def get_progress_notes(self, patient_id: int) -> list[ProgressNote]:
        return self.store.list_progress_notes(patient_id)

    def get_care_plan(self, patient_id: int) -> CarePlan:
        plan = self.store.get_care_plan(patient_id)
        if plan is None:
            raise RecordNotFoundError(f"Care plan not found for patient ID: {patient_id}")
        return plan

    def update_care_plan(
        self,
        patient_id: int,
        goals: str,
        interventions: str,
        medications: str,
        status: str,
    ) -> CarePlan:
        # Updating a plan restarts it: start today, review in three months.
        today = date.today()
        plan = CarePlan(
            goals=goals,
            interventions=interventions,
            medications=medications,
            status=status,
            start_date=today,
            review_date=add_months(today, REVIEW_INTERVAL_MONTHS),
        )
        return self.store.upsert_care_plan(patient_id, plan)

    def add_progress_note(
        self,
        patient_id: int,
        note: str,
        provider: str,
        note_type: str,
    ) -> ProgressNote:
        entry = ProgressNote(
            note=note,
            provider=provider,
            note_type=note_type,
            date_time=datetime.now(),
        )
        return self.store.add_progress_note(patient_id, entry)
