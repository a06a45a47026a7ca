"""Sample records loaded at server startup.

Two demo patients with notes, care plans and an upcoming appointment
each, dated relative to today so the data always looks current.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta

from patientcare.records import (
    Appointment,
    CarePlan,
    Patient,
    PatientCareStore,
    ProgressNote,
)
from patientcare.tools.care import add_months

logger = logging.getLogger(__name__)


def seed_sample_data(store: PatientCareStore) -> None:
    """Populate an empty store with demo records. No-op if it has patients."""
    if store.list_patients():
        logger.info("Store already has patients; skipping sample data")
        return

    today = date.today()
    now = datetime.now()

    john = store.create_patient(
        Patient(
            name="John Smith",
            patient_id="PAT001",
            date_of_birth=date(1980, 5, 15),
            gender="Male",
            contact_number="555-0101",
            email="john.smith@email.com",
            address="123 Main St, Springfield",
        )
    )
    assert john.id is not None
    store.add_progress_note(
        john.id,
        ProgressNote(
            note="Patient presented with mild hypertension. Blood pressure: 140/90.",
            date_time=now - timedelta(days=7),
            provider="Dr. Sarah Johnson",
            note_type="Assessment",
        ),
    )
    store.add_progress_note(
        john.id,
        ProgressNote(
            note="Follow-up visit. Patient reports improved symptoms. BP: 130/85.",
            date_time=now - timedelta(days=3),
            provider="Dr. Sarah Johnson",
            note_type="Follow-up",
        ),
    )
    store.upsert_care_plan(
        john.id,
        CarePlan(
            goals="Reduce blood pressure to below 130/80 within 3 months",
            interventions=(
                "Diet modification: reduce sodium intake, increase exercise to 30 min/day"
            ),
            medications="Lisinopril 10mg once daily",
            start_date=today - timedelta(days=7),
            review_date=add_months(today, 3),
            status="Active",
        ),
    )
    store.create_appointment(
        john.id,
        Appointment(
            appointment_date=datetime.combine(today + timedelta(days=3), time(10, 0)),
            reason="Blood pressure follow-up",
            provider="Dr. Sarah Johnson",
            status="Scheduled",
        ),
    )

    mary = store.create_patient(
        Patient(
            name="Mary Johnson",
            patient_id="PAT002",
            date_of_birth=date(1975, 8, 22),
            gender="Female",
            contact_number="555-0102",
            email="mary.johnson@email.com",
            address="456 Oak Ave, Springfield",
        )
    )
    assert mary.id is not None
    store.add_progress_note(
        mary.id,
        ProgressNote(
            note="Initial consultation for Type 2 Diabetes management. HbA1c: 7.8%",
            date_time=now - timedelta(days=14),
            provider="Dr. Michael Chen",
            note_type="Assessment",
        ),
    )
    store.upsert_care_plan(
        mary.id,
        CarePlan(
            goals="Achieve HbA1c below 7.0% within 6 months",
            interventions="Dietary counseling, regular glucose monitoring, exercise program",
            medications="Metformin 500mg twice daily",
            start_date=today - timedelta(days=14),
            review_date=add_months(today, 6),
            status="Active",
        ),
    )
    store.create_appointment(
        mary.id,
        Appointment(
            appointment_date=datetime.combine(today + timedelta(days=7), time(9, 30)),
            reason="Diabetes management review",
            provider="Dr. Michael Chen",
            status="Scheduled",
        ),
    )

    logger.info("Sample data initialized: %d patients", len(store.list_patients()))
