"""In-memory patient-care records.

Holds patients and the records hanging off them (appointments, care
plans, progress notes) and offers the queries and updates the tools
need. IDs are assigned by the store, starting at 1 per record kind.

This is a process-local store: everything is lost on restart.
"""

from __future__ import annotations

import itertools
import threading
from datetime import date, datetime

from pydantic import BaseModel


class RecordError(Exception):
    """Raised when a record operation cannot be carried out."""


class RecordNotFoundError(RecordError):
    """Raised when a referenced record does not exist."""


# --- Entities ---


class Patient(BaseModel):
    id: int | None = None
    name: str
    patient_id: str
    date_of_birth: date | None = None
    gender: str | None = None
    contact_number: str | None = None
    email: str | None = None
    address: str | None = None


class Appointment(BaseModel):
    id: int | None = None
    patient_id: int | None = None
    appointment_date: datetime
    reason: str | None = None
    status: str | None = None
    provider: str | None = None


class CarePlan(BaseModel):
    id: int | None = None
    patient_id: int | None = None
    goals: str
    interventions: str | None = None
    medications: str | None = None
    start_date: date | None = None
    review_date: date | None = None
    status: str | None = None  # e.g. "Active", "Under Review", "Completed"


class ProgressNote(BaseModel):
    id: int | None = None
    patient_id: int | None = None
    note: str
    date_time: datetime
    provider: str | None = None
    note_type: str | None = None  # e.g. "Assessment", "Treatment", "Observation"


# --- Store ---


class PatientCareStore:
    """Thread-safe in-memory store for all patient-care records.

    Returned records are copies; callers cannot change stored state by
    mutating them.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._patients: dict[int, Patient] = {}
        self._appointments: dict[int, Appointment] = {}
        self._care_plans: dict[int, CarePlan] = {}  # keyed by patient id
        self._notes: dict[int, ProgressNote] = {}
        self._patient_ids = itertools.count(1)
        self._appointment_ids = itertools.count(1)
        self._care_plan_ids = itertools.count(1)
        self._note_ids = itertools.count(1)

    def _require_patient(self, patient_id: int) -> Patient:
        patient = self._patients.get(patient_id)
        if patient is None:
            raise RecordNotFoundError("Patient not found")
        return patient

    # --- Patients ---

    def get_patient(self, patient_id: int) -> Patient | None:
        with self._lock:
            patient = self._patients.get(patient_id)
            return patient.model_copy() if patient else None

    def find_patient_by_name(self, name: str) -> Patient | None:
        with self._lock:
            for patient in self._patients.values():
                if patient.name == name:
                    return patient.model_copy()
        return None

    def list_patients(self) -> list[Patient]:
        with self._lock:
            return [p.model_copy() for p in self._patients.values()]

    def create_patient(self, patient: Patient) -> Patient:
        """Store a new patient. The external ``patient_id`` must be unique."""
        with self._lock:
            if any(p.patient_id == patient.patient_id for p in self._patients.values()):
                raise RecordError(f"Patient ID already exists: {patient.patient_id}")
            stored = patient.model_copy(update={"id": next(self._patient_ids)})
            self._patients[stored.id] = stored  # type: ignore[index]
            return stored.model_copy()

    # --- Appointments ---

    def list_appointments(self, patient_id: int) -> list[Appointment]:
        with self._lock:
            return [
                a.model_copy()
                for a in self._appointments.values()
                if a.patient_id == patient_id
            ]

    def create_appointment(self, patient_id: int, appointment: Appointment) -> Appointment:
        with self._lock:
            self._require_patient(patient_id)
            stored = appointment.model_copy(
                update={
                    "id": next(self._appointment_ids),
                    "patient_id": patient_id,
                    "status": appointment.status or "Scheduled",
                }
            )
            self._appointments[stored.id] = stored  # type: ignore[index]
            return stored.model_copy()

    def cancel_appointment(self, appointment_id: int) -> Appointment:
        with self._lock:
            existing = self._appointments.get(appointment_id)
            if existing is None:
                raise RecordNotFoundError("Appointment not found")
            cancelled = existing.model_copy(update={"status": "Cancelled"})
            self._appointments[appointment_id] = cancelled
            return cancelled.model_copy()

    # --- Care plans ---

    def get_care_plan(self, patient_id: int) -> CarePlan | None:
        with self._lock:
            plan = self._care_plans.get(patient_id)
            return plan.model_copy() if plan else None

    def upsert_care_plan(self, patient_id: int, plan: CarePlan) -> CarePlan:
        """Replace the patient's care plan, creating one if needed."""
        with self._lock:
            self._require_patient(patient_id)
            existing = self._care_plans.get(patient_id)
            plan_id = existing.id if existing else next(self._care_plan_ids)
            stored = plan.model_copy(update={"id": plan_id, "patient_id": patient_id})
            self._care_plans[patient_id] = stored
            return stored.model_copy()

    # --- Progress notes ---

    def list_progress_notes(self, patient_id: int) -> list[ProgressNote]:
        with self._lock:
            return [
                n.model_copy() for n in self._notes.values() if n.patient_id == patient_id
            ]

    def add_progress_note(self, patient_id: int, note: ProgressNote) -> ProgressNote:
        with self._lock:
            self._require_patient(patient_id)
            stored = note.model_copy(
                update={"id": next(self._note_ids), "patient_id": patient_id}
            )
            self._notes[stored.id] = stored  # type: ignore[index]
            return stored.model_copy()


# --- Module-level singleton ---
# The server keeps one store for its lifetime; every tool provider gets it
# from here.

_store: PatientCareStore | None = None
_store_lock = threading.Lock()


def get_store() -> PatientCareStore:
    """Get or create the shared PatientCareStore."""
    global _store  # noqa: PLW0603
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = PatientCareStore()
    return _store
