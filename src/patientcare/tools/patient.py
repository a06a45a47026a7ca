"""Patient lookup and registration tools.

Tools registered:
- get_patient_by_name  — Find one patient by full name
- get_patient_by_id    — Find one patient by numeric ID
- get_all_patients     — List every patient
- create_patient       — Register a new patient
"""

from __future__ import annotations

from datetime import date

from patientcare.mcp.models import ParamType, ToolParam
from patientcare.mcp.registry import ToolRegistry
from patientcare.records import Patient, PatientCareStore, RecordNotFoundError

PATIENT_ID_PARAM = ToolParam(
    name="patient_id",
    description="Numeric ID of the patient",
    type=ParamType.INTEGER,
)


class PatientTools:
    """Patient lookups and registration over a :class:`PatientCareStore`."""

    def __init__(self, store: PatientCareStore) -> None:
        self.store = store

    def register_tools(self, registry: ToolRegistry) -> None:
        registry.register(
            "get_patient_by_name",
            "Retrieve patient details by patient name",
            [ToolParam(name="name", description="Full name of the patient")],
            self.get_patient_by_name,
        )
        registry.register(
            "get_patient_by_id",
            "Retrieve patient details by patient ID",
            [PATIENT_ID_PARAM],
            self.get_patient_by_id,
        )
        registry.register(
            "get_all_patients",
            "List all patients in the system",
            [],
            self.get_all_patients,
        )
        registry.register(
            "create_patient",
            "Create a new patient record",
            [
                ToolParam(name="name", description="Full name of the patient"),
                ToolParam(name="patient_id", description="Unique patient identifier"),
                ToolParam(name="date_of_birth", description="Date of birth (YYYY-MM-DD)"),
                ToolParam(name="gender", description="Gender of the patient"),
                ToolParam(name="contact_number", description="Contact phone number"),
                ToolParam(name="email", description="Email address"),
                ToolParam(name="address", description="Residential address"),
            ],
            self.create_patient,
        )

    def get_patient_by_name(self, name: str) -> Patient:
        patient = self.store.find_patient_by_name(name)
        if patient is None:
            raise RecordNotFoundError(f"Patient not found with name: {name}")
        return patient

    def get_patient_by_id(self, patient_id: int) -> Patient:
        patient = self.store.get_patient(patient_id)
        if patient is None:
            raise RecordNotFoundError(f"Patient not found with ID: {patient_id}")
        return patient

    def get_all_patients(self) -> list[Patient]:
        return self.store.list_patients()

    def create_patient(
        self,
        name: str,
        patient_id: str,
        date_of_birth: str,
        gender: str,
        contact_number: str,
        email: str,
        address: str,
    ) -> Patient:
        """Register a new patient.

        Raises:
            ValueError: If date_of_birth is not an ISO date.
            RecordError: If patient_id is already taken.
        """
        patient = Patient(
            name=name,
            patient_id=patient_id,
            date_of_birth=date.fromisoformat(date_of_birth),
            gender=gender,
            contact_number=contact_number,
            email=email,
            address=address,
        )
        return self.store.create_patient(patient)
