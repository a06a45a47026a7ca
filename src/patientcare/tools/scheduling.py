"""Scheduling tools — appointments.

Tools registered:
- schedule_appointment  — Book a visit for a patient
- get_appointments      — A patient's appointments
- cancel_appointment    — Mark an appointment as cancelled
"""

from __future__ import annotations

from datetime import datetime

from patientcare.mcp.models import ParamType, ToolParam
from patientcare.mcp.registry import ToolRegistry
from patientcare.records import Appointment, PatientCareStore
from patientcare.tools.patient import PATIENT_ID_PARAM


class SchedulingTools:
    """Appointment tools over a :class:`PatientCareStore`."""

    def __init__(self, store: PatientCareStore) -> None:
        self.store = store

    def register_tools(self, registry: ToolRegistry) -> None:
        registry.register(
            "schedule_appointment",
            "Schedule an appointment for a patient",
            [
                PATIENT_ID_PARAM,
                ToolParam(
                    name="appointment_date",
                    description="Appointment date and time (ISO-8601)",
                ),
                ToolParam(name="reason", description="Reason for visit"),
                ToolParam(name="provider", description="Provider name"),
            ],
            self.schedule_appointment,
        )
        registry.register(
            "get_appointments",
            "Get appointments for a patient",
            [PATIENT_ID_PARAM],
            self.get_appointments,
        )
        registry.register(
            "cancel_appointment",
            "Cancel an appointment by appointment ID",
            [
                ToolParam(
                    name="appointment_id",
                    description="Numeric ID of the appointment",
                    type=ParamType.INTEGER,
                )
            ],
            self.cancel_appointment,
        )

    def schedule_appointment(
        self,
        patient_id: int,
        appointment_date: str,
        reason: str,
        provider: str,
    ) -> Appointment:
        """Book an appointment.

        Raises:
            ValueError: If appointment_date is not ISO-8601.
            RecordNotFoundError: If the patient does not exist.
        """
        appointment = Appointment(
            appointment_date=datetime.fromisoformat(appointment_date),
            reason=reason,
            provider=provider,
            status="Scheduled",
        )
        return self.store.create_appointment(patient_id, appointment)

    def get_appointments(self, patient_id: int) -> list[Appointment]:
        return self.store.list_appointments(patient_id)

    def cancel_appointment(self, appointment_id: int) -> Appointment:
        return self.store.cancel_appointment(appointment_id)
