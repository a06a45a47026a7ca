"""Patient-care tools exposed over JSON-RPC.

Each module in this package holds a provider class whose
``register_tools`` method declares its tools (name, description, ordered
parameters, handler) into a :class:`~patientcare.mcp.registry.ToolRegistry`.
The tool descriptions are what an MCP client reads to pick a tool.

Tools are organized by domain:
- patient.py:    Patient lookup and registration
- care.py:       Care plans and progress notes
- scheduling.py: Appointments
"""

from __future__ import annotations

from patientcare.records import PatientCareStore, get_store
from patientcare.tools.care import CareTools
from patientcare.tools.patient import PatientTools
from patientcare.tools.scheduling import SchedulingTools


def default_providers(
    store: PatientCareStore | None = None,
) -> list[PatientTools | CareTools | SchedulingTools]:
    """Build the standard providers, all sharing one store."""
    store = store if store is not None else get_store()
    return [PatientTools(store), CareTools(store), SchedulingTools(store)]
