"""Shared fixtures: a fresh store, registry and dispatcher per test."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest
from fastapi.testclient import TestClient

from patientcare.app import app, get_dispatcher
from patientcare.mcp.dispatcher import JsonRpcDispatcher
from patientcare.mcp.registry import ToolRegistry
from patientcare.records import Patient, PatientCareStore
from patientcare.tools import default_providers


@pytest.fixture
def store() -> PatientCareStore:
    """An empty store holding one patient, John Smith (id 1)."""
    store = PatientCareStore()
    store.create_patient(
        Patient(
            name="John Smith",
            patient_id="PAT001",
            date_of_birth=date(1980, 5, 15),
            gender="Male",
        )
    )
    return store


@pytest.fixture
def registry(store: PatientCareStore) -> ToolRegistry:
    return ToolRegistry(default_providers(store))


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> JsonRpcDispatcher:
    return JsonRpcDispatcher(registry)


@pytest.fixture
def client(dispatcher: JsonRpcDispatcher) -> Iterator[TestClient]:
    """A TestClient whose /mcp route uses the fixture dispatcher."""
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
