"""Tests for tool invocation and result serialization."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

import pytest

from patientcare.mcp.invoker import call_tool, invoke, serialize_result
from patientcare.mcp.models import ParamType, ToolDescriptor, ToolParam
from patientcare.records import Patient, RecordNotFoundError


def _tool(handler: Any, *params: ToolParam) -> ToolDescriptor:
    return ToolDescriptor(name="t", params=params, handler=handler)


class TestSerializeResult:
    def test_none_is_empty_object(self) -> None:
        assert serialize_result(None) == "{}"

    def test_string_passes_through(self) -> None:
        assert serialize_result('{"ok": true}') == '{"ok": true}'

    def test_model_and_dates(self) -> None:
        patient = Patient(id=1, name="A", patient_id="P1", date_of_birth=date(1990, 1, 2))
        data = json.loads(serialize_result(patient))
        assert data["name"] == "A"
        assert data["date_of_birth"] == "1990-01-02"

    def test_list_of_models(self) -> None:
        data = json.loads(serialize_result([Patient(name="A", patient_id="P1")]))
        assert data[0]["patient_id"] == "P1"


class TestInvoke:
    @pytest.mark.asyncio
    async def test_sync_handler(self) -> None:
        tool = _tool(lambda a, b: {"sum": a + b})
        assert json.loads(await invoke(tool, [2, 3])) == {"sum": 5}

    @pytest.mark.asyncio
    async def test_async_handler(self) -> None:
        async def handler(x: int) -> list[int]:
            return [x, x]

        assert json.loads(await invoke(_tool(handler), [4])) == [4, 4]

    @pytest.mark.asyncio
    async def test_handler_returning_nothing(self) -> None:
        assert await invoke(_tool(lambda: None), []) == "{}"

    @pytest.mark.asyncio
    async def test_domain_error_becomes_payload(self) -> None:
        def handler() -> None:
            raise RecordNotFoundError("Patient not found with ID: 9")

        result = json.loads(await invoke(_tool(handler), []))
        assert result == {"error": "Patient not found with ID: 9"}

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_payload(self) -> None:
        def handler() -> None:
            raise KeyError("boom")

        result = json.loads(await invoke(_tool(handler), []))
        assert result["error"].startswith("Error calling tool:")
        assert "boom" in result["error"]


class TestCallTool:
    @pytest.mark.asyncio
    async def test_binds_then_invokes(self) -> None:
        seen: list[Any] = []
        tool = _tool(seen.append, ToolParam(name="patient_id", type=ParamType.INTEGER))
        assert await call_tool(tool, {"patient_id": "7"}) == "{}"
        assert seen == [7]

    @pytest.mark.asyncio
    async def test_binding_failure_skips_handler(self) -> None:
        seen: list[Any] = []
        tool = _tool(seen.append, ToolParam(name="patient_id", type=ParamType.INTEGER))
        result = json.loads(await call_tool(tool, {}))
        assert result == {"error": "Missing required parameter: patient_id"}
        assert seen == []

    @pytest.mark.asyncio
    async def test_coercion_failure_payload(self) -> None:
        tool = _tool(lambda x: x, ToolParam(name="patient_id", type=ParamType.INTEGER))
        result = json.loads(await call_tool(tool, {"patient_id": "abc"}))
        assert "patient_id" in result["error"]
        assert "integer" in result["error"]


def test_serialize_nested_structures() -> None:
    payload = {"patient": Patient(name="A", patient_id="P1"), "seen": [date(2024, 2, 29)]}
    data = json.loads(serialize_result(payload))
    assert data["patient"]["name"] == "A"
    assert data["seen"] == ["2024-02-29"]
