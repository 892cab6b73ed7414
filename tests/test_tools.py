"""Tests for inspection tools and the tool registry."""

import pytest
from datetime import date
from unittest.mock import Mock

from llm.base_client import ToolCall
from react.registry import ToolRegistry, build_default_registry
from react.tools import ListEquipmentTool, SearchFindingsTool
from retrieval.generator import generate_inspection_dataset
from retrieval.inspection_store import InspectionStore


class TestToolDeclarations:
    """Test the declarations handed to the model."""

    def setup_method(self):
        """Set up test fixtures."""
        store = InspectionStore(generate_inspection_dataset(seed=1, per_type=2, reference_date=date(2025, 1, 1)))
        self.registry = build_default_registry(store)

    def test_three_tools_in_order(self):
        """Test the default registry exposes exactly the three database tools."""
        names = [d.name for d in self.registry.list_declarations()]
        assert names == ["get_equipment_list", "get_inspection_history", "search_similar_findings"]

    def test_required_parameters(self):
        """Test parameter schemas name their required arguments."""
        decls = {d.name: d for d in self.registry.list_declarations()}
        assert decls["get_equipment_list"].parameters["properties"] == {}
        assert decls["get_inspection_history"].parameters["required"] == ["equipmentId"]
        assert decls["search_similar_findings"].parameters["required"] == ["query"]

    def test_duplicate_registration_rejected(self):
        """Test a name can only be registered once."""
        with pytest.raises(ValueError):
            self.registry.register(ListEquipmentTool(Mock()))


class TestToolExecution:
    """Test tool payloads through the registry."""

    def setup_method(self):
        """Set up test fixtures."""
        self.store = InspectionStore(
            generate_inspection_dataset(seed=3, per_type=10, reference_date=date(2025, 1, 1))
        )
        self.registry = build_default_registry(self.store)

    def call(self, name, **arguments):
        return self.registry.execute(ToolCall(id=f"call-{name}", name=name, arguments=arguments))

    def test_list_capped_with_note(self):
        """Test large listings are truncated to 40 items with a note."""
        result = self.call("get_equipment_list")

        assert result.success is True
        assert result.call_id == "call-get_equipment_list"
        assert len(result.result["items"]) == ListEquipmentTool.MAX_ITEMS
        assert result.result["note"] == (
            "Showing 40 of 50 items. Ask for specific equipment if not listed."
        )
        first = result.result["items"][0]
        assert set(first) == {"id", "name", "type", "location"}
        assert first["id"] == "EQ-PL-001"
        assert first["name"] == "Pipeline-001"
        assert first["type"] == "Pipeline"

    def test_list_small_set_uncapped(self):
        """Test small listings come back whole with no note."""
        store = InspectionStore(generate_inspection_dataset(seed=3, per_type=8))
        result = build_default_registry(store).execute(ToolCall(id="c1", name="get_equipment_list"))

        assert isinstance(result.result, list)
        assert len(result.result) == 40

    def test_history_found(self):
        """Test history payload has inspections most recent first."""
        result = self.call("get_inspection_history", equipmentId="EQ-PSV-002")

        assert result.success is True
        payload = result.result
        assert payload["id"] == "EQ-PSV-002"
        assert payload["type"] == "PSV"
        assert payload["specs"]["equipmentType"] == "PSV"
        dates = [ins["date"] for ins in payload["inspections"]]
        assert dates == sorted(dates, reverse=True)
        assert "reportUrl" in payload["inspections"][0]

    def test_history_not_found(self):
        """Test unknown equipment returns the not-found payload, not an error."""
        result = self.call("get_inspection_history", equipmentId="EQ-NOPE-001")

        assert result.success is True
        assert result.result == {
            "status": "not_found",
            "equipmentId": "EQ-NOPE-001",
            "message": "Equipment not found",
        }

    def test_search_matches_only(self):
        """Test search returns only matching inspections."""
        result = self.call("search_similar_findings", query="corrosion")

        assert result.success is True
        expected = {
            (eq.name, ins.date.isoformat(), ins.findings)
            for eq in self.store.equipment
            for ins in eq.inspections
            if "corrosion" in ins.findings.lower() or "corrosion" in ins.recommendations.lower()
        }
        payload = result.result
        items = payload["results"] if isinstance(payload, dict) else payload
        assert items
        for item in items:
            assert (item["equipmentName"], item["date"], item["finding"]) in expected
            assert set(item) == {"equipmentName", "date", "finding", "severity", "reportUrl"}

    def test_search_capped_with_note(self):
        """Test search results are truncated to 20 with a note."""
        result = self.call("search_similar_findings", query="e")
        matches = len(self.store.search_inspections("e"))

        assert matches > SearchFindingsTool.MAX_RESULTS
        assert len(result.result["results"]) == SearchFindingsTool.MAX_RESULTS
        assert result.result["note"] == f"Showing top 20 of {matches} matches."

    def test_search_no_matches(self):
        """Test a query with no hits returns the explicit no-matches payload."""
        result = self.call("search_similar_findings", query="zzzxxy")

        assert result.success is True
        assert result.result == {
            "status": "no_matches",
            "query": "zzzxxy",
            "message": "No matching findings found.",
        }

    def test_repeated_calls_identical(self):
        """Test identical calls return identical payloads."""
        first = self.call("get_inspection_history", equipmentId="EQ-HE-004")
        second = self.call("get_inspection_history", equipmentId="EQ-HE-004")
        assert first.result == second.result


class TestToolErrors:
    """Test the registry's error results."""

    def setup_method(self):
        """Set up test fixtures."""
        self.store = Mock()
        self.registry = build_default_registry(self.store)

    def test_unknown_tool(self):
        """Test an unregistered name yields an error result."""
        result = self.registry.execute(ToolCall(id="c1", name="delete_database"))

        assert result.success is False
        assert result.call_id == "c1"
        assert result.error == "Unknown tool: delete_database"
        assert result.to_response() == {"error": "Unknown tool: delete_database"}

    def test_missing_equipment_id(self):
        """Test a missing required argument yields an error result."""
        result = self.registry.execute(ToolCall(id="c2", name="get_inspection_history", arguments={}))

        assert result.success is False
        assert result.error == "Missing equipmentId"
        self.store.get_equipment_history.assert_not_called()

    def test_empty_query(self):
        """Test an empty query is treated as missing."""
        result = self.registry.execute(ToolCall(id="c3", name="search_similar_findings", arguments={"query": ""}))

        assert result.success is False
        assert result.error == "Missing query"

    def test_non_string_query(self):
        """Test a non-string query is rejected."""
        result = self.registry.execute(ToolCall(id="c4", name="search_similar_findings", arguments={"query": 42}))

        assert result.success is False
        assert result.error == "Invalid query: expected string"

    def test_handler_failure_contained(self):
        """Test an exception inside a handler becomes an error result."""
        self.store.list_equipment.side_effect = RuntimeError("store offline")

        result = self.registry.execute(ToolCall(id="c5", name="get_equipment_list"))

        assert result.success is False
        assert result.error == "store offline"

    def test_empty_registry(self):
        """Test an empty registry declares nothing and rejects every call."""
        registry = ToolRegistry()
        assert registry.list_declarations() == ()
        assert registry.execute(ToolCall(id="c6", name="get_equipment_list")).success is False
