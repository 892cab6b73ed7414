"""Tools for ReAct loop."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from llm.base_client import ToolDeclaration
from retrieval.inspection_store import InspectionStore


class ToolArgumentError(ValueError):
    """Raised when a tool call is missing a required argument or has a bad one."""


def _dump(model) -> Dict[str, Any]:
    """Serialize a record for LLM consumption."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


class Tool(ABC):
    """Abstract base class for tools."""
    name: str
    description: str
    parameters: Dict[str, Any]

    @abstractmethod
    def execute(self, arguments: Dict[str, Any]) -> Any:
        """
        Execute the tool with validated arguments.

        Returns:
            Plain structured payload (dict or list)
        """
        pass

    def get_definition(self) -> ToolDeclaration:
        """Get the tool declaration passed to the LLM."""
        return ToolDeclaration(
            name=self.name,
            description=self.description,
            parameters=self.parameters
        )

    def validate_arguments(self, arguments: Dict[str, Any]):
        """
        Check required string parameters are present and non-empty.

        Raises:
            ToolArgumentError: If a required parameter is missing or not a string
        """
        for param in self.parameters.get("required", []):
            value = arguments.get(param)
            if value is None or value == "":
                raise ToolArgumentError(f"Missing {param}")
            expected = self.parameters["properties"][param].get("type")
            if expected == "string" and not isinstance(value, str):
                raise ToolArgumentError(f"Invalid {param}: expected string")


class ListEquipmentTool(Tool):
    """Tool for listing all equipment."""

    name = "get_equipment_list"
    description = (
        "Retrieves a list of all available equipment in the inspection database. "
        "Returns ID, Name, Type and Location."
    )
    parameters = {
        "type": "object",
        "properties": {},
    }

    MAX_ITEMS = 40  # Bounds the payload size for the model's context window

    def __init__(self, store: InspectionStore):
        self.store = store

    def execute(self, arguments: Dict[str, Any]) -> Any:
        """List equipment, capped with a note when the set is large."""
        summaries = [_dump(s) for s in self.store.list_equipment()]

        if len(summaries) > self.MAX_ITEMS:
            return {
                "items": summaries[:self.MAX_ITEMS],
                "note": (
                    f"Showing {self.MAX_ITEMS} of {len(summaries)} items. "
                    "Ask for specific equipment if not listed."
                )
            }
        return summaries


class InspectionHistoryTool(Tool):
    """Tool for retrieving the full history of one piece of equipment."""

    name = "get_inspection_history"
    description = (
        "Retrieves the full inspection history for a specific piece of equipment using its ID. "
        "Returns findings, recommendations, and report links."
    )
    parameters = {
        "type": "object",
        "properties": {
            "equipmentId": {
                "type": "string",
                "description": "The unique ID of the equipment (e.g., 'EQ-PSV-001')."
            }
        },
        "required": ["equipmentId"]
    }

    def __init__(self, store: InspectionStore):
        self.store = store

    def execute(self, arguments: Dict[str, Any]) -> Any:
        """Get the equipment record or a not-found payload."""
        equipment_id = arguments["equipmentId"]
        equipment = self.store.get_equipment_history(equipment_id)

        if equipment is None:
            return {
                "status": "not_found",
                "equipmentId": equipment_id,
                "message": "Equipment not found"
            }
        return _dump(equipment)


class SearchFindingsTool(Tool):
    """Tool for searching findings across the whole database."""

    name = "search_similar_findings"
    description = (
        "Searches the entire database for inspections with findings or recommendations "
        "matching a keyword query. Useful for finding similar defects or issues across "
        "different equipment."
    )
    parameters = {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The search keyword or phrase (e.g., 'corrosion', 'vibration', 'leak')."
            }
        },
        "required": ["query"]
    }

    MAX_RESULTS = 20

    def __init__(self, store: InspectionStore):
        self.store = store

    def execute(self, arguments: Dict[str, Any]) -> Any:
        """Search inspections; explicit payload when nothing matches."""
        query = arguments["query"]
        results = [_dump(r) for r in self.store.search_inspections(query)]

        if not results:
            return {
                "status": "no_matches",
                "query": query,
                "message": "No matching findings found."
            }
        if len(results) > self.MAX_RESULTS:
            return {
                "results": results[:self.MAX_RESULTS],
                "note": f"Showing top {self.MAX_RESULTS} of {len(results)} matches."
            }
        return results

