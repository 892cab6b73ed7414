"""Name-keyed tool registry."""

import logging
from typing import Dict, Iterable, List, Tuple

from llm.base_client import ToolCall, ToolDeclaration, ToolResult
from retrieval.inspection_store import InspectionStore
from .tools import (
    Tool,
    ToolArgumentError,
    ListEquipmentTool,
    InspectionHistoryTool,
    SearchFindingsTool,
)

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Catalogue of tools the LLM may call.

    Dispatches a tool call to the handler registered under its name and
    always returns a ToolResult: unknown tools, bad arguments and handler
    failures all come back as error results rather than exceptions.
    """

    def __init__(self, tools: Iterable[Tool] = ()):
        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool):
        """
        Register a tool handler.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def list_declarations(self) -> Tuple[ToolDeclaration, ...]:
        """Get declarations for all registered tools, in registration order."""
        return tuple(tool.get_definition() for tool in self._tools.values())

    def execute(self, call: ToolCall) -> ToolResult:
        """
        Execute a tool call.

        Args:
            call: Tool call requested by the model

        Returns:
            ToolResult carrying the call's id
        """
        logger.info(f"Executing tool {call.name} with args: {call.arguments}")

        tool = self._tools.get(call.name)
        if tool is None:
            logger.warning(f"Model requested unknown tool: {call.name}")
            return self._error(call, f"Unknown tool: {call.name}")

        try:
            tool.validate_arguments(call.arguments)
            payload = tool.execute(call.arguments)
        except ToolArgumentError as e:
            logger.warning(f"Bad arguments for {call.name}: {e}")
            return self._error(call, str(e))
        except Exception as e:
            logger.exception(f"Tool {call.name} failed")
            return self._error(call, str(e) or e.__class__.__name__)

        return ToolResult(
            call_id=call.id,
            name=call.name,
            success=True,
            result=payload
        )

    def _error(self, call: ToolCall, message: str) -> ToolResult:
        return ToolResult(
            call_id=call.id,
            name=call.name,
            success=False,
            error=message
        )


def build_default_registry(store: InspectionStore) -> ToolRegistry:
    """Registry with the three inspection database tools."""
    return ToolRegistry([
        ListEquipmentTool(store),
        InspectionHistoryTool(store),
        SearchFindingsTool(store),
    ])
