"""Tool-calling loop for the inspection assistant."""

from .tools import Tool, ToolArgumentError, ListEquipmentTool, InspectionHistoryTool, SearchFindingsTool
from .registry import ToolRegistry, build_default_registry
from .loop import LoopState, ReActLoop, ReActResult, ReActStep
from .errors import ToolLoopError, MaxToolRoundsExceeded
from .prompts import SYSTEM_INSTRUCTION, WELCOME_MESSAGE

__all__ = [
    "Tool",
    "ToolArgumentError",
    "ListEquipmentTool",
    "InspectionHistoryTool",
    "SearchFindingsTool",
    "ToolRegistry",
    "build_default_registry",
    "LoopState",
    "ReActLoop",
    "ReActResult",
    "ReActStep",
    "ToolLoopError",
    "MaxToolRoundsExceeded",
    "SYSTEM_INSTRUCTION",
    "WELCOME_MESSAGE",
]
