"""Base action handler interface and registry with JSON Schema support."""
from abc import ABC, abstractmethod
from functools import cached_property
from typing import Dict, Any, List, Optional
from pydantic import BaseModel
import logging

logger = logging.getLogger(__name__)


class ToolMetadata(BaseModel):
    """Behaviour hints shown to the console and used in logs."""
    destructive_hint: bool = False   # True if the handler writes to the database
    read_only_hint: bool = False     # True if the handler only reads data
    idempotent_hint: bool = False    # True if repeated calls have no extra effect
    mock_mode: bool = False          # True if the side effect is only simulated


class ToolParameter(BaseModel):
    """Handler parameter definition (one command entity slot)."""
    name: str
    type: str = "string"
    description: str
    required: bool = False
    default: Any = None
    enum: Optional[List[str]] = None


class ToolSchema(BaseModel):
    """Handler schema."""
    name: str
    description: str
    parameters: List[ToolParameter]
    metadata: ToolMetadata = ToolMetadata()

    def to_json_schema(self) -> dict:
        """Convert to standard JSON Schema format."""
        properties: Dict[str, Any] = {}
        required_list: List[str] = []

        for param in self.parameters:
            prop: Dict[str, Any] = {
                "type": param.type,
                "description": param.description,
            }
            if param.default is not None:
                prop["default"] = param.default
            if param.enum:
                prop["enum"] = param.enum

            properties[param.name] = prop
            if param.required:
                required_list.append(param.name)

        schema: Dict[str, Any] = {
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }
        if required_list:
            schema["required"] = required_list

        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": schema,
            "metadata": self.metadata.model_dump(),
        }


class BaseTool(ABC):
    """Base class for all action handlers."""

    @cached_property
    def schema(self) -> ToolSchema:
        return self._build_schema()

    @abstractmethod
    def _build_schema(self) -> ToolSchema:
        ...

    @abstractmethod
    async def execute(self, **kwargs) -> Dict[str, Any]:
        """
        Execute the action with the mentioned entities.

        Must return:
        {
            'success': bool,
            'message': str,      # Vietnamese, shown to the operator
            'data': Any          # optional
        }
        """
        ...

    async def validate_parameters(self, **kwargs) -> bool:
        """Raise ValueError naming the missing slots (by description)."""
        missing = [
            p.description for p in self.schema.parameters
            if p.required and not kwargs.get(p.name)
        ]
        if missing:
            raise ValueError(f"Thiếu thông tin bắt buộc: {', '.join(missing)}.")

        return True


class ToolRegistry:
    """Central registry of available action handlers."""

    def __init__(self):
        self._tools: Dict[str, BaseTool] = {}
        logger.info("Tool registry initialized")

    def register(self, tool: BaseTool) -> None:
        name = tool.schema.name
        self._tools[name] = tool
        logger.info(f"Registered tool: {name}")

    def get_tool(self, name: str) -> Optional[BaseTool]:
        return self._tools.get(name)

    def get_json_schemas(self) -> List[dict]:
        return [tool.schema.to_json_schema() for tool in self._tools.values()]

    def list_tools(self) -> List[str]:
        return list(self._tools.keys())

    def get_tools_status(self) -> List[dict]:
        """Return operational status for each handler."""
        statuses = []
        for name, tool in self._tools.items():
            meta = tool.schema.metadata
            statuses.append({
                "name": name,
                "mock_mode": meta.mock_mode,
                "destructive": meta.destructive_hint,
                "read_only": meta.read_only_hint,
            })
        return statuses
