# openclaw_lite/tools/dispatcher.py
"""
Tool dispatch.

Each tool declares a pydantic input model tagged with a ``tool`` literal
equal to its name. Incoming calls are validated against the tagged union of
every registered input model, so the model's JSON input becomes a typed
variant before any handler sees it.

``execute`` never raises: unknown tools, invalid input and handler failures
all come back as text for the model to read.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from openclaw_lite.exceptions import ToolExecutionError, ToolInputError
from openclaw_lite.models.tool import ToolCall, ToolDefinition, ToolResult

logger = logging.getLogger(__name__)


class ToolInput(BaseModel):
    """Base for tool input models; subclasses narrow ``tool`` to a Literal."""

    tool: str


ToolHandler = Callable[[Any, str], ToolResult | Awaitable[ToolResult]]


class ToolSpec(BaseModel):
    """A registered tool: its contract and the handler behind it."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    description: str
    input_model: type[ToolInput]
    handler: ToolHandler

    def definition(self) -> ToolDefinition:
        """Schema as advertised to the model; the ``tool`` tag is internal."""
        schema = self.input_model.model_json_schema()
        properties = dict(schema.get("properties", {}))
        properties.pop("tool", None)
        input_schema: dict[str, Any] = {"type": "object", "properties": properties}

        required = [name for name in schema.get("required", []) if name != "tool"]
        if required:
            input_schema["required"] = required
        if "$defs" in schema:
            input_schema["$defs"] = schema["$defs"]

        return ToolDefinition(name=self.name, description=self.description, input_schema=input_schema)


def _format_validation_error(tool_name: str, error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = [str(p) for p in err["loc"]]
        # Discriminated unions prefix the location with the tag
        if loc and loc[0] == tool_name:
            loc = loc[1:]
        parts.append(f"{'.'.join(loc) or 'input'}: {err['msg']}")
    return "; ".join(parts)


class ToolDispatcher:
    def __init__(self):
        self._tools: dict[str, ToolSpec] = {}
        self._adapter: TypeAdapter | None = None

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        tag = spec.input_model.model_fields["tool"].default
        if tag != spec.name:
            raise ValueError(f"Input model for {spec.name} is tagged {tag!r}")
        self._tools[spec.name] = spec
        self._adapter = None
        logger.debug(f"Registered tool {spec.name}")

    def definitions(self) -> list[ToolDefinition]:
        return [spec.definition() for spec in self._tools.values()]

    def _input_adapter(self) -> TypeAdapter:
        if self._adapter is None:
            models = tuple(spec.input_model for spec in self._tools.values())
            if len(models) == 1:
                self._adapter = TypeAdapter(models[0])
            else:
                self._adapter = TypeAdapter(Annotated[Union[models], Field(discriminator="tool")])
        return self._adapter

    def parse(self, call: ToolCall) -> ToolInput:
        """Validate ``call.input`` into the input model registered for ``call.name``."""
        if call.name not in self._tools:
            raise ToolInputError(call.name, "unknown tool")
        try:
            return self._input_adapter().validate_python({**call.input, "tool": call.name})
        except ValidationError as e:
            raise ToolInputError(call.name, _format_validation_error(call.name, e)) from e

    async def execute(self, call: ToolCall, chat_id: str) -> ToolResult:
        spec = self._tools.get(call.name)
        if spec is None:
            logger.warning(f"Model requested unknown tool {call.name}")
            return f"Error: unknown tool '{call.name}'"

        try:
            tool_input = self.parse(call)
            result = spec.handler(tool_input, chat_id)
            if inspect.isawaitable(result):
                result = await result
        except ToolInputError as e:
            logger.warning(f"Invalid input for tool {call.name}: {e}")
            return f"Error: invalid input for {call.name} ({e})"
        except ToolExecutionError as e:
            logger.warning(f"Tool {call.name} failed: {e}")
            return f"Error: {e}"
        except Exception as e:
            logger.exception(f"Tool {call.name} raised")
            return f"Error: {call.name} failed ({type(e).__name__}: {e})"

        logger.info(f"Tool {call.name} executed for {chat_id}")
        return str(result)
