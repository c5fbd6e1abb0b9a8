# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tool registry: declarative tool table, input validation and dispatch."""

import copy
from .common.decorator import handle_exceptions, readonly_check
from .exceptions import InvalidArgumentsError, UnknownToolError
from .models import ToolContext, ToolResult
from dataclasses import dataclass
from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Type


ToolHandler = Callable[[Any, BaseModel, ToolContext], Awaitable[Any]]


class EmptyInput(BaseModel):
    """Input model for tools that take no arguments."""

    pass


@dataclass(frozen=True)
class ToolDefinition:
    """A named, schema-validated operation."""

    name: str
    description: str
    input_model: Type[BaseModel]
    handler: ToolHandler
    feature: str
    mutating: bool = False
    project_scoped: bool = False

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the tool input."""
        return self.input_model.model_json_schema()


# Static tool table, filled in registration order when the tool modules are imported
_TOOL_TABLE: Dict[str, ToolDefinition] = {}


def tool(
    feature: str,
    description: str,
    input_model: Type[BaseModel] = EmptyInput,
    mutating: bool = False,
    project_scoped: bool = False,
    name: Optional[str] = None,
) -> Callable[[ToolHandler], ToolHandler]:
    """Decorator registering a handler in the static tool table.

    Mutating handlers are wrapped with ``readonly_check`` so they are blocked
    before touching the platform when the server runs read-only.

    Args:
        feature: Feature group the tool belongs to
        description: Description shown to the MCP client
        input_model: Pydantic model validating the tool arguments
        mutating: Whether the tool changes upstream state
        project_scoped: Whether a configured project ref fills in a missing ``project_id``
        name: Tool name, defaults to the handler name

    Returns:
        Decorator function
    """

    def decorator(func: ToolHandler) -> ToolHandler:
        tool_name = name or func.__name__
        if tool_name in _TOOL_TABLE:
            raise ValueError(f'Duplicate tool name: {tool_name}')

        _TOOL_TABLE[tool_name] = ToolDefinition(
            name=tool_name,
            description=description,
            input_model=input_model,
            handler=readonly_check(func) if mutating else func,
            feature=feature,
            mutating=mutating,
            project_scoped=project_scoped,
        )
        return func

    return decorator


def get_tool_definitions(features: Optional[Iterable[str]] = None) -> List[ToolDefinition]:
    """Return registered tools in table order, optionally limited to feature groups."""
    if features is None:
        return list(_TOOL_TABLE.values())
    wanted = set(features)
    return [definition for definition in _TOOL_TABLE.values() if definition.feature in wanted]


class ToolRegistry:
    """Active tool set bound to one platform adapter."""

    def __init__(
        self,
        platform: Any,
        tools: Iterable[ToolDefinition],
        read_only: bool = False,
        project_ref: Optional[str] = None,
    ):
        """Initialize the registry.

        Args:
            platform: Platform adapter passed to every handler
            tools: Tool definitions to expose, in listing order
            read_only: Whether mutating tools are rejected
            project_ref: Project ref replacing ``project_id`` for project-scoped tools
        """
        self._platform = platform
        self._tools: Dict[str, ToolDefinition] = {}
        for definition in tools:
            if definition.name in self._tools:
                raise ValueError(f'Duplicate tool name: {definition.name}')
            self._tools[definition.name] = definition
        self.context = ToolContext(read_only=read_only, project_ref=project_ref)

    def list_tools(self) -> List[ToolDefinition]:
        """Return the active tool definitions in order."""
        return list(self._tools.values())

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Look up an active tool by name."""
        return self._tools.get(name)

    def input_schema(self, definition: ToolDefinition) -> Dict[str, Any]:
        """Advertised input schema; ``project_id`` is hidden when a project ref fills it in."""
        schema = copy.deepcopy(definition.input_schema())
        if definition.project_scoped and self.context.project_ref:
            schema.get('properties', {}).pop('project_id', None)
            if 'required' in schema:
                schema['required'] = [field for field in schema['required'] if field != 'project_id']
        return schema

    @handle_exceptions
    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """Validate arguments, invoke the tool and wrap the outcome.

        Never raises; every failure becomes a failure envelope.

        Args:
            name: Tool name
            arguments: Raw tool arguments from the client

        Returns:
            ToolResult: Success or failure envelope
        """
        definition = self._tools.get(name)
        if definition is None:
            raise UnknownToolError(name)

        params = self._validate(definition, arguments if arguments is not None else {})

        logger.info(f'Calling tool {name}')
        data = await definition.handler(self._platform, params, self.context)
        return ToolResult.success(data)

    def _validate(self, definition: ToolDefinition, arguments: Any) -> BaseModel:
        if not isinstance(arguments, dict):
            raise InvalidArgumentsError(definition.name, '(root)', 'arguments must be an object')

        # a scoped server only ever addresses its own project
        if definition.project_scoped and self.context.project_ref:
            arguments = {**arguments, 'project_id': self.context.project_ref}

        try:
            return definition.input_model.model_validate(arguments)
        except PydanticValidationError as error:
            first = error.errors()[0]
            field = '.'.join(str(part) for part in first['loc']) or '(root)'
            raise InvalidArgumentsError(definition.name, field, first['msg']) from error
