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

"""Common MCP server configuration."""

from ..constants import MCP_SERVER_VERSION
from ..registry import ToolRegistry
from ..tools import get_tools
from enum import Enum
from loguru import logger
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent, Tool, ToolAnnotations
from typing import Any, Dict, Iterable, List, Optional


SERVER_NAME = 'supabase'

SERVER_VERSION = MCP_SERVER_VERSION

SERVER_INSTRUCTIONS = """
This server provides management capabilities for Supabase projects, both on the Supabase platform and hosted on Aliyun.

Key capabilities:
- Account: List organizations and projects, create, pause and restore projects
- Database: List tables, extensions and migrations, apply migrations and run SQL
- Debugging: Fetch service logs and security or performance advisors
- Development: Get project URLs and anonymous keys, generate TypeScript types
- Edge Functions: List, inspect and deploy Edge Functions
- Branching: Create, merge, reset, rebase and delete development branches
- Storage: List buckets and manage the storage configuration
- Aliyun: Manage Supabase projects on Aliyun, their whitelists, passwords and networking, and run SQL

When the server runs in read-only mode, every operation that changes state is rejected.

Always verify project identifiers and understand the impact of operations before executing them.
"""


class ServerState(str, Enum):
    """Lifecycle of the server with respect to the MCP handshake."""

    UNINITIALIZED = 'uninitialized'
    READY = 'ready'


class SupabaseMCPServer(FastMCP):
    """FastMCP server serving a declarative tool registry.

    Tools are not registered one by one with FastMCP; listing and calling go
    straight to the registry so the active set follows the feature gating.
    """

    def __init__(self, platform: Any, registry: ToolRegistry, **settings: Any):
        """Initialize the server.

        Args:
            platform: Platform adapter shared by every tool call
            registry: Registry of the active tools
            **settings: Extra FastMCP settings
        """
        super().__init__(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, **settings)
        self.platform = platform
        self.registry = registry
        self.state = ServerState.UNINITIALIZED

    async def mark_ready(self, client_name: str, client_version: Optional[str] = None) -> None:
        """Pass the client identity to the platform and move to READY, once."""
        if self.state is ServerState.READY:
            return
        await self.platform.init(client_name, client_version)
        self.state = ServerState.READY
        logger.info(f'Server ready for client {client_name}')

    async def _ensure_ready(self) -> None:
        if self.state is ServerState.READY:
            return
        try:
            client_params = self.get_context().session.client_params
        except (ValueError, LookupError):
            return
        if client_params is None:
            return
        client_info = client_params.clientInfo
        await self.mark_ready(client_info.name, client_info.version)

    async def list_tools(self) -> List[Tool]:
        """List the active tools with their JSON input schemas."""
        await self._ensure_ready()
        return [
            Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=self.registry.input_schema(definition),
                annotations=ToolAnnotations(
                    readOnlyHint=not definition.mutating,
                    destructiveHint=definition.mutating,
                ),
            )
            for definition in self.registry.list_tools()
        ]

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Call a tool through the registry.

        Raises:
            ToolError: With the failure text, reported to the client as an error result
        """
        await self._ensure_ready()
        result = await self.registry.call_tool(name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return [TextContent(type='text', text=result.text)]


def create_supabase_mcp_server(
    platform: Any,
    features: Optional[Iterable[str]] = None,
    read_only: bool = False,
    project_ref: Optional[str] = None,
) -> SupabaseMCPServer:
    """Create an MCP server exposing the tools of the requested feature groups.

    Args:
        platform: Platform adapter the tools call into
        features: Requested feature groups, None for the defaults
        read_only: Whether mutating tools are rejected
        project_ref: Project to scope the server to

    Returns:
        SupabaseMCPServer: The assembled server
    """
    tools = get_tools(features, project_ref)
    registry = ToolRegistry(platform, tools, read_only=read_only, project_ref=project_ref)
    logger.info(f'Registered {len(tools)} tools')
    return SupabaseMCPServer(platform, registry)
