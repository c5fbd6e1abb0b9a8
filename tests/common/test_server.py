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

"""Tests for the MCP server assembly."""

import json
import pytest
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import Implementation
from supabase_mcp_server.common.server import (
    SERVER_NAME,
    ServerState,
    SupabaseMCPServer,
    create_supabase_mcp_server,
)
from unittest.mock import MagicMock, patch


class TestCreateServer:
    """Test cases for create_supabase_mcp_server."""

    def test_server_configuration(self, mock_platform):
        """Test the server is created with its name and starts uninitialized."""
        server = create_supabase_mcp_server(mock_platform, features=['aliyun'])

        assert isinstance(server, SupabaseMCPServer)
        assert server.name == SERVER_NAME
        assert server.state is ServerState.UNINITIALIZED
        assert 'Supabase' in server.instructions

    @pytest.mark.asyncio
    async def test_list_tools(self, mock_platform):
        """Test tools are listed with schemas and annotations."""
        server = create_supabase_mcp_server(mock_platform, features=['aliyun'])

        tools = {t.name: t for t in await server.list_tools()}

        assert len(tools) == 13
        delete = tools['delete_supabase_project']
        assert delete.inputSchema['required'] == ['project_id']
        assert delete.annotations.readOnlyHint is False
        assert delete.annotations.destructiveHint is True
        assert tools['describe_regions'].annotations.readOnlyHint is True

    @pytest.mark.asyncio
    async def test_list_tools_project_scoped(self, mock_platform):
        """Test project-scoped tools hide project_id when a project ref is set."""
        server = create_supabase_mcp_server(
            mock_platform, features=['database'], project_ref='abc'
        )

        tools = {t.name: t for t in await server.list_tools()}

        assert 'project_id' not in tools['list_tables'].inputSchema['properties']


class TestCallTool:
    """Test cases for SupabaseMCPServer.call_tool."""

    @pytest.mark.asyncio
    async def test_call_tool_success(self, mock_platform):
        """Test a successful call returns one text block."""
        mock_platform.describe_regions.return_value = {'regions': [], 'requestId': 'r'}
        server = create_supabase_mcp_server(mock_platform, features=['aliyun'])

        content = await server.call_tool('describe_regions', {})

        assert len(content) == 1
        assert content[0].type == 'text'
        assert json.loads(content[0].text) == {'regions': [], 'requestId': 'r'}

    @pytest.mark.asyncio
    async def test_call_tool_failure(self, mock_platform):
        """Test a failure envelope is raised as a tool error."""
        server = create_supabase_mcp_server(mock_platform, features=['aliyun'], read_only=True)

        with pytest.raises(ToolError, match='read-only mode'):
            await server.call_tool('delete_supabase_project', {'project_id': 'sbp-1'})

        mock_platform.delete_aliyun_supabase_project.assert_not_called()


class TestServerState:
    """Test cases for the ready transition."""

    @pytest.mark.asyncio
    async def test_mark_ready_once(self, mock_platform):
        """Test the platform learns the client identity exactly once."""
        server = create_supabase_mcp_server(mock_platform, features=['aliyun'])

        await server.mark_ready('cursor', '1.2.0')
        await server.mark_ready('other', '9.9.9')

        assert server.state is ServerState.READY
        mock_platform.init.assert_awaited_once_with('cursor', '1.2.0')

    @pytest.mark.asyncio
    async def test_ready_after_handshake(self, mock_platform):
        """Test the first request after the handshake moves the server to ready."""
        mock_platform.describe_regions.return_value = {'regions': []}
        server = create_supabase_mcp_server(mock_platform, features=['aliyun'])
        context = MagicMock()
        context.session.client_params.clientInfo = Implementation(name='claude', version='0.9')

        with patch.object(server, 'get_context', return_value=context):
            await server.call_tool('describe_regions', {})

        assert server.state is ServerState.READY
        mock_platform.init.assert_awaited_once_with('claude', '0.9')

    @pytest.mark.asyncio
    async def test_stays_uninitialized_without_request(self, mock_platform):
        """Test calls outside a request do not initialize the platform."""
        server = create_supabase_mcp_server(mock_platform, features=['aliyun'])

        await server.list_tools()

        assert server.state is ServerState.UNINITIALIZED
        mock_platform.init.assert_not_called()
