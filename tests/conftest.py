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

"""Global pytest fixtures for Supabase MCP Server tests."""

import httpx
import os
import pytest
from supabase_mcp_server.common.connection import AliyunConnectionManager
from supabase_mcp_server.config import PlatformOptions
from supabase_mcp_server.platform import SupabaseApiPlatform
from unittest.mock import AsyncMock, MagicMock, patch


@pytest.fixture(scope='session', autouse=True)
def tests_setup_and_teardown():
    """Mock environment variables for testing."""
    # Will be executed before the first test
    old_environ = dict(os.environ)
    os.environ.update(
        {
            'SUPABASE_ACCESS_TOKEN': 'sbp_mock_token',  # pragma: allowlist secret
            'ALIYUN_ACCESS_TOKEN': 'mock_key_id|mock_key_secret',  # pragma: allowlist secret
        }
    )

    yield
    # Will be executed after the last test
    os.environ.clear()
    os.environ.update(old_environ)


@pytest.fixture
def platform_options():
    """Platform options with mock credentials."""
    return PlatformOptions(
        access_token='sbp_mock_token',  # pragma: allowlist secret
        aliyun_access_token='mock_key_id|mock_key_secret',  # pragma: allowlist secret
    )


@pytest.fixture
def make_platform(platform_options):
    """Factory building a platform whose HTTP traffic goes to a handler function.

    The handler receives every outbound ``httpx.Request`` and returns an
    ``httpx.Response``.
    """

    def factory(handler, **overrides):
        options = platform_options.model_copy(update=overrides)
        return SupabaseApiPlatform(options, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def mock_gpdb_client():
    """Fixture providing a mock Aliyun GPDB client.

    Returns a mock client that's automatically patched into the AliyunConnectionManager.
    """
    mock_client = MagicMock()

    with patch.object(AliyunConnectionManager, 'get_connection', return_value=mock_client) as _:
        yield mock_client


@pytest.fixture
def mock_asyncio_thread():
    """Mock asyncio.to_thread so SDK calls run inline."""

    async def async_return(func, *args, **kwargs):
        return func(*args, **kwargs)

    with patch('asyncio.to_thread', side_effect=async_return) as mock:
        yield mock


@pytest.fixture
def mock_platform():
    """Mock platform adapter whose operations are all awaitable."""
    return AsyncMock()
