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

"""Platform implementation backed by the Supabase Management API and Aliyun GPDB."""

import httpx
import os
from ..common.connection import (
    USER_AGENT,
    AliyunConnectionManager,
    create_management_api_client,
)
from ..config import PlatformOptions
from ..constants import DEFAULT_HTTP_TIMEOUT
from .aliyun import AliyunOperations
from .management_api import ManagementApiOperations
from .pg_query import PgQueryOperations
from loguru import logger
from typing import Optional


class SupabaseApiPlatform(ManagementApiOperations, AliyunOperations, PgQueryOperations):
    """Platform adapter combining both backends behind one interface.

    The adapter owns its HTTP clients and its per-region Aliyun clients; it
    caches no project data, so every read is a fresh upstream call.
    """

    def __init__(
        self,
        options: PlatformOptions,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the platform.

        Args:
            options: Resolved platform options
            transport: Optional HTTP transport override, used by tests
        """
        self._options = options
        self._management_api_url = options.api_url
        self._management_client = create_management_api_client(
            options.api_url, options.access_token, transport=transport
        )
        self._aliyun_connections = AliyunConnectionManager(options.aliyun_credential)
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                float(os.environ.get('SUPABASE_MCP_HTTP_TIMEOUT', DEFAULT_HTTP_TIMEOUT))
            ),
            transport=transport,
        )

    async def init(self, client_name: str, client_version: Optional[str] = None) -> None:
        """Record the MCP client identity in outbound Management API requests.

        Args:
            client_name: Name reported by the MCP client during initialization
            client_version: Version reported by the MCP client
        """
        user_agent = f'{USER_AGENT} ({client_name}/{client_version or "unknown"})'
        self._management_client.headers['User-Agent'] = user_agent
        logger.info(f'Platform initialized for client {client_name} {client_version or ""}'.strip())

    async def close(self) -> None:
        """Close HTTP clients and drop cached Aliyun clients."""
        await self._management_client.aclose()
        await self._http_client.aclose()
        self._aliyun_connections.close_connection()


def create_supabase_api_platform(
    options: PlatformOptions, transport: Optional[httpx.AsyncBaseTransport] = None
) -> SupabaseApiPlatform:
    """Create a platform implementation using the Supabase Management API and Aliyun GPDB."""
    return SupabaseApiPlatform(options, transport=transport)
