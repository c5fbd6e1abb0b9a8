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

"""Connection management for the upstream APIs used by the Supabase MCP Server."""

import httpx
import os
from ..config import AliyunCredential
from ..constants import (
    ALIYUN_GPDB_ENDPOINT,
    DEFAULT_ALIYUN_CONNECT_TIMEOUT,
    DEFAULT_ALIYUN_READ_TIMEOUT,
    DEFAULT_ALIYUN_REGION,
    DEFAULT_HTTP_TIMEOUT,
    MCP_SERVER_VERSION,
)
from alibabacloud_gpdb20160503.client import Client as Gpdb20160503Client
from alibabacloud_tea_openapi import models as open_api_models
from alibabacloud_tea_util import models as util_models
from loguru import logger
from typing import Callable, Dict, Optional


USER_AGENT = f'supabase-mcp/{MCP_SERVER_VERSION}'


def create_management_api_client(
    api_url: str,
    access_token: Optional[str],
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an HTTP client for the Supabase Management API.

    Args:
        api_url: Base URL of the Management API
        access_token: Personal access token sent as a bearer token
        headers: Extra headers, e.g. an enriched User-Agent
        transport: Optional transport override, used by tests

    Returns:
        httpx.AsyncClient: A client bound to the Management API
    """
    timeout = float(os.environ.get('SUPABASE_MCP_HTTP_TIMEOUT', DEFAULT_HTTP_TIMEOUT))

    client_headers = {'User-Agent': USER_AGENT, 'Accept': 'application/json'}
    if access_token:
        client_headers['Authorization'] = f'Bearer {access_token}'
    client_headers.update(headers or {})

    return httpx.AsyncClient(
        base_url=api_url,
        headers=client_headers,
        timeout=httpx.Timeout(timeout),
        transport=transport,
    )


class AliyunConnectionManager:
    """Manages region-scoped Aliyun GPDB clients.

    One client is kept per region for the lifetime of the manager. Clients
    are built on the event loop thread without awaiting, so concurrent tool
    calls for the same region converge on a single client.
    """

    def __init__(self, credential_provider: Callable[[], AliyunCredential]):
        """Initialize the connection manager.

        Args:
            credential_provider: Callable returning the parsed credential; invoked
                on first client construction so a missing token only fails Aliyun calls
        """
        self._credential_provider = credential_provider
        self._clients: Dict[str, Gpdb20160503Client] = {}

        self.connect_timeout = int(
            os.environ.get('ALIYUN_CONNECT_TIMEOUT', DEFAULT_ALIYUN_CONNECT_TIMEOUT)
        )
        self.read_timeout = int(os.environ.get('ALIYUN_READ_TIMEOUT', DEFAULT_ALIYUN_READ_TIMEOUT))
        self.max_attempts = int(os.environ.get('ALIYUN_MAX_RETRIES', '3'))

    def get_connection(self, region_id: Optional[str] = None) -> Gpdb20160503Client:
        """Get or create the GPDB client for a region.

        Args:
            region_id: Aliyun region, defaults to cn-hangzhou

        Returns:
            Gpdb20160503Client: The region-scoped client

        Raises:
            ConfigError: If the Aliyun credential is missing or malformed
        """
        region = region_id or DEFAULT_ALIYUN_REGION
        client = self._clients.get(region)
        if client is None:
            credential = self._credential_provider()
            config = open_api_models.Config(
                access_key_id=credential.access_key_id,
                access_key_secret=credential.access_key_secret,
                region_id=region,
                connect_timeout=self.connect_timeout,
                read_timeout=self.read_timeout,
                # identify requests coming from the MCP server
                user_agent=USER_AGENT,
            )
            config.endpoint = ALIYUN_GPDB_ENDPOINT
            logger.debug(f'Creating Aliyun GPDB client for region {region}')
            client = self._clients.setdefault(region, Gpdb20160503Client(config))

        return client

    def runtime_options(self) -> util_models.RuntimeOptions:
        """Build per-call runtime options carrying bounded timeouts and retries.

        Returns:
            util_models.RuntimeOptions: Runtime options for an RPC call
        """
        return util_models.RuntimeOptions(
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            autoretry=True,
            max_attempts=self.max_attempts,
        )

    def close_connection(self) -> None:
        """Drop every cached client."""
        self._clients.clear()
