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

"""Credential and configuration resolution for the Supabase MCP Server."""

import os
from .constants import (
    DEFAULT_MANAGEMENT_API_URL,
    ENV_ALIYUN_ACCESS_TOKEN,
    ENV_SUPABASE_ACCESS_TOKEN,
    ERROR_ALIYUN_TOKEN_FORMAT,
    ERROR_ALIYUN_TOKEN_MISSING,
)
from .exceptions import ConfigError
from pydantic import BaseModel, Field
from typing import Mapping, Optional


class AliyunCredential(BaseModel):
    """Access key pair used to sign Aliyun RPC calls."""

    access_key_id: str
    access_key_secret: str = Field(repr=False)


class PlatformOptions(BaseModel):
    """Options used to construct the platform adapter."""

    access_token: Optional[str] = Field(default=None, repr=False)
    aliyun_access_token: Optional[str] = Field(default=None, repr=False)
    api_url: str = DEFAULT_MANAGEMENT_API_URL

    def aliyun_credential(self) -> AliyunCredential:
        """Parse the Aliyun access token on demand.

        Returns:
            The parsed access key pair

        Raises:
            ConfigError: If the token is absent or malformed
        """
        return parse_aliyun_credential(self.aliyun_access_token)


def parse_aliyun_credential(token: Optional[str]) -> AliyunCredential:
    """Split an ``AccessKeyId|AccessKeySecret`` string into a credential.

    Args:
        token: The raw token string

    Returns:
        AliyunCredential: The parsed access key pair

    Raises:
        ConfigError: If the token is absent, lacks exactly one separator, or has an empty half
    """
    if not token:
        raise ConfigError(ERROR_ALIYUN_TOKEN_MISSING)

    parts = token.split('|')
    if len(parts) != 2:
        raise ConfigError(ERROR_ALIYUN_TOKEN_FORMAT)

    access_key_id, access_key_secret = (part.strip() for part in parts)
    if not access_key_id or not access_key_secret:
        raise ConfigError(ERROR_ALIYUN_TOKEN_FORMAT)

    return AliyunCredential(access_key_id=access_key_id, access_key_secret=access_key_secret)


def resolve_platform_options(
    access_token: Optional[str] = None,
    api_url: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PlatformOptions:
    """Build platform options from CLI values with environment fallbacks.

    The Aliyun token is carried as-is; it is only parsed when an Aliyun
    operation runs.

    Args:
        access_token: Supabase personal access token given on the command line
        api_url: Management API base URL given on the command line
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        PlatformOptions: The resolved options
    """
    env = os.environ if environ is None else environ
    return PlatformOptions(
        access_token=access_token or env.get(ENV_SUPABASE_ACCESS_TOKEN) or None,
        aliyun_access_token=env.get(ENV_ALIYUN_ACCESS_TOKEN) or None,
        api_url=api_url or DEFAULT_MANAGEMENT_API_URL,
    )
