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

"""Supabase MCP Server implementation."""

import argparse
import os
import sys
from .common.server import SERVER_VERSION, create_supabase_mcp_server
from .config import resolve_platform_options
from .constants import (
    ENV_LOG_LEVEL,
    ERROR_ALIYUN_TOKEN_MISSING,
    ERROR_SUPABASE_TOKEN_MISSING,
    FEATURE_ALIYUN,
)
from .platform import create_supabase_api_platform
from .tools import parse_features, resolve_features
from loguru import logger


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='supabase-mcp-server',
        description='An MCP server for managing Supabase projects and Supabase on Aliyun',
    )
    parser.add_argument(
        '--access-token',
        type=str,
        help='Supabase personal access token, defaults to SUPABASE_ACCESS_TOKEN',
    )
    parser.add_argument(
        '--project-ref',
        type=str,
        help='Scopes the server to a single project; account tools are disabled',
    )
    parser.add_argument(
        '--read-only',
        action='store_true',
        default=False,
        help='Prevents the MCP server from performing mutating operations',
    )
    parser.add_argument('--api-url', type=str, help='Supabase Management API base URL')
    parser.add_argument(
        '--features',
        type=str,
        help='Comma-separated feature groups to enable, e.g. database,aliyun',
    )
    parser.add_argument('--version', action='store_true', help='Print the version and exit')
    return parser


def main():
    """Run the MCP server with CLI argument support."""
    args = build_parser().parse_args()

    if args.version:
        print(SERVER_VERSION)
        sys.exit(0)

    logger.remove()
    logger.add(sys.stderr, level=os.environ.get(ENV_LOG_LEVEL, 'INFO'))

    features = parse_features(args.features)
    options = resolve_platform_options(access_token=args.access_token, api_url=args.api_url)

    # the Supabase token is optional only for an Aliyun-only server
    enabled = resolve_features(features, args.project_ref)
    aliyun_only = enabled == {FEATURE_ALIYUN}
    if not options.access_token and not aliyun_only:
        logger.error(ERROR_SUPABASE_TOKEN_MISSING)
        sys.exit(1)

    if FEATURE_ALIYUN in enabled and not options.aliyun_access_token:
        logger.error(ERROR_ALIYUN_TOKEN_MISSING)
        sys.exit(1)

    platform = create_supabase_api_platform(options)
    server = create_supabase_mcp_server(
        platform,
        features=features,
        read_only=args.read_only,
        project_ref=args.project_ref,
    )

    logger.info(f'Starting Supabase MCP Server v{SERVER_VERSION}')
    logger.info(f'Read-only mode: {args.read_only}')
    if args.project_ref:
        logger.info(f'Project ref: {args.project_ref}')

    server.run()


if __name__ == '__main__':
    main()
