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

"""Constants for the Supabase MCP Server."""

from . import __version__


# Version
MCP_SERVER_VERSION = __version__

# Error Messages
ERROR_PREFIX = 'Error: '
ERROR_READONLY_MODE = (
    "Operation '{}' requires write access. The server is currently in read-only mode."
)
ERROR_UNKNOWN_TOOL = "Unknown tool: '{}'"
ERROR_INVALID_ARGUMENTS = "Invalid arguments for tool '{}': {}"
ERROR_MISSING_PARAM = 'Missing required parameter: {}'
ERROR_UNEXPECTED = 'Unexpected error: {}'
ERROR_ALIYUN_TOKEN_MISSING = (
    'ALIYUN_ACCESS_TOKEN environment variable is not set or provided.'
)
ERROR_ALIYUN_TOKEN_FORMAT = (
    'Invalid Aliyun Access Token format in ALIYUN_ACCESS_TOKEN. '
    'Expected "AccessKeyId|AccessKeySecret".'
)
ERROR_SUPABASE_TOKEN_MISSING = (
    'Please provide a personal access token (PAT) with the --access-token flag '
    'or set the SUPABASE_ACCESS_TOKEN environment variable'
)

# Environment variables
ENV_SUPABASE_ACCESS_TOKEN = 'SUPABASE_ACCESS_TOKEN'
ENV_ALIYUN_ACCESS_TOKEN = 'ALIYUN_ACCESS_TOKEN'
ENV_LOG_LEVEL = 'FASTMCP_LOG_LEVEL'

# Supabase Management API
DEFAULT_MANAGEMENT_API_URL = 'https://api.supabase.com'
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_PROJECT_REGION = 'us-east-1'
COUNTRY_LOOKUP_URL = 'https://www.cloudflare.com/cdn-cgi/trace'
PROJECT_DOMAINS = {
    'api.supabase.com': 'supabase.co',
    'api.supabase.green': 'supabase.green',
}
FALLBACK_PROJECT_DOMAIN = 'supabase.red'
GENERATED_PASSWORD_LENGTH = 16

# Aliyun GPDB API
ALIYUN_GPDB_ENDPOINT = 'gpdb.aliyuncs.com'
DEFAULT_ALIYUN_REGION = 'cn-hangzhou'
DEFAULT_ALIYUN_CONNECT_TIMEOUT = 5000
DEFAULT_ALIYUN_READ_TIMEOUT = 30000

# Postgres query endpoint
PG_QUERY_PATH = '/pg/query'

# Feature groups
FEATURE_ACCOUNT = 'account'
FEATURE_DATABASE = 'database'
FEATURE_DEBUGGING = 'debugging'
FEATURE_DEVELOPMENT = 'development'
FEATURE_FUNCTIONS = 'functions'
FEATURE_BRANCHING = 'branching'
FEATURE_STORAGE = 'storage'
FEATURE_ALIYUN = 'aliyun'

DEFAULT_FEATURES = [
    FEATURE_ACCOUNT,
    FEATURE_DATABASE,
    FEATURE_DEBUGGING,
    FEATURE_DEVELOPMENT,
    FEATURE_FUNCTIONS,
    FEATURE_BRANCHING,
]
