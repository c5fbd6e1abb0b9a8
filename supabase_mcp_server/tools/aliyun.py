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

"""Tools for Supabase projects hosted on Aliyun."""

from ..constants import FEATURE_ALIYUN
from ..platform.models import (
    AliyunProjectRequest,
    CreateAliyunProjectRequest,
    DescribeRdsVpcsRequest,
    DescribeRdsVSwitchesRequest,
    ListAliyunProjectsRequest,
    ListTablesRequest,
    ModifySecurityIpsRequest,
    PgQueryRequest,
    ResetPasswordRequest,
)
from ..registry import EmptyInput, tool


LIST_PROJECTS_TOOL_DESCRIPTION = 'Lists Supabase projects on Aliyun platform.'

GET_PROJECT_TOOL_DESCRIPTION = 'Gets details for a specific Supabase project on Aliyun platform.'

GET_DASHBOARD_ACCOUNT_TOOL_DESCRIPTION = 'Gets the Supabase project dashboard account information.'

GET_API_KEYS_TOOL_DESCRIPTION = """Gets the API keys of a Supabase project on Aliyun platform.

## Response structure
- `projectId`: The project the keys belong to
- `anonKey`: The anonymous key, safe for use in browsers with row level security enabled
- `serviceRoleKey`: The service role key, which bypasses row level security; keep it secret
"""

MODIFY_SECURITY_IPS_TOOL_DESCRIPTION = """Modifies the IP whitelist of a Supabase project on Aliyun platform.

<important_notes>
1. The given list replaces the current whitelist entirely
2. Entries may be IP addresses or CIDR blocks, e.g. 10.0.0.1 or 192.168.0.0/24
3. At most 1000 entries are allowed
</important_notes>
"""

RESET_PASSWORD_TOOL_DESCRIPTION = 'Resets the database account password of a Supabase project on Aliyun platform.'

CREATE_PROJECT_TOOL_DESCRIPTION = """Creates a new Supabase project on Aliyun platform.

<use_case>
Use this tool to provision a new Supabase project. Call describe_regions first to pick
a region and zone, then describe_rds_vpcs and describe_rds_vswitches to find a VPC and
a vSwitch in that zone.
</use_case>

<important_notes>
1. The vSwitch must belong to the given VPC and zone
2. Creation is asynchronous; poll get_supabase_project until the project is running
3. Projects created through this tool are billed to the Aliyun account
</important_notes>
"""

DELETE_PROJECT_TOOL_DESCRIPTION = """Deletes a Supabase project on Aliyun platform.

<important_notes>
1. This is a destructive operation that permanently deletes the project and its data
2. The operation cannot be undone
</important_notes>
"""

DESCRIBE_REGIONS_TOOL_DESCRIPTION = """Lists the regions and zones where Supabase projects can be created on Aliyun platform.

## Response structure
- `regions`: List of regions, each with a `regionId` and its `zones` (`zoneId`, `vpcEnabled`)
"""

DESCRIBE_VPCS_TOOL_DESCRIPTION = 'Lists the VPCs available for Supabase projects in a region.'

DESCRIBE_VSWITCHES_TOOL_DESCRIPTION = 'Lists the vSwitches available for Supabase projects in a region, optionally filtered by VPC and zone.'

EXECUTE_SQL_TOOL_DESCRIPTION = """Executes raw SQL against a Supabase project on Aliyun platform.

<use_case>
Use this tool for regular queries that don't change the schema. The query is sent to the
project's pg/query endpoint using its service_role key, and the raw JSON result is returned.
</use_case>
"""

LIST_TABLES_TOOL_DESCRIPTION = 'Lists all tables in one or more schemas of a Supabase project on Aliyun platform.'


@tool(
    feature=FEATURE_ALIYUN,
    description=LIST_PROJECTS_TOOL_DESCRIPTION,
    input_model=ListAliyunProjectsRequest,
)
async def list_aliyun_supabase_projects(platform, params, context):
    """List Supabase projects on Aliyun."""
    return await platform.list_aliyun_supabase_projects(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=GET_PROJECT_TOOL_DESCRIPTION,
    input_model=AliyunProjectRequest,
)
async def get_supabase_project(platform, params, context):
    """Get a Supabase project on Aliyun."""
    return await platform.get_aliyun_supabase_project(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=GET_DASHBOARD_ACCOUNT_TOOL_DESCRIPTION,
    input_model=AliyunProjectRequest,
)
async def get_supabase_project_dashboard_account(platform, params, context):
    """Get the dashboard account of a Supabase project on Aliyun."""
    return await platform.get_aliyun_supabase_project_dashboard_account(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=GET_API_KEYS_TOOL_DESCRIPTION,
    input_model=AliyunProjectRequest,
)
async def get_supabase_project_api_keys(platform, params, context):
    """Get the API keys of a Supabase project on Aliyun."""
    return await platform.get_aliyun_supabase_project_api_keys(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=MODIFY_SECURITY_IPS_TOOL_DESCRIPTION,
    input_model=ModifySecurityIpsRequest,
    mutating=True,
)
async def modify_supabase_project_security_ips(platform, params, context):
    """Replace the IP whitelist of a Supabase project on Aliyun."""
    return await platform.modify_aliyun_supabase_project_security_ips(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=RESET_PASSWORD_TOOL_DESCRIPTION,
    input_model=ResetPasswordRequest,
    mutating=True,
)
async def reset_supabase_project_password(platform, params, context):
    """Reset the account password of a Supabase project on Aliyun."""
    return await platform.reset_aliyun_supabase_project_password(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=CREATE_PROJECT_TOOL_DESCRIPTION,
    input_model=CreateAliyunProjectRequest,
    mutating=True,
)
async def create_supabase_project(platform, params, context):
    """Create a Supabase project on Aliyun."""
    return await platform.create_aliyun_supabase_project(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=DELETE_PROJECT_TOOL_DESCRIPTION,
    input_model=AliyunProjectRequest,
    mutating=True,
)
async def delete_supabase_project(platform, params, context):
    """Delete a Supabase project on Aliyun."""
    return await platform.delete_aliyun_supabase_project(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=DESCRIBE_REGIONS_TOOL_DESCRIPTION,
    input_model=EmptyInput,
)
async def describe_regions(platform, params, context):
    """List Aliyun regions and zones."""
    return await platform.describe_regions()


@tool(
    feature=FEATURE_ALIYUN,
    description=DESCRIBE_VPCS_TOOL_DESCRIPTION,
    input_model=DescribeRdsVpcsRequest,
)
async def describe_rds_vpcs(platform, params, context):
    """List VPCs in a region."""
    return await platform.describe_rds_vpcs(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=DESCRIBE_VSWITCHES_TOOL_DESCRIPTION,
    input_model=DescribeRdsVSwitchesRequest,
)
async def describe_rds_vswitches(platform, params, context):
    """List vSwitches in a region."""
    return await platform.describe_rds_vswitches(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=EXECUTE_SQL_TOOL_DESCRIPTION,
    input_model=PgQueryRequest,
    mutating=True,
)
async def execute_aliyun_supabase_sql(platform, params, context):
    """Run SQL through the project's pg/query endpoint."""
    return await platform.query_pg_endpoint(params)


@tool(
    feature=FEATURE_ALIYUN,
    description=LIST_TABLES_TOOL_DESCRIPTION,
    input_model=ListTablesRequest,
)
async def list_aliyun_supabase_tables(platform, params, context):
    """List tables through the project's pg/query endpoint."""
    return await platform.list_pg_tables(params)
