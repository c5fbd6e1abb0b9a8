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

"""Capability interface the tool registry depends on.

Uses a Protocol so a new backend only has to provide the same operations;
the registry never branches on the backend.
"""

from .models import (
    AliyunProjectRequest,
    ApplyMigrationOptions,
    CreateAliyunProjectRequest,
    CreateBranchOptions,
    CreateProjectOptions,
    DeployEdgeFunctionOptions,
    DescribeRdsVpcsRequest,
    DescribeRdsVSwitchesRequest,
    ExecuteSqlOptions,
    GetLogsOptions,
    ListAliyunProjectsRequest,
    ListTablesRequest,
    ModifySecurityIpsRequest,
    PgQueryRequest,
    ResetBranchOptions,
    ResetPasswordRequest,
    StorageConfig,
)
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class SupabasePlatform(Protocol):
    """Operations exposed to tool handlers."""

    async def init(self, client_name: str, client_version: Optional[str] = None) -> None: ...

    # Account
    async def list_organizations(self) -> List[Dict[str, Any]]: ...
    async def get_organization(self, organization_id: str) -> Dict[str, Any]: ...
    async def list_projects(self) -> List[Dict[str, Any]]: ...
    async def get_project(self, project_id: str) -> Dict[str, Any]: ...
    async def get_closest_region(self) -> str: ...
    async def create_project(self, options: CreateProjectOptions) -> Dict[str, Any]: ...
    async def pause_project(self, project_id: str) -> None: ...
    async def restore_project(self, project_id: str) -> None: ...

    # Database
    async def execute_sql(
        self, project_id: str, options: ExecuteSqlOptions
    ) -> List[Dict[str, Any]]: ...
    async def list_migrations(self, project_id: str) -> List[Dict[str, Any]]: ...
    async def apply_migration(self, project_id: str, options: ApplyMigrationOptions) -> None: ...

    # Edge Functions
    async def list_edge_functions(self, project_id: str) -> List[Dict[str, Any]]: ...
    async def get_edge_function(self, project_id: str, function_slug: str) -> Dict[str, Any]: ...
    async def deploy_edge_function(
        self, project_id: str, options: DeployEdgeFunctionOptions
    ) -> Dict[str, Any]: ...

    # Debugging
    async def get_logs(self, project_id: str, options: GetLogsOptions) -> Dict[str, Any]: ...
    async def get_security_advisors(self, project_id: str) -> Dict[str, Any]: ...
    async def get_performance_advisors(self, project_id: str) -> Dict[str, Any]: ...

    # Development
    async def get_project_url(self, project_id: str) -> str: ...
    async def get_anon_key(self, project_id: str) -> str: ...
    async def generate_typescript_types(self, project_id: str) -> Dict[str, Any]: ...

    # Branching
    async def list_branches(self, project_id: str) -> List[Dict[str, Any]]: ...
    async def create_branch(
        self, project_id: str, options: CreateBranchOptions
    ) -> Dict[str, Any]: ...
    async def delete_branch(self, branch_id: str) -> None: ...
    async def merge_branch(self, branch_id: str) -> None: ...
    async def reset_branch(self, branch_id: str, options: ResetBranchOptions) -> None: ...
    async def rebase_branch(self, branch_id: str) -> None: ...

    # Storage
    async def list_all_buckets(self, project_id: str) -> List[Dict[str, Any]]: ...
    async def get_storage_config(self, project_id: str) -> Dict[str, Any]: ...
    async def update_storage_config(self, project_id: str, config: StorageConfig) -> Any: ...

    # Aliyun
    async def list_aliyun_supabase_projects(
        self, request: ListAliyunProjectsRequest
    ) -> Dict[str, Any]: ...
    async def get_aliyun_supabase_project(self, request: AliyunProjectRequest) -> Dict[str, Any]: ...
    async def get_aliyun_supabase_project_dashboard_account(
        self, request: AliyunProjectRequest
    ) -> Dict[str, Any]: ...
    async def get_aliyun_supabase_project_api_keys(
        self, request: AliyunProjectRequest
    ) -> Dict[str, Any]: ...
    async def modify_aliyun_supabase_project_security_ips(
        self, request: ModifySecurityIpsRequest
    ) -> Dict[str, Any]: ...
    async def reset_aliyun_supabase_project_password(
        self, request: ResetPasswordRequest
    ) -> Dict[str, Any]: ...
    async def create_aliyun_supabase_project(
        self, request: CreateAliyunProjectRequest
    ) -> Dict[str, Any]: ...
    async def delete_aliyun_supabase_project(
        self, request: AliyunProjectRequest
    ) -> Dict[str, Any]: ...
    async def describe_regions(self) -> Dict[str, Any]: ...
    async def describe_rds_vpcs(self, request: DescribeRdsVpcsRequest) -> Dict[str, Any]: ...
    async def describe_rds_vswitches(
        self, request: DescribeRdsVSwitchesRequest
    ) -> Dict[str, Any]: ...

    # pg/query passthrough
    async def query_pg_endpoint(self, request: PgQueryRequest) -> Any: ...
    async def list_pg_tables(self, request: ListTablesRequest) -> Any: ...
