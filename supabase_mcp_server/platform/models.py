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

"""Option and request models for platform operations.

The Aliyun request models double as tool input models, so their field names
are part of the tool wire contract.
"""

from ..common.utils import normalize_security_ip_list
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
from typing_extensions import Annotated


ProjectIdField = Annotated[str, Field(description='The project ID')]


class ProjectInput(BaseModel):
    """Input for tools addressing a project."""

    project_id: ProjectIdField


# Supabase Management API options


class ExecuteSqlOptions(BaseModel):
    """Options for running SQL through the Management API."""

    query: str
    read_only: bool = False


class ApplyMigrationOptions(BaseModel):
    """Options for applying a named migration."""

    name: str
    query: str


class CreateProjectOptions(BaseModel):
    """Options for creating a Supabase project."""

    name: str
    organization_id: str
    region: Optional[str] = None
    db_pass: Optional[str] = None


class CreateBranchOptions(BaseModel):
    """Options for creating a development branch."""

    name: str = 'develop'


class ResetBranchOptions(BaseModel):
    """Options for resetting a development branch."""

    migration_version: Optional[str] = None


class GetLogsOptions(BaseModel):
    """Options for querying the analytics logs endpoint."""

    sql: str
    iso_timestamp_start: Optional[str] = None
    iso_timestamp_end: Optional[str] = None


class EdgeFunctionFile(BaseModel):
    """A single source file of an Edge Function."""

    name: Annotated[str, Field(description='File path relative to the function root')]
    content: Annotated[str, Field(description='File contents')]


class DeployEdgeFunctionOptions(BaseModel):
    """Options for deploying an Edge Function."""

    name: str
    entrypoint_path: str = 'index.ts'
    import_map_path: Optional[str] = None
    files: List[EdgeFunctionFile]


class FeatureToggle(BaseModel):
    """An on/off storage feature flag."""

    enabled: bool


class StorageFeatures(BaseModel):
    """Storage features tracked by the storage config."""

    imageTransformation: FeatureToggle
    s3Protocol: FeatureToggle


class StorageConfig(BaseModel):
    """Storage configuration; updates always replace the whole tracked set."""

    fileSizeLimit: Annotated[int, Field(description='Maximum upload size in bytes')]
    features: StorageFeatures


# Aliyun GPDB request models


RegionId = Annotated[
    Optional[str], Field(description='Region ID, e.g. cn-hangzhou. Defaults to cn-hangzhou.')
]
ProjectId = Annotated[str, Field(description='The ID of the Supabase project.')]
SecurityIpList = Annotated[
    Union[List[str], str],
    Field(
        description='IP addresses or CIDR blocks allowed to access the project, '
        'as a list or a comma-separated string. At most 1000 entries.'
    ),
]


class ListAliyunProjectsRequest(BaseModel):
    """Request for listing Supabase projects on Aliyun."""

    region_id: RegionId = None
    next_token: Annotated[Optional[str], Field(description='Next token for pagination')] = None
    max_results: Annotated[
        Optional[int], Field(description='Maximum number of results to return', ge=1)
    ] = None


class AliyunProjectRequest(BaseModel):
    """Request addressing a single Supabase project on Aliyun."""

    project_id: ProjectId
    region_id: RegionId = None


class ModifySecurityIpsRequest(BaseModel):
    """Request for replacing the IP whitelist of a project."""

    project_id: ProjectId
    security_ip_list: SecurityIpList
    region_id: RegionId = None

    @field_validator('security_ip_list')
    @classmethod
    def _normalize_ips(cls, value: Union[List[str], str]) -> List[str]:
        return normalize_security_ip_list(value)


class ResetPasswordRequest(BaseModel):
    """Request for resetting the database account password of a project."""

    project_id: ProjectId
    account_password: Annotated[
        str,
        Field(
            description='The new password. 8-32 characters including at least three of: '
            'uppercase letters, lowercase letters, digits and special characters.'
        ),
    ]
    region_id: RegionId = None


class CreateAliyunProjectRequest(BaseModel):
    """Request for creating a Supabase project on Aliyun."""

    project_name: Annotated[
        str,
        Field(
            description='Project name, 1-128 characters of letters, digits, hyphens and '
            'underscores, starting with a letter or underscore.'
        ),
    ]
    zone_id: Annotated[str, Field(description='Zone ID, e.g. cn-hangzhou-i')]
    account_password: Annotated[str, Field(description='Initial database account password')]
    security_ip_list: SecurityIpList
    vpc_id: Annotated[str, Field(description='VPC ID')]
    v_switch_id: Annotated[str, Field(description='vSwitch ID in the given zone')]
    project_spec: Annotated[str, Field(description='Instance specification, e.g. 2C4G')]
    region_id: RegionId = None
    storage_size: Annotated[
        Optional[int], Field(description='Storage size in GB, default 1', ge=1)
    ] = None
    disk_performance_level: Annotated[
        Optional[str], Field(description='Cloud disk performance level: PL0 or PL1')
    ] = None
    client_token: Annotated[
        Optional[str], Field(description='Idempotency token for the request')
    ] = None

    @field_validator('security_ip_list')
    @classmethod
    def _normalize_ips(cls, value: Union[List[str], str]) -> List[str]:
        return normalize_security_ip_list(value)


class DescribeRdsVpcsRequest(BaseModel):
    """Request for listing VPCs usable by a project."""

    region_id: RegionId = None
    zone_id: Annotated[Optional[str], Field(description='Zone ID to filter by')] = None
    resource_group_id: Annotated[Optional[str], Field(description='Resource group ID')] = None


class DescribeRdsVSwitchesRequest(BaseModel):
    """Request for listing vSwitches usable by a project."""

    region_id: RegionId = None
    zone_id: Annotated[Optional[str], Field(description='Zone ID to filter by')] = None
    vpc_id: Annotated[Optional[str], Field(description='VPC ID to filter by')] = None
    resource_group_id: Annotated[Optional[str], Field(description='Resource group ID')] = None


# Postgres query endpoint requests


SupabaseUrl = Annotated[
    str,
    Field(description='Base URL of the Supabase project API, e.g. http://1.2.3.4:8000'),
]
ServiceRoleKey = Annotated[
    str, Field(description='The project service_role API key, sent in the apikey header')
]


class PgQueryRequest(BaseModel):
    """Request for running arbitrary SQL through a project's pg/query endpoint."""

    supabase_url: SupabaseUrl
    api_key: ServiceRoleKey
    query: Annotated[str, Field(description='The SQL query to execute')]


class ListTablesRequest(BaseModel):
    """Request for listing tables through a project's pg/query endpoint."""

    supabase_url: SupabaseUrl
    api_key: ServiceRoleKey
    schemas: Annotated[
        List[str], Field(description='Schemas to include. Defaults to ["public"].')
    ] = ['public']
