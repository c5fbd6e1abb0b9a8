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

"""Aliyun GPDB operations of the platform adapter."""

import asyncio
from ..common.connection import AliyunConnectionManager
from ..constants import DEFAULT_ALIYUN_REGION
from ..exceptions import UpstreamError, ValidationError
from .models import (
    AliyunProjectRequest,
    CreateAliyunProjectRequest,
    DescribeRdsVpcsRequest,
    DescribeRdsVSwitchesRequest,
    ListAliyunProjectsRequest,
    ModifySecurityIpsRequest,
    ResetPasswordRequest,
)
from alibabacloud_gpdb20160503 import models as gpdb_20160503_models
from loguru import logger
from pydantic import BaseModel
from typing import Any, Dict, Optional


def format_aliyun_error(error: Exception) -> str:
    """Extract the most useful message from an Aliyun SDK exception.

    Prefers the backend ``Message`` from the error data, then the SDK's own
    message, then the raw exception text. The backend error code is appended
    when it is not already part of the message.
    """
    data = getattr(error, 'data', None)
    message: Optional[str] = None
    if isinstance(data, dict):
        message = data.get('Message') or data.get('message')
    message = message or getattr(error, 'message', None) or str(error)

    code = getattr(error, 'code', None)
    if code and str(code) not in message:
        return f'{message} (code: {code})'
    return message


def _require(request: BaseModel, *fields: str) -> None:
    for field in fields:
        if not getattr(request, field, None):
            raise ValidationError(field)


class AliyunOperations:
    """Operations backed by the Aliyun GPDB RPC API.

    Expects the composing class to provide ``_aliyun_connections``.
    """

    _aliyun_connections: AliyunConnectionManager

    async def _call_aliyun(
        self, action: str, region_id: Optional[str], request: Any, failure: str
    ) -> Dict[str, Any]:
        client = self._aliyun_connections.get_connection(region_id)
        method = getattr(client, f'{action}_with_options')

        logger.info(f'Calling Aliyun {action} in region {region_id or DEFAULT_ALIYUN_REGION}')
        try:
            response = await asyncio.to_thread(
                method, request, self._aliyun_connections.runtime_options()
            )
        except Exception as error:
            detail = format_aliyun_error(error)
            logger.error(f'Failed to call Aliyun {action} API: {detail}')
            raise UpstreamError(f'{failure}: {detail}', code=getattr(error, 'code', None)) from error

        body = getattr(response, 'body', None)
        return body.to_map() if body is not None else {}

    async def list_aliyun_supabase_projects(
        self, request: ListAliyunProjectsRequest
    ) -> Dict[str, Any]:
        """List Supabase projects in a region."""
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.ListSupabaseProjectsRequest(
            region_id=region_id,
            next_token=request.next_token,
            max_results=request.max_results,
        )
        return await self._call_aliyun(
            'list_supabase_projects',
            region_id,
            sdk_request,
            'Failed to list Aliyun Supabase projects',
        )

    async def get_aliyun_supabase_project(self, request: AliyunProjectRequest) -> Dict[str, Any]:
        """Get the details of a Supabase project."""
        _require(request, 'project_id')
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.GetSupabaseProjectRequest(
            project_id=request.project_id, region_id=region_id
        )
        return await self._call_aliyun(
            'get_supabase_project',
            region_id,
            sdk_request,
            'Failed to get Aliyun Supabase project details',
        )

    async def get_aliyun_supabase_project_dashboard_account(
        self, request: AliyunProjectRequest
    ) -> Dict[str, Any]:
        """Get the dashboard account of a Supabase project."""
        _require(request, 'project_id')
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.GetSupabaseProjectDashboardAccountRequest(
            project_id=request.project_id, region_id=region_id
        )
        return await self._call_aliyun(
            'get_supabase_project_dashboard_account',
            region_id,
            sdk_request,
            'Failed to get Aliyun Supabase project dashboard account',
        )

    async def get_aliyun_supabase_project_api_keys(
        self, request: AliyunProjectRequest
    ) -> Dict[str, Any]:
        """Get the anon and service_role keys of a Supabase project.

        Raises:
            UpstreamError: If the backend returns no ``anon`` key
        """
        _require(request, 'project_id')
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.GetSupabaseProjectApiKeysRequest(
            project_id=request.project_id, region_id=region_id
        )
        body = await self._call_aliyun(
            'get_supabase_project_api_keys',
            region_id,
            sdk_request,
            'Failed to get Aliyun Supabase project API keys',
        )

        keys = {
            str(item.get('Name', '')).lower(): item.get('ApiKey')
            for item in body.get('ApiKeys') or []
            if isinstance(item, dict)
        }
        anon_key = keys.get('anon') or body.get('AnonKey')
        service_role_key = keys.get('service_role') or body.get('ServiceRoleKey')
        if not anon_key:
            raise UpstreamError(f'Anonymous key not found for project {request.project_id}')

        return {
            'projectId': request.project_id,
            'anonKey': anon_key,
            'serviceRoleKey': service_role_key,
            'requestId': body.get('RequestId'),
        }

    async def modify_aliyun_supabase_project_security_ips(
        self, request: ModifySecurityIpsRequest
    ) -> Dict[str, Any]:
        """Replace the IP whitelist of a Supabase project."""
        _require(request, 'project_id', 'security_ip_list')
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.ModifySupabaseProjectSecurityIpsRequest(
            project_id=request.project_id,
            region_id=region_id,
            security_iplist=','.join(request.security_ip_list),
        )
        return await self._call_aliyun(
            'modify_supabase_project_security_ips',
            region_id,
            sdk_request,
            'Failed to modify Aliyun Supabase project security IPs',
        )

    async def reset_aliyun_supabase_project_password(
        self, request: ResetPasswordRequest
    ) -> Dict[str, Any]:
        """Reset the database account password of a Supabase project."""
        _require(request, 'project_id', 'account_password')
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.ResetSupabaseProjectPasswordRequest(
            project_id=request.project_id,
            region_id=region_id,
            account_password=request.account_password,
        )
        return await self._call_aliyun(
            'reset_supabase_project_password',
            region_id,
            sdk_request,
            'Failed to reset Aliyun Supabase project password',
        )

    async def create_aliyun_supabase_project(
        self, request: CreateAliyunProjectRequest
    ) -> Dict[str, Any]:
        """Create a Supabase project."""
        _require(
            request,
            'project_name',
            'zone_id',
            'account_password',
            'security_ip_list',
            'vpc_id',
            'v_switch_id',
            'project_spec',
        )
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.CreateSupabaseProjectRequest(
            project_name=request.project_name,
            zone_id=request.zone_id,
            account_password=request.account_password,
            security_iplist=','.join(request.security_ip_list),
            vpc_id=request.vpc_id,
            v_switch_id=request.v_switch_id,
            project_spec=request.project_spec,
            region_id=region_id,
            storage_size=request.storage_size,
            disk_performance_level=request.disk_performance_level,
            client_token=request.client_token,
        )
        result = await self._call_aliyun(
            'create_supabase_project',
            region_id,
            sdk_request,
            'Failed to create Aliyun Supabase project',
        )
        logger.success(f'Created Aliyun Supabase project {request.project_name}')
        return result

    async def delete_aliyun_supabase_project(self, request: AliyunProjectRequest) -> Dict[str, Any]:
        """Delete a Supabase project."""
        _require(request, 'project_id')
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.DeleteSupabaseProjectRequest(
            project_id=request.project_id, region_id=region_id
        )
        result = await self._call_aliyun(
            'delete_supabase_project',
            region_id,
            sdk_request,
            'Failed to delete Aliyun Supabase project',
        )
        logger.success(f'Deleted Aliyun Supabase project {request.project_id}')
        return result

    async def describe_regions(self) -> Dict[str, Any]:
        """List regions and their zones."""
        body = await self._call_aliyun(
            'describe_regions',
            None,
            gpdb_20160503_models.DescribeRegionsRequest(),
            'Failed to describe Aliyun regions',
        )

        regions = []
        for region in (body.get('Regions') or {}).get('Region') or []:
            zones = (region.get('Zones') or {}).get('Zone') or []
            regions.append(
                {
                    'regionId': region.get('RegionId'),
                    'zones': [
                        {'zoneId': zone.get('ZoneId'), 'vpcEnabled': zone.get('VpcEnabled')}
                        for zone in zones
                    ],
                }
            )
        return {'regions': regions, 'requestId': body.get('RequestId')}

    async def describe_rds_vpcs(self, request: DescribeRdsVpcsRequest) -> Dict[str, Any]:
        """List VPCs available to Supabase projects."""
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.DescribeRdsVpcsRequest(
            region_id=region_id,
            zone_id=request.zone_id,
            resource_group_id=request.resource_group_id,
        )
        return await self._call_aliyun(
            'describe_rds_vpcs', region_id, sdk_request, 'Failed to describe Aliyun VPCs'
        )

    async def describe_rds_vswitches(self, request: DescribeRdsVSwitchesRequest) -> Dict[str, Any]:
        """List vSwitches available to Supabase projects."""
        region_id = request.region_id or DEFAULT_ALIYUN_REGION
        sdk_request = gpdb_20160503_models.DescribeRdsVSwitchsRequest(
            region_id=region_id,
            zone_id=request.zone_id,
            vpc_id=request.vpc_id,
            resource_group_id=request.resource_group_id,
        )
        return await self._call_aliyun(
            'describe_rds_vswitchs', region_id, sdk_request, 'Failed to describe Aliyun vSwitches'
        )
