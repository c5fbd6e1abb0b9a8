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

"""Supabase Management API operations of the platform adapter."""

import asyncio
import httpx
import json
from ..common.utils import generate_password, get_project_domain
from ..constants import (
    COUNTRY_LOOKUP_URL,
    DEFAULT_PROJECT_REGION,
    GENERATED_PASSWORD_LENGTH,
)
from ..exceptions import UpstreamError
from .edge_function import (
    get_deployment_id,
    get_path_prefix,
    parse_multipart_files,
    relative_to_prefix,
)
from .models import (
    ApplyMigrationOptions,
    CreateBranchOptions,
    CreateProjectOptions,
    DeployEdgeFunctionOptions,
    ExecuteSqlOptions,
    GetLogsOptions,
    ResetBranchOptions,
    StorageConfig,
)
from .regions import COUNTRY_COORDINATES, get_closest_aws_region, parse_country_code
from loguru import logger
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse


def assert_success(response: httpx.Response, context: str) -> None:
    """Raise an UpstreamError carrying the endpoint context for any non-2xx response.

    Args:
        response: The Management API response
        context: Failure context of the endpoint, e.g. "Failed to fetch project"

    Raises:
        UpstreamError: If the response status is not 2xx
    """
    if response.is_success:
        return

    detail = None
    try:
        body = response.json()
        if isinstance(body, dict):
            detail = body.get('message') or body.get('error') or body.get('msg')
    except ValueError:
        detail = response.text or None

    message = f'{context}: {detail}' if detail else f'{context} (HTTP {response.status_code})'
    raise UpstreamError(message, status_code=response.status_code)


class ManagementApiOperations:
    """Operations backed by the Supabase Management REST API.

    Each operation maps onto exactly one endpoint. Expects the composing
    class to provide ``_management_client``, ``_management_api_url`` and an
    unauthenticated ``_http_client``.
    """

    _management_client: httpx.AsyncClient
    _management_api_url: str
    _http_client: httpx.AsyncClient

    async def _send(self, method: str, path: str, context: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._management_client.request(method, path, **kwargs)
        except httpx.HTTPError as error:
            raise UpstreamError(f'{context}: {error}') from error
        assert_success(response, context)
        return response

    # Organizations and projects

    async def list_organizations(self) -> List[Dict[str, Any]]:
        """List the organizations the access token belongs to."""
        response = await self._send('GET', '/v1/organizations', 'Failed to fetch organizations')
        return response.json()

    async def get_organization(self, organization_id: str) -> Dict[str, Any]:
        """Get an organization by slug."""
        response = await self._send(
            'GET', f'/v1/organizations/{organization_id}', 'Failed to fetch organization'
        )
        return response.json()

    async def list_projects(self) -> List[Dict[str, Any]]:
        """List every project visible to the access token."""
        response = await self._send('GET', '/v1/projects', 'Failed to fetch projects')
        return response.json()

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        """Get a project by ref."""
        response = await self._send('GET', f'/v1/projects/{project_id}', 'Failed to fetch project')
        return response.json()

    async def get_closest_region(self) -> str:
        """Pick the AWS region closest to the caller's country.

        The country comes from the Cloudflare trace endpoint. Any failure to
        resolve it falls back to us-east-1.

        Returns:
            str: An AWS region code
        """
        try:
            response = await self._http_client.get(COUNTRY_LOOKUP_URL)
            response.raise_for_status()
        except httpx.HTTPError as error:
            logger.warning(f'Country lookup failed, using {DEFAULT_PROJECT_REGION}: {error}')
            return DEFAULT_PROJECT_REGION

        country = parse_country_code(response.text)
        coordinates = COUNTRY_COORDINATES.get(country) if country else None
        if coordinates is None:
            logger.warning(f'Unknown country {country}, using {DEFAULT_PROJECT_REGION}')
            return DEFAULT_PROJECT_REGION
        return get_closest_aws_region(coordinates)

    async def create_project(self, options: CreateProjectOptions) -> Dict[str, Any]:
        """Create a project, defaulting to the closest region and a generated password."""
        body = {
            'name': options.name,
            'region': options.region or await self.get_closest_region(),
            'organization_id': options.organization_id,
            'db_pass': options.db_pass or generate_password(GENERATED_PASSWORD_LENGTH),
        }
        logger.info(f'Creating project {options.name} in region {body["region"]}')
        response = await self._send('POST', '/v1/projects', 'Failed to create project', json=body)
        return response.json()

    async def pause_project(self, project_id: str) -> None:
        """Pause a project."""
        await self._send('POST', f'/v1/projects/{project_id}/pause', 'Failed to pause project')

    async def restore_project(self, project_id: str) -> None:
        """Restore a paused project."""
        await self._send('POST', f'/v1/projects/{project_id}/restore', 'Failed to restore project')

    # Database

    async def execute_sql(self, project_id: str, options: ExecuteSqlOptions) -> List[Dict[str, Any]]:
        """Run SQL against the project database and return the result rows."""
        response = await self._send(
            'POST',
            f'/v1/projects/{project_id}/database/query',
            'Failed to execute SQL query',
            json={'query': options.query, 'read_only': options.read_only},
        )
        return response.json()

    async def list_migrations(self, project_id: str) -> List[Dict[str, Any]]:
        """List applied migrations."""
        response = await self._send(
            'GET', f'/v1/projects/{project_id}/database/migrations', 'Failed to fetch migrations'
        )
        return response.json()

    async def apply_migration(self, project_id: str, options: ApplyMigrationOptions) -> None:
        """Apply a migration.

        The migration result is not returned, so query output can never be
        echoed back into the conversation; failures still raise.
        """
        await self._send(
            'POST',
            f'/v1/projects/{project_id}/database/migrations',
            'Failed to apply migration',
            json={'name': options.name, 'query': options.query},
        )

    # Edge Functions

    async def list_edge_functions(self, project_id: str) -> List[Dict[str, Any]]:
        """List Edge Functions together with their files."""
        response = await self._send(
            'GET', f'/v1/projects/{project_id}/functions', 'Failed to fetch Edge Functions'
        )
        return list(
            await asyncio.gather(
                *(
                    self.get_edge_function(project_id, listed['slug'])
                    for listed in response.json()
                )
            )
        )

    async def get_edge_function(self, project_id: str, function_slug: str) -> Dict[str, Any]:
        """Get an Edge Function with its files, paths relative to the deployment root."""
        function_response = await self._send(
            'GET',
            f'/v1/projects/{project_id}/functions/{function_slug}',
            'Failed to fetch Edge Function',
        )
        edge_function = function_response.json()

        deployment_id = get_deployment_id(
            project_id, edge_function['id'], edge_function['version']
        )
        path_prefix = get_path_prefix(deployment_id)

        for key in ('entrypoint_path', 'import_map_path'):
            if edge_function.get(key):
                edge_function[key] = relative_to_prefix(edge_function[key], path_prefix)
            else:
                edge_function[key] = None

        body_response = await self._send(
            'GET',
            f'/v1/projects/{project_id}/functions/{function_slug}/body',
            'Failed to fetch Edge Function files',
            headers={'Accept': 'multipart/form-data'},
        )
        if not body_response.content:
            raise UpstreamError('No data received from Edge Function body')

        files = parse_multipart_files(
            body_response.headers.get('content-type'), body_response.content
        )
        edge_function['files'] = [
            {'name': relative_to_prefix(file['name'], path_prefix), 'content': file['content']}
            for file in files
        ]
        return edge_function

    async def deploy_edge_function(
        self, project_id: str, options: DeployEdgeFunctionOptions
    ) -> Dict[str, Any]:
        """Deploy an Edge Function as a multipart upload of metadata plus files."""
        import_map_path = options.import_map_path
        if import_map_path is None:
            existing: Optional[Dict[str, Any]] = None
            try:
                existing = await self.get_edge_function(project_id, options.name)
            except UpstreamError:
                logger.debug(f'No existing Edge Function {options.name}, deploying a new one')
            import_map_file = next(
                (f for f in options.files if f.name in ('deno.json', 'import_map.json')), None
            )
            import_map_path = (existing or {}).get('import_map_path') or (
                import_map_file.name if import_map_file else None
            )

        metadata = {
            'name': options.name,
            'entrypoint_path': options.entrypoint_path,
            'import_map_path': import_map_path,
        }
        multipart = [('metadata', ('blob', json.dumps(metadata), 'application/json'))]
        multipart.extend(
            ('file', (f.name, f.content, 'application/typescript')) for f in options.files
        )

        logger.info(f'Deploying Edge Function {options.name} to project {project_id}')
        response = await self._send(
            'POST',
            f'/v1/projects/{project_id}/functions/deploy',
            'Failed to deploy Edge Function',
            params={'slug': options.name},
            files=multipart,
        )
        return response.json()

    # Debugging

    async def get_logs(self, project_id: str, options: GetLogsOptions) -> Dict[str, Any]:
        """Run a logs query against the analytics endpoint."""
        params = {'sql': options.sql}
        if options.iso_timestamp_start:
            params['iso_timestamp_start'] = options.iso_timestamp_start
        if options.iso_timestamp_end:
            params['iso_timestamp_end'] = options.iso_timestamp_end
        response = await self._send(
            'GET',
            f'/v1/projects/{project_id}/analytics/endpoints/logs.all',
            'Failed to fetch logs',
            params=params,
        )
        return response.json()

    async def get_security_advisors(self, project_id: str) -> Dict[str, Any]:
        """Get security advisor lints."""
        response = await self._send(
            'GET',
            f'/v1/projects/{project_id}/advisors/security',
            'Failed to fetch security advisors',
        )
        return response.json()

    async def get_performance_advisors(self, project_id: str) -> Dict[str, Any]:
        """Get performance advisor lints."""
        response = await self._send(
            'GET',
            f'/v1/projects/{project_id}/advisors/performance',
            'Failed to fetch performance advisors',
        )
        return response.json()

    # Development

    async def get_project_url(self, project_id: str) -> str:
        """Compute the API URL of a project from the Management API host."""
        hostname = urlparse(self._management_api_url).hostname or ''
        return f'https://{project_id}.{get_project_domain(hostname)}'

    async def get_anon_key(self, project_id: str) -> str:
        """Get the anonymous API key of a project.

        Raises:
            UpstreamError: If the project has no ``anon`` key
        """
        response = await self._send(
            'GET',
            f'/v1/projects/{project_id}/api-keys',
            'Failed to fetch API keys',
            params={'reveal': 'false'},
        )
        anon_key = next((key for key in response.json() or [] if key.get('name') == 'anon'), None)
        if not anon_key or not anon_key.get('api_key'):
            raise UpstreamError('Anonymous key not found')
        return anon_key['api_key']

    async def generate_typescript_types(self, project_id: str) -> Dict[str, Any]:
        """Generate TypeScript types for the project schema."""
        response = await self._send(
            'GET',
            f'/v1/projects/{project_id}/types/typescript',
            'Failed to fetch TypeScript types',
        )
        return response.json()

    # Branching

    async def list_branches(self, project_id: str) -> List[Dict[str, Any]]:
        """List development branches; empty when branching is disabled."""
        try:
            response = await self._management_client.get(f'/v1/projects/{project_id}/branches')
        except httpx.HTTPError as error:
            raise UpstreamError(f'Failed to list branches: {error}') from error

        # branching disabled
        if response.status_code == 422:
            return []
        assert_success(response, 'Failed to list branches')
        return response.json()

    async def create_branch(self, project_id: str, options: CreateBranchOptions) -> Dict[str, Any]:
        """Create a development branch."""
        response = await self._send(
            'POST',
            f'/v1/projects/{project_id}/branches',
            'Failed to create branch',
            json={'branch_name': options.name},
        )
        return response.json()

    async def delete_branch(self, branch_id: str) -> None:
        """Delete a development branch."""
        await self._send('DELETE', f'/v1/branches/{branch_id}', 'Failed to delete branch')

    async def merge_branch(self, branch_id: str) -> None:
        """Merge a branch into production."""
        await self._send(
            'POST', f'/v1/branches/{branch_id}/merge', 'Failed to merge branch', json={}
        )

    async def reset_branch(self, branch_id: str, options: ResetBranchOptions) -> None:
        """Reset a branch, optionally to a migration version."""
        await self._send(
            'POST',
            f'/v1/branches/{branch_id}/reset',
            'Failed to reset branch',
            json={'migration_version': options.migration_version},
        )

    async def rebase_branch(self, branch_id: str) -> None:
        """Rebase a branch on production migrations."""
        await self._send('POST', f'/v1/branches/{branch_id}/push', 'Failed to rebase branch', json={})

    # Storage

    async def list_all_buckets(self, project_id: str) -> List[Dict[str, Any]]:
        """List storage buckets."""
        response = await self._send(
            'GET', f'/v1/projects/{project_id}/storage/buckets', 'Failed to list storage buckets'
        )
        return response.json()

    async def get_storage_config(self, project_id: str) -> Dict[str, Any]:
        """Get the storage configuration."""
        response = await self._send(
            'GET', f'/v1/projects/{project_id}/config/storage', 'Failed to get storage config'
        )
        return response.json()

    async def update_storage_config(self, project_id: str, config: StorageConfig) -> Any:
        """Replace the tracked storage configuration fields."""
        body = {
            'fileSizeLimit': config.fileSizeLimit,
            'features': {
                'imageTransformation': {
                    'enabled': config.features.imageTransformation.enabled,
                },
                's3Protocol': {
                    'enabled': config.features.s3Protocol.enabled,
                },
            },
        }
        response = await self._send(
            'PATCH',
            f'/v1/projects/{project_id}/config/storage',
            'Failed to update storage config',
            json=body,
        )
        return response.json() if response.content else None
