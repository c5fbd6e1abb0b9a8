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

"""Tests for the Supabase Management API operations."""

import httpx
import json
import pytest
from supabase_mcp_server.exceptions import UpstreamError
from supabase_mcp_server.platform.models import (
    CreateProjectOptions,
    DeployEdgeFunctionOptions,
    EdgeFunctionFile,
    ExecuteSqlOptions,
    FeatureToggle,
    StorageConfig,
    StorageFeatures,
)


MULTIPART_BOUNDARY = 'mcp-boundary'


def multipart_body(files):
    """Encode files as a multipart/form-data body."""
    chunks = []
    for name, content in files:
        chunks.append(
            f'--{MULTIPART_BOUNDARY}\r\n'
            f'Content-Disposition: form-data; name="file"; filename="{name}"\r\n'
            'Content-Type: application/typescript\r\n'
            '\r\n'
            f'{content}\r\n'
        )
    chunks.append(f'--{MULTIPART_BOUNDARY}--\r\n')
    return ''.join(chunks).encode()


class TestProjects:
    """Test cases for organization and project operations."""

    @pytest.mark.asyncio
    async def test_get_project(self, make_platform):
        """Test get_project sends bearer auth and returns the body."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={'id': 'abc', 'name': 'demo'})

        platform = make_platform(handler)
        result = await platform.get_project('abc')

        assert result == {'id': 'abc', 'name': 'demo'}
        assert requests[0].method == 'GET'
        assert requests[0].url.path == '/v1/projects/abc'
        assert requests[0].headers['Authorization'] == 'Bearer sbp_mock_token'

    @pytest.mark.asyncio
    async def test_get_project_not_found(self, make_platform):
        """Test a non-2xx response carries the endpoint context and backend message."""

        def handler(request):
            return httpx.Response(404, json={'message': 'Project not found'})

        platform = make_platform(handler)

        with pytest.raises(UpstreamError, match='Failed to fetch project: Project not found') as exc:
            await platform.get_project('missing')
        assert exc.value.status_code == 404

    @pytest.mark.asyncio
    async def test_error_without_message(self, make_platform):
        """Test a bare error response falls back to the status code."""

        def handler(request):
            return httpx.Response(500, json=[])

        platform = make_platform(handler)

        with pytest.raises(UpstreamError, match=r'Failed to fetch projects \(HTTP 500\)'):
            await platform.list_projects()

    @pytest.mark.asyncio
    async def test_transport_error(self, make_platform):
        """Test transport failures become upstream errors."""

        def handler(request):
            raise httpx.ConnectError('connection refused')

        platform = make_platform(handler)

        with pytest.raises(UpstreamError, match='Failed to fetch organizations'):
            await platform.list_organizations()

    @pytest.mark.asyncio
    async def test_create_project_closest_region(self, make_platform):
        """Test create_project picks the region closest to the caller and generates a password."""
        bodies = []

        def handler(request):
            if request.url.host == 'www.cloudflare.com':
                assert 'Authorization' not in request.headers
                return httpx.Response(200, text='fl=123\nip=203.0.113.9\nloc=JP\ncolo=NRT\n')
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={'id': 'new-ref'})

        platform = make_platform(handler)
        result = await platform.create_project(
            CreateProjectOptions(name='demo', organization_id='org-1')
        )

        assert result == {'id': 'new-ref'}
        assert bodies[0]['region'] == 'ap-northeast-1'
        assert bodies[0]['organization_id'] == 'org-1'
        assert len(bodies[0]['db_pass']) == 16

    @pytest.mark.asyncio
    async def test_create_project_region_lookup_fails(self, make_platform):
        """Test create_project falls back to us-east-1 when the country lookup fails."""
        bodies = []

        def handler(request):
            if request.url.host == 'www.cloudflare.com':
                raise httpx.ConnectError('unreachable', request=request)
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={'id': 'new-ref'})

        platform = make_platform(handler)
        await platform.create_project(CreateProjectOptions(name='demo', organization_id='org-1'))

        assert bodies[0]['region'] == 'us-east-1'

    @pytest.mark.asyncio
    async def test_create_project_unknown_country(self, make_platform):
        """Test an unrecognised country falls back to us-east-1."""
        bodies = []

        def handler(request):
            if request.url.host == 'www.cloudflare.com':
                return httpx.Response(200, text='loc=XX\n')
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={'id': 'new-ref'})

        platform = make_platform(handler)
        await platform.create_project(CreateProjectOptions(name='demo', organization_id='org-1'))

        assert bodies[0]['region'] == 'us-east-1'

    @pytest.mark.asyncio
    async def test_create_project_explicit_region(self, make_platform):
        """Test an explicit region skips the country lookup."""
        hosts = []

        def handler(request):
            hosts.append(request.url.host)
            return httpx.Response(201, json={'id': 'new-ref'})

        platform = make_platform(handler)
        await platform.create_project(
            CreateProjectOptions(name='demo', organization_id='org-1', region='eu-west-2')
        )

        assert hosts == ['api.supabase.com']

    @pytest.mark.asyncio
    async def test_pause_and_restore(self, make_platform):
        """Test pause and restore hit their endpoints."""
        paths = []

        def handler(request):
            paths.append((request.method, request.url.path))
            return httpx.Response(200)

        platform = make_platform(handler)
        await platform.pause_project('abc')
        await platform.restore_project('abc')

        assert paths == [
            ('POST', '/v1/projects/abc/pause'),
            ('POST', '/v1/projects/abc/restore'),
        ]


class TestDatabase:
    """Test cases for database operations."""

    @pytest.mark.asyncio
    async def test_execute_sql(self, make_platform):
        """Test the query and read-only flag are sent verbatim."""
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json=[{'name': "O'Brien"}])

        platform = make_platform(handler)
        result = await platform.execute_sql(
            'abc', ExecuteSqlOptions(query="select 'O''Brien' as name", read_only=True)
        )

        assert result == [{'name': "O'Brien"}]
        assert bodies[0] == {'query': "select 'O''Brien' as name", 'read_only': True}


class TestBranching:
    """Test cases for branching operations."""

    @pytest.mark.asyncio
    async def test_list_branches_disabled(self, make_platform):
        """Test branching disabled yields an empty list."""

        def handler(request):
            return httpx.Response(422, json={'message': 'Branching is not enabled'})

        platform = make_platform(handler)

        assert await platform.list_branches('abc') == []

    @pytest.mark.asyncio
    async def test_list_branches_failure(self, make_platform):
        """Test other failures still raise."""

        def handler(request):
            return httpx.Response(500, json={'message': 'boom'})

        platform = make_platform(handler)

        with pytest.raises(UpstreamError, match='Failed to list branches: boom'):
            await platform.list_branches('abc')

    @pytest.mark.asyncio
    async def test_rebase_branch(self, make_platform):
        """Test rebase maps onto the push endpoint."""
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(201, json={})

        platform = make_platform(handler)
        await platform.rebase_branch('br-1')

        assert paths == ['/v1/branches/br-1/push']


class TestDevelopment:
    """Test cases for development operations."""

    @pytest.mark.asyncio
    async def test_get_project_url_default_host(self, make_platform):
        """Test the production API host maps to supabase.co."""
        platform = make_platform(lambda request: httpx.Response(200))

        assert await platform.get_project_url('abc') == 'https://abc.supabase.co'

    @pytest.mark.asyncio
    async def test_get_project_url_other_host(self, make_platform):
        """Test unknown API hosts fall back to supabase.red."""
        platform = make_platform(
            lambda request: httpx.Response(200), api_url='http://localhost:8080'
        )

        assert await platform.get_project_url('abc') == 'https://abc.supabase.red'

    @pytest.mark.asyncio
    async def test_get_anon_key(self, make_platform):
        """Test the anon key is picked from the key list."""

        def handler(request):
            return httpx.Response(
                200,
                json=[
                    {'name': 'service_role', 'api_key': 'service-key'},
                    {'name': 'anon', 'api_key': 'anon-key'},
                ],
            )

        platform = make_platform(handler)

        assert await platform.get_anon_key('abc') == 'anon-key'

    @pytest.mark.asyncio
    async def test_get_anon_key_missing(self, make_platform):
        """Test a missing anon key is reported."""

        def handler(request):
            return httpx.Response(200, json=[{'name': 'service_role', 'api_key': 'x'}])

        platform = make_platform(handler)

        with pytest.raises(UpstreamError, match='Anonymous key not found'):
            await platform.get_anon_key('abc')


class TestEdgeFunctions:
    """Test cases for Edge Function operations."""

    @pytest.mark.asyncio
    async def test_get_edge_function_rewrites_paths(self, make_platform):
        """Test deployment paths are made relative to the deployment root."""

        def handler(request):
            if request.url.path.endswith('/body'):
                return httpx.Response(
                    200,
                    headers={
                        'Content-Type': f'multipart/form-data; boundary={MULTIPART_BOUNDARY}'
                    },
                    content=multipart_body(
                        [('/tmp/user_fn_abc_fn-1_3/source/index.ts', 'console.log(1)')]
                    ),
                )
            return httpx.Response(
                200,
                json={
                    'id': 'fn-1',
                    'slug': 'hello',
                    'version': 3,
                    'entrypoint_path': 'file:///tmp/user_fn_abc_fn-1_3/source/index.ts',
                },
            )

        platform = make_platform(handler)
        result = await platform.get_edge_function('abc', 'hello')

        assert result['entrypoint_path'] == 'source/index.ts'
        assert result['import_map_path'] is None
        assert len(result['files']) == 1
        assert result['files'][0]['name'] == 'source/index.ts'
        assert result['files'][0]['content'].strip() == 'console.log(1)'

    @pytest.mark.asyncio
    async def test_get_edge_function_unexpected_content_type(self, make_platform):
        """Test a non-multipart body is rejected."""

        def handler(request):
            if request.url.path.endswith('/body'):
                return httpx.Response(200, json={'unexpected': True})
            return httpx.Response(200, json={'id': 'fn-1', 'slug': 'hello', 'version': 1})

        platform = make_platform(handler)

        with pytest.raises(UpstreamError, match='Unexpected content type'):
            await platform.get_edge_function('abc', 'hello')

    @pytest.mark.asyncio
    async def test_deploy_uses_import_map_from_files(self, make_platform):
        """Test a new function picks up deno.json as its import map."""
        deploys = []

        def handler(request):
            if request.url.path.endswith('/deploy'):
                deploys.append(request)
                return httpx.Response(201, json={'slug': 'hello', 'version': 1})
            return httpx.Response(404, json={'message': 'Function not found'})

        platform = make_platform(handler)
        result = await platform.deploy_edge_function(
            'abc',
            DeployEdgeFunctionOptions(
                name='hello',
                files=[
                    EdgeFunctionFile(name='index.ts', content='Deno.serve(() => new Response())'),
                    EdgeFunctionFile(name='deno.json', content='{}'),
                ],
            ),
        )

        assert result == {'slug': 'hello', 'version': 1}
        assert deploys[0].url.params['slug'] == 'hello'
        body = deploys[0].read()
        assert b'"import_map_path": "deno.json"' in body
        assert b'"entrypoint_path": "index.ts"' in body
        assert b'filename="index.ts"' in body


class TestStorage:
    """Test cases for storage operations."""

    @pytest.mark.asyncio
    async def test_update_storage_config_sends_full_config(self, make_platform):
        """Test the whole tracked config is sent."""
        bodies = []

        def handler(request):
            bodies.append((request.method, json.loads(request.content)))
            return httpx.Response(200)

        platform = make_platform(handler)
        await platform.update_storage_config(
            'abc',
            StorageConfig(
                fileSizeLimit=52428800,
                features=StorageFeatures(
                    imageTransformation=FeatureToggle(enabled=True),
                    s3Protocol=FeatureToggle(enabled=False),
                ),
            ),
        )

        assert bodies[0] == (
            'PATCH',
            {
                'fileSizeLimit': 52428800,
                'features': {
                    'imageTransformation': {'enabled': True},
                    's3Protocol': {'enabled': False},
                },
            },
        )


class TestInit:
    """Test cases for platform initialization."""

    @pytest.mark.asyncio
    async def test_init_sets_user_agent(self, make_platform):
        """Test the client identity is added to the User-Agent."""
        agents = []

        def handler(request):
            agents.append(request.headers['User-Agent'])
            return httpx.Response(200, json=[])

        platform = make_platform(handler)
        await platform.init('cursor', '1.2.0')
        await platform.list_projects()

        assert agents[0].startswith('supabase-mcp/')
        assert agents[0].endswith('(cursor/1.2.0)')
