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

"""Direct SQL passthrough to a project's ``pg/query`` endpoint."""

import httpx
from ..common.utils import quote_sql_literal
from ..constants import PG_QUERY_PATH
from ..exceptions import UpstreamError, ValidationError
from .models import ListTablesRequest, PgQueryRequest
from loguru import logger
from typing import Any


LIST_TABLES_SQL = """select
  table_schema as schema,
  table_name as name,
  table_type as type
from information_schema.tables
where table_schema in ({schemas})
order by table_schema, table_name"""


class PgQueryOperations:
    """SQL passthrough over HTTP.

    The SQL travels verbatim inside the JSON body. Expects the composing
    class to provide ``_http_client``.
    """

    _http_client: httpx.AsyncClient

    async def query_pg_endpoint(self, request: PgQueryRequest) -> Any:
        """POST ``{"query": sql}`` to ``{supabase_url}/pg/query`` and relay the JSON response."""
        if not request.supabase_url:
            raise ValidationError('supabase_url')
        if not request.query:
            raise ValidationError('query')

        url = request.supabase_url.rstrip('/') + PG_QUERY_PATH
        logger.info(f'Executing SQL through {url}')
        try:
            response = await self._http_client.post(
                url,
                headers={'apikey': request.api_key, 'Content-Type': 'application/json'},
                json={'query': request.query},
            )
        except httpx.HTTPError as error:
            raise UpstreamError(f'Failed to execute SQL query: {error}') from error

        if not response.is_success:
            raise UpstreamError(
                f'Failed to execute SQL query (HTTP {response.status_code}): {response.text}',
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as error:
            raise UpstreamError(f'Failed to parse SQL query response: {error}') from error

    async def list_pg_tables(self, request: ListTablesRequest) -> Any:
        """List tables of the given schemas through the ``pg/query`` endpoint."""
        schemas = [schema for schema in request.schemas if schema]
        if not schemas:
            raise ValidationError('schemas')

        query = LIST_TABLES_SQL.format(schemas=', '.join(quote_sql_literal(s) for s in schemas))
        return await self.query_pg_endpoint(
            PgQueryRequest(supabase_url=request.supabase_url, api_key=request.api_key, query=query)
        )
