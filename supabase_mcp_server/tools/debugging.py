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

"""Debugging tools: service logs and advisors."""

from ..constants import FEATURE_DEBUGGING
from ..platform.models import GetLogsOptions
from ..registry import tool
from datetime import datetime, timedelta, timezone
from pydantic import BaseModel, Field
from typing import Literal
from typing_extensions import Annotated


LOG_LIMIT = 100

LOG_QUERIES = {
    'api': (
        'select id, identifier, timestamp, event_message, request.method, request.path, '
        'response.status_code from edge_logs '
        'cross join unnest(metadata) as m '
        'cross join unnest(m.request) as request '
        'cross join unnest(m.response) as response '
        'order by timestamp desc limit {limit}'
    ),
    'branch-action': (
        'select workflow_run, workflow_run_logs.timestamp, id, event_message '
        'from workflow_run_logs order by timestamp desc limit {limit}'
    ),
    'postgres': (
        'select identifier, postgres_logs.timestamp, id, event_message, parsed.error_severity '
        'from postgres_logs '
        'cross join unnest(metadata) as m '
        'cross join unnest(m.parsed) as parsed '
        'order by timestamp desc limit {limit}'
    ),
    'edge-function': (
        'select id, function_edge_logs.timestamp, event_message, response.status_code, '
        'request.method, m.function_id, m.execution_time_ms, m.deployment_id, m.version '
        'from function_edge_logs '
        'cross join unnest(metadata) as m '
        'cross join unnest(m.response) as response '
        'cross join unnest(m.request) as request '
        'order by timestamp desc limit {limit}'
    ),
    'auth': (
        'select id, auth_logs.timestamp, event_message, metadata.level, metadata.status, '
        'metadata.path, metadata.msg as msg, metadata.error from auth_logs '
        'cross join unnest(metadata) as metadata '
        'order by timestamp desc limit {limit}'
    ),
    'storage': (
        'select id, storage_logs.timestamp, event_message from storage_logs '
        'order by timestamp desc limit {limit}'
    ),
    'realtime': (
        'select id, realtime_logs.timestamp, event_message from realtime_logs '
        'order by timestamp desc limit {limit}'
    ),
}

LogService = Literal[
    'api', 'branch-action', 'postgres', 'edge-function', 'auth', 'storage', 'realtime'
]

GET_LOGS_TOOL_DESCRIPTION = """Gets logs for a Supabase project by service type.

Use this to help debug problems with your app. This will only return logs
within the last minute. If the logs you are looking for are older than 1 minute,
re-run your test to reproduce them.
"""

GET_ADVISORS_TOOL_DESCRIPTION = """Gets a list of advisory notices for the Supabase project.

<use_case>
Use this to check for security vulnerabilities or performance improvements.
It's recommended to run this tool regularly, especially after making DDL changes
to the database since it will catch things like missing RLS policies.
</use_case>

<important_notes>
Include the remediation URL as a clickable link so that the user can reference
the issue themselves.
</important_notes>
"""


class GetLogsInput(BaseModel):
    """Input for get_logs."""

    project_id: Annotated[str, Field(description='The project ID')]
    service: Annotated[LogService, Field(description='The service to fetch logs for')]


class GetAdvisorsInput(BaseModel):
    """Input for get_advisors."""

    project_id: Annotated[str, Field(description='The project ID')]
    type: Annotated[
        Literal['security', 'performance'],
        Field(description='The type of advisors to fetch'),
    ]


def get_log_query(service: str, limit: int = LOG_LIMIT) -> str:
    """Return the analytics SQL for a service's logs."""
    return LOG_QUERIES[service].format(limit=limit)


@tool(
    feature=FEATURE_DEBUGGING,
    description=GET_LOGS_TOOL_DESCRIPTION,
    input_model=GetLogsInput,
    project_scoped=True,
)
async def get_logs(platform, params, context):
    """Fetch the last minute of logs for one service."""
    end = datetime.now(timezone.utc)
    start = end - timedelta(minutes=1)
    return await platform.get_logs(
        params.project_id,
        GetLogsOptions(
            sql=get_log_query(params.service),
            iso_timestamp_start=start.isoformat(),
            iso_timestamp_end=end.isoformat(),
        ),
    )


@tool(
    feature=FEATURE_DEBUGGING,
    description=GET_ADVISORS_TOOL_DESCRIPTION,
    input_model=GetAdvisorsInput,
    project_scoped=True,
)
async def get_advisors(platform, params, context):
    if params.type == 'security':
        return await platform.get_security_advisors(params.project_id)
    return await platform.get_performance_advisors(params.project_id)
