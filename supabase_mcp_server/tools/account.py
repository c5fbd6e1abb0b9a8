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

"""Account tools: organizations and projects."""

from ..constants import FEATURE_ACCOUNT
from ..platform.models import CreateProjectOptions, ProjectIdField
from ..registry import EmptyInput, tool
from loguru import logger
from pydantic import BaseModel, Field
from typing import Optional
from typing_extensions import Annotated


CREATE_PROJECT_TOOL_DESCRIPTION = """Creates a new Supabase project.

<important_notes>
1. A new project incurs costs on the organization's plan
2. When no region is given the AWS region closest to the caller is used
3. When no database password is given a random one is generated
</important_notes>
"""


class OrganizationInput(BaseModel):
    """Input for tools addressing an organization."""

    id: Annotated[str, Field(description='The organization ID')]


class ProjectRefInput(BaseModel):
    """Input for account tools addressing a project by ID."""

    id: ProjectIdField


class CreateProjectInput(BaseModel):
    """Input for create_project."""

    name: Annotated[str, Field(description='The name of the project')]
    organization_id: Annotated[str, Field(description='The organization to create the project in')]
    region: Annotated[
        Optional[str], Field(description='The region to create the project in, e.g. us-east-1')
    ] = None


@tool(
    feature=FEATURE_ACCOUNT,
    description='Lists all organizations that the user is a member of.',
    input_model=EmptyInput,
)
async def list_organizations(platform, params, context):
    return await platform.list_organizations()


@tool(
    feature=FEATURE_ACCOUNT,
    description='Gets details for an organization. Includes subscription plan.',
    input_model=OrganizationInput,
)
async def get_organization(platform, params, context):
    return await platform.get_organization(params.id)


@tool(
    feature=FEATURE_ACCOUNT,
    description='Lists all Supabase projects for the user.',
    input_model=EmptyInput,
)
async def list_projects(platform, params, context):
    return await platform.list_projects()


@tool(
    feature=FEATURE_ACCOUNT,
    description='Gets details for a Supabase project.',
    input_model=ProjectRefInput,
)
async def get_project(platform, params, context):
    return await platform.get_project(params.id)


@tool(
    feature=FEATURE_ACCOUNT,
    description=CREATE_PROJECT_TOOL_DESCRIPTION,
    input_model=CreateProjectInput,
    mutating=True,
)
async def create_project(platform, params, context):
    """Create a project in the given organization."""
    project = await platform.create_project(
        CreateProjectOptions(
            name=params.name,
            organization_id=params.organization_id,
            region=params.region,
        )
    )
    logger.success(f'Created project {params.name}')
    return project


@tool(
    feature=FEATURE_ACCOUNT,
    description='Pauses a Supabase project.',
    input_model=ProjectRefInput,
    mutating=True,
)
async def pause_project(platform, params, context):
    await platform.pause_project(params.id)
    logger.success(f'Paused project {params.id}')
    return {'success': True}


@tool(
    feature=FEATURE_ACCOUNT,
    description='Restores a Supabase project.',
    input_model=ProjectRefInput,
    mutating=True,
)
async def restore_project(platform, params, context):
    await platform.restore_project(params.id)
    logger.success(f'Restored project {params.id}')
    return {'success': True}
