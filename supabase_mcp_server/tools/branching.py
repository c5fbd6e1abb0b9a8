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

"""Development branch tools."""

from ..constants import FEATURE_BRANCHING
from ..platform.models import (
    CreateBranchOptions,
    ProjectIdField,
    ProjectInput,
    ResetBranchOptions,
)
from ..registry import tool
from loguru import logger
from pydantic import BaseModel, Field
from typing import Optional
from typing_extensions import Annotated


CREATE_BRANCH_TOOL_DESCRIPTION = """Creates a development branch on a Supabase project.

This will apply all migrations from the main project to a fresh branch database.
Note that production data will not carry over. The branch will get its own
project_id via the resulting project_ref; use it to execute queries and
migrations on the branch.
"""

MERGE_BRANCH_TOOL_DESCRIPTION = (
    'Merges migrations and edge functions from a development branch to production.'
)

RESET_BRANCH_TOOL_DESCRIPTION = """Resets migrations of a development branch.

Any untracked data or schema changes will be lost.
"""

REBASE_BRANCH_TOOL_DESCRIPTION = """Rebases a development branch on production.

This will effectively run any newer migrations from production onto this branch
to help handle migration drift.
"""


class CreateBranchInput(BaseModel):
    """Input for create_branch."""

    project_id: ProjectIdField
    name: Annotated[str, Field(description='Name of the branch to create')] = 'develop'


class BranchInput(BaseModel):
    """Input for tools addressing a branch."""

    branch_id: Annotated[str, Field(description='The branch ID')]


class ResetBranchInput(BaseModel):
    """Input for reset_branch."""

    branch_id: Annotated[str, Field(description='The branch ID')]
    migration_version: Annotated[
        Optional[str],
        Field(description='Reset the branch to a specific migration version'),
    ] = None


@tool(
    feature=FEATURE_BRANCHING,
    description=CREATE_BRANCH_TOOL_DESCRIPTION,
    input_model=CreateBranchInput,
    mutating=True,
    project_scoped=True,
)
async def create_branch(platform, params, context):
    branch = await platform.create_branch(
        params.project_id, CreateBranchOptions(name=params.name)
    )
    logger.success(f'Created branch {params.name}')
    return branch


@tool(
    feature=FEATURE_BRANCHING,
    description='Lists all development branches of a Supabase project.',
    input_model=ProjectInput,
    project_scoped=True,
)
async def list_branches(platform, params, context):
    return await platform.list_branches(params.project_id)


@tool(
    feature=FEATURE_BRANCHING,
    description='Deletes a development branch.',
    input_model=BranchInput,
    mutating=True,
)
async def delete_branch(platform, params, context):
    await platform.delete_branch(params.branch_id)
    logger.success(f'Deleted branch {params.branch_id}')
    return {'success': True}


@tool(
    feature=FEATURE_BRANCHING,
    description=MERGE_BRANCH_TOOL_DESCRIPTION,
    input_model=BranchInput,
    mutating=True,
)
async def merge_branch(platform, params, context):
    await platform.merge_branch(params.branch_id)
    logger.success(f'Merged branch {params.branch_id}')
    return {'success': True}


@tool(
    feature=FEATURE_BRANCHING,
    description=RESET_BRANCH_TOOL_DESCRIPTION,
    input_model=ResetBranchInput,
    mutating=True,
)
async def reset_branch(platform, params, context):
    await platform.reset_branch(
        params.branch_id, ResetBranchOptions(migration_version=params.migration_version)
    )
    logger.success(f'Reset branch {params.branch_id}')
    return {'success': True}


@tool(
    feature=FEATURE_BRANCHING,
    description=REBASE_BRANCH_TOOL_DESCRIPTION,
    input_model=BranchInput,
    mutating=True,
)
async def rebase_branch(platform, params, context):
    await platform.rebase_branch(params.branch_id)
    logger.success(f'Rebased branch {params.branch_id}')
    return {'success': True}
