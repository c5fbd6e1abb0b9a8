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

"""Edge Function tools."""

from ..constants import FEATURE_FUNCTIONS
from ..platform.models import (
    DeployEdgeFunctionOptions,
    EdgeFunctionFile,
    ProjectIdField,
    ProjectInput,
)
from ..registry import tool
from loguru import logger
from pydantic import BaseModel, Field
from typing import List, Optional
from typing_extensions import Annotated


DEPLOY_EDGE_FUNCTION_TOOL_DESCRIPTION = """Deploys an Edge Function to a Supabase project.

If the function already exists, this will create a new version.

<important_notes>
1. The entrypoint file must be included in the uploaded files
2. When no import map path is given, the existing function's import map is kept,
   otherwise a deno.json or import_map.json file among the uploads is used
</important_notes>
"""


class GetEdgeFunctionInput(BaseModel):
    """Input for get_edge_function."""

    project_id: ProjectIdField
    function_slug: Annotated[str, Field(description='The slug of the Edge Function')]


class DeployEdgeFunctionInput(BaseModel):
    """Input for deploy_edge_function."""

    project_id: ProjectIdField
    name: Annotated[str, Field(description='The name of the function')]
    entrypoint_path: Annotated[
        str, Field(description='The entrypoint of the function')
    ] = 'index.ts'
    import_map_path: Annotated[
        Optional[str], Field(description='The import map for the function')
    ] = None
    files: Annotated[
        List[EdgeFunctionFile], Field(description='The files to upload', min_length=1)
    ]


@tool(
    feature=FEATURE_FUNCTIONS,
    description='Lists all Edge Functions in a Supabase project.',
    input_model=ProjectInput,
    project_scoped=True,
)
async def list_edge_functions(platform, params, context):
    return await platform.list_edge_functions(params.project_id)


@tool(
    feature=FEATURE_FUNCTIONS,
    description='Retrieves file contents for an Edge Function in a Supabase project.',
    input_model=GetEdgeFunctionInput,
    project_scoped=True,
)
async def get_edge_function(platform, params, context):
    return await platform.get_edge_function(params.project_id, params.function_slug)


@tool(
    feature=FEATURE_FUNCTIONS,
    description=DEPLOY_EDGE_FUNCTION_TOOL_DESCRIPTION,
    input_model=DeployEdgeFunctionInput,
    mutating=True,
    project_scoped=True,
)
async def deploy_edge_function(platform, params, context):
    """Deploy a new version of an Edge Function."""
    deployment = await platform.deploy_edge_function(
        params.project_id,
        DeployEdgeFunctionOptions(
            name=params.name,
            entrypoint_path=params.entrypoint_path,
            import_map_path=params.import_map_path,
            files=params.files,
        ),
    )
    logger.success(f'Deployed Edge Function {params.name}')
    return deployment
