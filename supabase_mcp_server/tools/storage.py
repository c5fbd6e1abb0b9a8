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

"""Storage tools."""

from ..constants import FEATURE_STORAGE
from ..platform.models import ProjectIdField, ProjectInput, StorageConfig
from ..registry import tool
from loguru import logger
from pydantic import BaseModel, Field
from typing_extensions import Annotated


class UpdateStorageConfigInput(BaseModel):
    """Input for update_storage_config."""

    project_id: ProjectIdField
    config: Annotated[StorageConfig, Field(description='The full storage configuration')]


@tool(
    feature=FEATURE_STORAGE,
    description='Lists all storage buckets in a Supabase project.',
    input_model=ProjectInput,
    project_scoped=True,
)
async def list_storage_buckets(platform, params, context):
    return await platform.list_all_buckets(params.project_id)


@tool(
    feature=FEATURE_STORAGE,
    description='Get the storage config for a Supabase project.',
    input_model=ProjectInput,
    project_scoped=True,
)
async def get_storage_config(platform, params, context):
    return await platform.get_storage_config(params.project_id)


@tool(
    feature=FEATURE_STORAGE,
    description='Update the storage config for a Supabase project.',
    input_model=UpdateStorageConfigInput,
    mutating=True,
    project_scoped=True,
)
async def update_storage_config(platform, params, context):
    await platform.update_storage_config(params.project_id, params.config)
    logger.success(f'Updated storage config of project {params.project_id}')
    return {'success': True}
