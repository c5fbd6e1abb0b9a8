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

"""Development tools."""

from ..constants import FEATURE_DEVELOPMENT
from ..platform.models import ProjectInput
from ..registry import tool


@tool(
    feature=FEATURE_DEVELOPMENT,
    description='Gets the API URL for a project.',
    input_model=ProjectInput,
    project_scoped=True,
)
async def get_project_url(platform, params, context):
    return await platform.get_project_url(params.project_id)


@tool(
    feature=FEATURE_DEVELOPMENT,
    description='Gets the anonymous API key for a project.',
    input_model=ProjectInput,
    project_scoped=True,
)
async def get_anon_key(platform, params, context):
    return await platform.get_anon_key(params.project_id)


@tool(
    feature=FEATURE_DEVELOPMENT,
    description='Generates TypeScript types for a project.',
    input_model=ProjectInput,
    project_scoped=True,
)
async def generate_typescript_types(platform, params, context):
    return await platform.generate_typescript_types(params.project_id)
