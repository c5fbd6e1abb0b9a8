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

"""Tool tables grouped by feature, and feature gating."""

from ..constants import (
    DEFAULT_FEATURES,
    FEATURE_ACCOUNT,
    FEATURE_ALIYUN,
    FEATURE_BRANCHING,
    FEATURE_DATABASE,
    FEATURE_DEBUGGING,
    FEATURE_DEVELOPMENT,
    FEATURE_FUNCTIONS,
    FEATURE_STORAGE,
)
from ..registry import ToolDefinition, get_tool_definitions

# Importing the modules fills the tool table
from . import account, database, debugging, development, functions, branching, storage, aliyun  # noqa: F401, E402
from loguru import logger
from typing import Iterable, List, Optional, Set


FEATURE_GROUPS = (
    FEATURE_ACCOUNT,
    FEATURE_DATABASE,
    FEATURE_DEBUGGING,
    FEATURE_DEVELOPMENT,
    FEATURE_FUNCTIONS,
    FEATURE_BRANCHING,
    FEATURE_STORAGE,
    FEATURE_ALIYUN,
)


def parse_features(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated ``--features`` value; None when not given."""
    if value is None:
        return None
    return [feature.strip() for feature in value.split(',') if feature.strip()]


def resolve_features(
    features: Optional[Iterable[str]] = None, project_ref: Optional[str] = None
) -> Set[str]:
    """Resolve the enabled feature groups.

    Unknown names are ignored with a warning. The account group is dropped
    when the server is scoped to a single project.

    Args:
        features: Requested feature groups, None for the defaults
        project_ref: Project the server is scoped to, if any

    Returns:
        Set of enabled feature groups
    """
    requested = DEFAULT_FEATURES if features is None else features

    enabled = set()
    for feature in requested:
        if feature not in FEATURE_GROUPS:
            logger.warning(f'Ignoring unknown feature: {feature}')
            continue
        enabled.add(feature)

    if project_ref:
        enabled.discard(FEATURE_ACCOUNT)
    return enabled


def get_tools(
    features: Optional[Iterable[str]] = None, project_ref: Optional[str] = None
) -> List[ToolDefinition]:
    """Return the tool definitions active for the given features, in table order."""
    return get_tool_definitions(resolve_features(features, project_ref))
