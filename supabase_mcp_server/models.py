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

"""Result and context models shared by the tool registry and its handlers."""

from .common.utils import to_json_text
from .constants import ERROR_PREFIX
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional


class ToolContext(BaseModel):
    """Per-server settings visible to tool handlers."""

    model_config = ConfigDict(frozen=True)

    read_only: bool = False
    project_ref: Optional[str] = None


class ToolResult(BaseModel):
    """Uniform envelope returned for every tool call.

    A success carries a single JSON text block; a failure carries a
    human-readable message prefixed with ``Error: ``.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, data: Any) -> 'ToolResult':
        """Wrap handler data into a success envelope."""
        return cls(text=to_json_text(data))

    @classmethod
    def failure(cls, message: str) -> 'ToolResult':
        """Wrap an error message into a failure envelope."""
        return cls(text=f'{ERROR_PREFIX}{message}', is_error=True)

    @property
    def content(self) -> List[Dict[str, str]]:
        """Content blocks in MCP wire shape."""
        return [{'type': 'text', 'text': self.text}]
