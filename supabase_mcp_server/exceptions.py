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

"""Custom exceptions for the Supabase MCP Server."""

from .constants import (
    ERROR_INVALID_ARGUMENTS,
    ERROR_MISSING_PARAM,
    ERROR_READONLY_MODE,
    ERROR_UNKNOWN_TOOL,
)
from typing import Optional


class SupabaseMCPException(Exception):
    """Base exception for the Supabase MCP Server."""

    pass


class ConfigError(SupabaseMCPException):
    """Exception raised for missing or malformed credentials and settings."""

    pass


class ValidationError(SupabaseMCPException):
    """Exception raised when a platform operation receives incomplete input."""

    def __init__(self, field: str, message: Optional[str] = None):
        """Initialize the ValidationError.

        Args:
            field: The name of the offending field
            message: Optional message overriding the default missing-parameter text
        """
        self.field = field
        super().__init__(message or ERROR_MISSING_PARAM.format(field))


class UpstreamError(SupabaseMCPException):
    """Exception raised when the Management API or the Aliyun API reports a failure."""

    def __init__(
        self, message: str, status_code: Optional[int] = None, code: Optional[str] = None
    ):
        """Initialize the UpstreamError.

        Args:
            message: Human-readable message including the backend's own detail
            status_code: HTTP status code, when the failure came from an HTTP response
            code: Backend error code, when one was supplied
        """
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class UnknownToolError(SupabaseMCPException):
    """Exception raised when a tool name is not part of the active tool set."""

    def __init__(self, name: str):
        """Initialize the UnknownToolError.

        Args:
            name: The requested tool name
        """
        self.name = name
        super().__init__(ERROR_UNKNOWN_TOOL.format(name))


class InvalidArgumentsError(SupabaseMCPException):
    """Exception raised when tool arguments do not satisfy the tool's input schema."""

    def __init__(self, tool: str, field: str, constraint: str):
        """Initialize the InvalidArgumentsError.

        Args:
            tool: The tool whose arguments were rejected
            field: Dotted path of the offending field
            constraint: Description of the violated constraint
        """
        self.tool = tool
        self.field = field
        self.constraint = constraint
        super().__init__(ERROR_INVALID_ARGUMENTS.format(tool, f'{field}: {constraint}'))


class ReadOnlyModeError(SupabaseMCPException):
    """Exception raised when a mutating tool is called in read-only mode."""

    def __init__(self, operation: str):
        """Initialize the ReadOnlyModeError.

        Args:
            operation: The name of the operation that was attempted
        """
        self.operation = operation
        super().__init__(ERROR_READONLY_MODE.format(operation))
