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

"""Decorators used by the Supabase MCP Server."""

from ..constants import ERROR_UNEXPECTED
from ..exceptions import (
    ConfigError,
    InvalidArgumentsError,
    ReadOnlyModeError,
    UnknownToolError,
    UpstreamError,
    ValidationError,
)
from ..models import ToolContext, ToolResult
from functools import wraps
from inspect import iscoroutinefunction
from loguru import logger
from typing import Any, Callable


def handle_exceptions(func: Callable) -> Callable:
    """Decorator to convert exceptions raised by a tool call into a failure envelope.

    Every exception is caught, so one bad tool call never reaches the
    transport as an unhandled error.

    Args:
        func: The function to wrap

    Returns:
        The wrapped function that always returns a ToolResult
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
        try:
            if iscoroutinefunction(func):
                return await func(*args, **kwargs)
            return func(*args, **kwargs)
        except ReadOnlyModeError as error:
            logger.warning(f'Operation blocked in read-only mode: {error.operation}')
            return ToolResult.failure(str(error))
        except (UnknownToolError, InvalidArgumentsError, ValidationError) as error:
            logger.warning(f'Rejected tool call: {error}')
            return ToolResult.failure(str(error))
        except ConfigError as error:
            logger.error(f'Configuration error: {error}')
            return ToolResult.failure(str(error))
        except UpstreamError as error:
            logger.error(f'Failed with upstream error: {error}')
            return ToolResult.failure(str(error))
        except Exception as error:
            logger.exception(f'Failed with unexpected error: {str(error)}')
            return ToolResult.failure(ERROR_UNEXPECTED.format(str(error) or type(error).__name__))

    return wrapper


def readonly_check(func: Callable) -> Callable:
    """Decorator to block a mutating tool handler in read-only mode.

    The wrapped handler must accept the tool context as its third positional
    argument or as the ``context`` keyword. The handler, and therefore the
    platform, is never invoked when the server is read-only.

    Args:
        func: The handler to wrap

    Returns:
        The wrapped handler that checks read-only mode
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any):
        context = kwargs.get('context')
        if context is None:
            context = next((arg for arg in args if isinstance(arg, ToolContext)), None)

        if context is not None and context.read_only:
            raise ReadOnlyModeError(func.__name__)

        return await func(*args, **kwargs)

    return wrapper
