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

"""General utility functions for the Supabase MCP Server."""

import datetime
import json
import secrets
import string
from ..constants import FALLBACK_PROJECT_DOMAIN, PROJECT_DOMAINS
from typing import Any, Iterable, List, Union


def convert_datetime_to_string(obj: Any) -> Any:
    """Recursively convert datetime objects to ISO format strings.

    Args:
        obj: Object to convert

    Returns:
        Object with datetime objects converted to strings
    """
    if isinstance(obj, (datetime.datetime, datetime.date)):
        return obj.isoformat()
    elif isinstance(obj, dict):
        return {k: convert_datetime_to_string(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_datetime_to_string(item) for item in obj]
    return obj


def to_json_text(data: Any) -> str:
    """Serialize a tool result into the JSON text block sent to the client."""
    return json.dumps(convert_datetime_to_string(data), indent=2, ensure_ascii=False, default=str)


def normalize_security_ip_list(value: Union[str, Iterable[str], None]) -> List[str]:
    """Turn a comma-separated string or a list of IP/CIDR entries into a clean list.

    Entries are trimmed and empty entries dropped. The backend enforces the
    maximum number of entries.

    Args:
        value: ``"10.0.0.1, 10.0.0.2/24"`` or ``["10.0.0.1", "10.0.0.2/24"]``

    Returns:
        List[str]: The trimmed entries in their original order
    """
    if value is None:
        return []
    items = value.split(',') if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


def quote_sql_literal(value: str) -> str:
    """Quote a value as a SQL string literal.

    The value is wrapped in single quotes and every embedded single quote is
    doubled, so ``O'Brien`` becomes ``'O''Brien'``.
    """
    return "'" + value.replace("'", "''") + "'"


def generate_password(length: int = 16) -> str:
    """Generate a random password with at least one digit, uppercase and lowercase letter.

    Args:
        length: Password length

    Returns:
        str: The generated password
    """
    alphabet = string.ascii_letters + string.digits
    while True:
        password = ''.join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(c.islower() for c in password)
            and any(c.isupper() for c in password)
            and any(c.isdigit() for c in password)
        ):
            return password


def get_project_domain(api_hostname: str) -> str:
    """Map a Management API hostname to the domain its projects are served from."""
    return PROJECT_DOMAINS.get(api_hostname, FALLBACK_PROJECT_DOMAIN)
