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

"""Helpers for Edge Function deployments: path rewriting and multipart bodies."""

import posixpath
from ..exceptions import UpstreamError
from email import policy
from email.parser import BytesParser
from typing import Dict, List, Optional
from urllib.parse import unquote, urlparse


def get_deployment_id(project_id: str, function_id: str, version: int) -> str:
    """Build the deployment ID of an Edge Function version."""
    return f'{project_id}_{function_id}_{version}'


def get_path_prefix(deployment_id: str) -> str:
    """Root directory an Edge Function deployment is bundled under."""
    return f'/tmp/user_fn_{deployment_id}/'


def file_url_to_path(value: str) -> str:
    """Convert a ``file://`` URL into a POSIX path; other values are returned unchanged."""
    if value.startswith('file:'):
        return unquote(urlparse(value).path)
    return value


def relative_to_prefix(path: str, prefix: str) -> str:
    """Rewrite an absolute deployment path relative to the deployment root.

    POSIX semantics are used on every host, so separators are always
    forward slashes. Relative paths are only normalized.

    Args:
        path: Absolute path or file URL reported by the Management API
        prefix: Deployment root from ``get_path_prefix``

    Returns:
        str: The path relative to the deployment root
    """
    path = file_url_to_path(path)
    if not path.startswith('/'):
        return posixpath.normpath(path)
    return posixpath.relpath(path, prefix)


def parse_multipart_files(content_type: Optional[str], body: bytes) -> List[Dict[str, str]]:
    """Split a ``multipart/form-data`` body into named files.

    Args:
        content_type: The response Content-Type header
        body: The raw response body

    Returns:
        List of ``{'name', 'content'}`` entries for every part carrying a filename

    Raises:
        UpstreamError: If the body is not multipart or lacks a boundary
    """
    if not content_type or not content_type.startswith('multipart/form-data'):
        raise UpstreamError(
            f'Unexpected content type: {content_type}. Expected multipart/form-data.'
        )

    message = BytesParser(policy=policy.HTTP).parsebytes(
        b'Content-Type: ' + content_type.encode('latin-1') + b'\r\n\r\n' + body
    )
    if not message.get_boundary():
        raise UpstreamError('No multipart boundary found in response headers')

    files = []
    for part in message.iter_parts():
        filename = part.get_filename()
        if not filename:
            continue
        payload = part.get_payload(decode=True) or b''
        files.append(
            {
                'name': filename,
                'content': payload.decode(
                    part.get_content_charset() or 'utf-8', errors='replace'
                ),
            }
        )
    return files
