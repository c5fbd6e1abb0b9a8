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

"""Tests for Edge Function helpers."""

import pytest
from supabase_mcp_server.exceptions import UpstreamError
from supabase_mcp_server.platform.edge_function import (
    file_url_to_path,
    get_deployment_id,
    get_path_prefix,
    parse_multipart_files,
    relative_to_prefix,
)


class TestDeploymentPaths:
    """Test cases for deployment path helpers."""

    def test_path_prefix(self):
        """Test the deployment root layout."""
        deployment_id = get_deployment_id('abc', 'fn-1', 2)

        assert deployment_id == 'abc_fn-1_2'
        assert get_path_prefix(deployment_id) == '/tmp/user_fn_abc_fn-1_2/'

    def test_file_url(self):
        """Test file URLs are decoded into paths."""
        assert file_url_to_path('file:///tmp/my%20fn/index.ts') == '/tmp/my fn/index.ts'
        assert file_url_to_path('index.ts') == 'index.ts'

    def test_absolute_path_made_relative(self):
        """Test absolute paths are made relative to the deployment root."""
        prefix = '/tmp/user_fn_abc_fn-1_2/'

        assert relative_to_prefix('/tmp/user_fn_abc_fn-1_2/source/index.ts', prefix) == (
            'source/index.ts'
        )
        assert relative_to_prefix('file:///tmp/user_fn_abc_fn-1_2/deno.json', prefix) == (
            'deno.json'
        )

    def test_relative_path_normalized(self):
        """Test relative paths are only normalized."""
        assert relative_to_prefix('./lib/../index.ts', '/tmp/user_fn_x_y_1/') == 'index.ts'


class TestParseMultipartFiles:
    """Test cases for parse_multipart_files."""

    def test_parse_files(self):
        """Test every part with a filename becomes a file."""
        body = (
            b'--b1\r\n'
            b'Content-Disposition: form-data; name="metadata"\r\n'
            b'\r\n'
            b'{}\r\n'
            b'--b1\r\n'
            b'Content-Disposition: form-data; name="file"; filename="index.ts"\r\n'
            b'Content-Type: application/typescript\r\n'
            b'\r\n'
            b'export {}\r\n'
            b'--b1--\r\n'
        )

        files = parse_multipart_files('multipart/form-data; boundary=b1', body)

        assert len(files) == 1
        assert files[0]['name'] == 'index.ts'
        assert files[0]['content'].strip() == 'export {}'

    def test_binary_file_decoded_with_replacement(self):
        """Test a file that is not valid UTF-8 is kept with replacement characters."""
        body = (
            b'--b1\r\n'
            b'Content-Disposition: form-data; name="file"; filename="logo.bin"\r\n'
            b'Content-Type: application/octet-stream\r\n'
            b'\r\n'
            b'\xff\xfe\x00\r\n'
            b'--b1\r\n'
            b'Content-Disposition: form-data; name="file"; filename="index.ts"\r\n'
            b'\r\n'
            b'export {}\r\n'
            b'--b1--\r\n'
        )

        files = parse_multipart_files('multipart/form-data; boundary=b1', body)

        assert [f['name'] for f in files] == ['logo.bin', 'index.ts']
        assert files[0]['content'].startswith('\ufffd\ufffd')
        assert files[1]['content'].strip() == 'export {}'

    def test_wrong_content_type(self):
        """Test non-multipart content is rejected."""
        with pytest.raises(UpstreamError, match='Unexpected content type: application/json'):
            parse_multipart_files('application/json', b'{}')

    def test_missing_content_type(self):
        """Test a missing content type is rejected."""
        with pytest.raises(UpstreamError, match='Expected multipart/form-data'):
            parse_multipart_files(None, b'')

    def test_missing_boundary(self):
        """Test multipart content without a boundary is rejected."""
        with pytest.raises(UpstreamError, match='No multipart boundary'):
            parse_multipart_files('multipart/form-data', b'data')
