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

"""Tests for main module."""

import pytest
from supabase_mcp_server import __version__
from supabase_mcp_server.main import main
from unittest.mock import patch


class TestMain:
    """Test cases for main function."""

    def test_main_success(self):
        """Test successful main function execution."""
        with patch('supabase_mcp_server.main.create_supabase_mcp_server') as mock_create:
            with patch('sys.argv', ['test']):
                main()

            mock_create.return_value.run.assert_called_once()
            kwargs = mock_create.call_args[1]
            assert kwargs['features'] is None
            assert kwargs['read_only'] is False
            assert kwargs['project_ref'] is None

    def test_main_with_args(self):
        """Test main function with command line arguments."""
        with patch('supabase_mcp_server.main.create_supabase_mcp_server') as mock_create:
            with patch(
                'sys.argv',
                ['test', '--read-only', '--project-ref', 'abc', '--features', 'database,storage'],
            ):
                main()

            kwargs = mock_create.call_args[1]
            assert kwargs['features'] == ['database', 'storage']
            assert kwargs['read_only'] is True
            assert kwargs['project_ref'] == 'abc'

    def test_version(self, capsys):
        """Test --version prints the version and exits cleanly."""
        with patch('sys.argv', ['test', '--version']):
            with pytest.raises(SystemExit) as exc:
                main()

        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_missing_supabase_token(self):
        """Test the server refuses to start without a Supabase token."""
        with patch('supabase_mcp_server.main.create_supabase_mcp_server') as mock_create:
            with patch.dict('os.environ', {'SUPABASE_ACCESS_TOKEN': ''}):
                with patch('sys.argv', ['test']):
                    with pytest.raises(SystemExit) as exc:
                        main()

        assert exc.value.code == 1
        mock_create.assert_not_called()

    def test_aliyun_only_without_supabase_token(self):
        """Test an Aliyun-only server needs no Supabase token."""
        with patch('supabase_mcp_server.main.create_supabase_mcp_server') as mock_create:
            with patch.dict('os.environ', {'SUPABASE_ACCESS_TOKEN': ''}):
                with patch('sys.argv', ['test', '--features', 'aliyun']):
                    main()

        mock_create.return_value.run.assert_called_once()

    def test_aliyun_only_with_unknown_feature(self):
        """Test unknown feature names do not make the Supabase token required."""
        with patch('supabase_mcp_server.main.create_supabase_mcp_server') as mock_create:
            with patch.dict('os.environ', {'SUPABASE_ACCESS_TOKEN': ''}):
                with patch('sys.argv', ['test', '--features', 'aliyun,typo']):
                    main()

        mock_create.return_value.run.assert_called_once()

    def test_aliyun_without_aliyun_token(self):
        """Test the aliyun feature requires ALIYUN_ACCESS_TOKEN."""
        with patch('supabase_mcp_server.main.create_supabase_mcp_server') as mock_create:
            with patch.dict('os.environ', {'ALIYUN_ACCESS_TOKEN': ''}):
                with patch('sys.argv', ['test', '--features', 'database,aliyun']):
                    with pytest.raises(SystemExit) as exc:
                        main()

        assert exc.value.code == 1
        mock_create.assert_not_called()

    def test_main_exception_handling(self):
        """Test main function exception handling."""
        with patch('supabase_mcp_server.main.create_supabase_mcp_server') as mock_create:
            mock_create.return_value.run.side_effect = Exception('Test exception')

            with patch('sys.argv', ['test']):
                with pytest.raises(Exception, match='Test exception'):
                    main()
