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


"""Tests for the closest region lookup helpers."""

import pytest
from supabase_mcp_server.platform.regions import (
    AWS_REGIONS,
    COUNTRY_COORDINATES,
    get_closest_aws_region,
    get_distance,
    parse_country_code,
)


class TestParseCountryCode:
    """Test cases for parse_country_code."""

    def test_trace_body(self):
        """Test the loc entry is read from a trace body."""
        assert parse_country_code('fl=1\nh=www.cloudflare.com\nloc=de\ntls=TLSv1.3') == 'DE'

    def test_missing_loc(self):
        """Test a body without a loc entry yields nothing."""
        assert parse_country_code('fl=1\nloc=\n') is None
        assert parse_country_code('') is None


class TestClosestRegion:
    """Test cases for get_closest_aws_region."""

    def test_distance(self):
        """Test the great-circle distance between London and Paris."""
        distance = get_distance(AWS_REGIONS['eu-west-2'], AWS_REGIONS['eu-west-3'])

        assert distance == pytest.approx(344, abs=5)

    @pytest.mark.parametrize(
        'country,region',
        [
            ('DE', 'eu-central-1'),
            ('JP', 'ap-northeast-1'),
            ('AU', 'ap-southeast-2'),
            ('BR', 'sa-east-1'),
            ('IN', 'ap-south-1'),
        ],
    )
    def test_closest_region_by_country(self, country, region):
        """Test countries resolve to their nearest region."""
        assert get_closest_aws_region(COUNTRY_COORDINATES[country]) == region
