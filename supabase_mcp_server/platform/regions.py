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

"""Closest AWS region lookup for new Supabase projects."""

import math
from typing import Dict, Optional, Tuple


Coordinates = Tuple[float, float]

# AWS regions Supabase projects can be created in, with (latitude, longitude)
AWS_REGIONS: Dict[str, Coordinates] = {
    'us-west-1': (37.774929, -122.419418),
    'us-east-1': (37.926868, -78.024902),
    'us-east-2': (39.9612, -82.9988),
    'ca-central-1': (45.5017, -73.5673),
    'eu-west-1': (53.3498, -6.2603),
    'eu-west-2': (51.507351, -0.127758),
    'eu-west-3': (48.856613, 2.352222),
    'eu-central-1': (50.110924, 8.682127),
    'eu-central-2': (47.3744489, 8.5410422),
    'eu-north-1': (59.3251172, 18.0710935),
    'ap-south-1': (18.9733536, 72.8281049),
    'ap-southeast-1': (1.357107, 103.8194992),
    'ap-northeast-1': (35.6895, 139.6917),
    'ap-northeast-2': (37.5665, 126.978),
    'ap-southeast-2': (-33.8688, 151.2093),
    'sa-east-1': (-23.5505, -46.6333),
}

# Approximate centroids keyed by ISO 3166-1 alpha-2 country code
COUNTRY_COORDINATES: Dict[str, Coordinates] = {
    'AE': (23.4241, 53.8478),
    'AR': (-38.4161, -63.6167),
    'AT': (47.5162, 14.5501),
    'AU': (-25.2744, 133.7751),
    'BD': (23.685, 90.3563),
    'BE': (50.5039, 4.4699),
    'BR': (-14.235, -51.9253),
    'CA': (56.1304, -106.3468),
    'CH': (46.8182, 8.2275),
    'CL': (-35.6751, -71.543),
    'CN': (35.8617, 104.1954),
    'CO': (4.5709, -74.2973),
    'CZ': (49.8175, 15.473),
    'DE': (51.1657, 10.4515),
    'DK': (56.2639, 9.5018),
    'EG': (26.8206, 30.8025),
    'ES': (40.4637, -3.7492),
    'FI': (61.9241, 25.7482),
    'FR': (46.2276, 2.2137),
    'GB': (55.3781, -3.436),
    'GR': (39.0742, 21.8243),
    'HK': (22.3193, 114.1694),
    'HU': (47.1625, 19.5033),
    'ID': (-0.7893, 113.9213),
    'IE': (53.4129, -8.2439),
    'IL': (31.0461, 34.8516),
    'IN': (20.5937, 78.9629),
    'IT': (41.8719, 12.5674),
    'JP': (36.2048, 138.2529),
    'KE': (-0.0236, 37.9062),
    'KR': (35.9078, 127.7669),
    'MX': (23.6345, -102.5528),
    'MY': (4.2105, 101.9758),
    'NG': (9.082, 8.6753),
    'NL': (52.1326, 5.2913),
    'NO': (60.472, 8.4689),
    'NZ': (-40.9006, 174.886),
    'PE': (-9.19, -75.0152),
    'PH': (12.8797, 121.774),
    'PK': (30.3753, 69.3451),
    'PL': (51.9194, 19.1451),
    'PT': (39.3999, -8.2245),
    'RO': (45.9432, 24.9668),
    'SA': (23.8859, 45.0792),
    'SE': (60.1282, 18.6435),
    'SG': (1.3521, 103.8198),
    'TH': (15.87, 100.9925),
    'TR': (38.9637, 35.2433),
    'TW': (23.6978, 120.9605),
    'UA': (48.3794, 31.1656),
    'US': (37.0902, -95.7129),
    'VN': (14.0583, 108.2772),
    'ZA': (-30.5595, 22.9375),
}

EARTH_RADIUS_KM = 6371.0


def parse_country_code(trace: str) -> Optional[str]:
    """Extract the ``loc=`` country code from a Cloudflare trace response body."""
    for line in trace.splitlines():
        key, _, value = line.partition('=')
        if key.strip() == 'loc' and value.strip():
            return value.strip().upper()
    return None


def get_distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in kilometres between two points."""
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    h = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def get_closest_aws_region(coordinates: Coordinates) -> str:
    """Return the AWS region code nearest to the given coordinates."""
    return min(AWS_REGIONS, key=lambda code: get_distance(coordinates, AWS_REGIONS[code]))
