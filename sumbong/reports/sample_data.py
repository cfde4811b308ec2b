"""
Static report snapshot for Barangay Parian, Calamba City.

Used as the initial collection of the map page before any remote delivery,
and as the reference data set in tests.
"""

from typing import Any, Dict, List

PARIAN_CENTER = (14.2000, 121.1530)

SAMPLE_RECORDS: List[Dict[str, Any]] = [
    {
        'id': 1,
        'crimeType': 'theft',
        'location': 'Parian Market',
        'lat': 14.2002,
        'lng': 121.1533,
        'description': 'Stolen wallet from market vendor',
        'status': 'verified',
        'timestamp': '2024-01-15T10:30:00',
    },
    {
        'id': 2,
        'crimeType': 'assault',
        'location': 'Parian Elementary School',
        'lat': 14.2015,
        'lng': 121.1520,
        'description': 'Physical altercation near school gate',
        'status': 'verified',
        'timestamp': '2024-01-14T18:45:00',
    },
    {
        'id': 3,
        'crimeType': 'theft',
        'location': 'Parian Barangay Hall',
        'lat': 14.1998,
        'lng': 121.1545,
        'description': 'Snatched phone from pedestrian',
        'status': 'verified',
        'timestamp': '2024-01-13T14:20:00',
    },
    {
        'id': 4,
        'crimeType': 'vandalism',
        'location': 'Parian Basketball Court',
        'lat': 14.2020,
        'lng': 121.1510,
        'description': 'Graffiti on public walls',
        'status': 'verified',
        'timestamp': '2024-01-12T21:15:00',
    },
    {
        'id': 5,
        'crimeType': 'drug',
        'location': 'Parian Alley 5',
        'lat': 14.2005,
        'lng': 121.1550,
        'description': 'Suspected drug activity',
        'status': 'under investigation',
        'timestamp': '2024-01-11T23:30:00',
    },
    {
        'id': 6,
        'crimeType': 'theft',
        'location': 'Parian Road',
        'lat': 14.2010,
        'lng': 121.1540,
        'description': 'Car break-in',
        'status': 'verified',
        'timestamp': '2024-01-10T20:00:00',
    },
]
