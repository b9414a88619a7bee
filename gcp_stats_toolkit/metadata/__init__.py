"""Placement discovery module for the GCP stats toolkit"""

from .client import MetadataClient, on_gcp
from .zone import extract_region, extract_zone
from .resolver import (
    PlacementInfo, PlacementResolver, GceResolver, EnvironmentResolver, select_resolver
)

__all__ = [
    'MetadataClient',
    'on_gcp',
    'extract_region',
    'extract_zone',
    'PlacementInfo',
    'PlacementResolver',
    'GceResolver',
    'EnvironmentResolver',
    'select_resolver'
]
