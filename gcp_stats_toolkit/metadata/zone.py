"""
Zone path parsing.

The metadata server reports the instance zone as
projects/[NUMERIC_PROJECT_ID]/zones/[ZONE], e.g.
projects/123/zones/us-central1-a. The region is the zone name without its
trailing "-<letter>".
"""

from ..config.constants import ERROR_MESSAGES
from ..utils.exceptions import InvalidArgumentError

MIN_ZONE_LENGTH = 3


def _last_segment(raw_zone_path: str) -> str:
    if '/' not in raw_zone_path:
        raise InvalidArgumentError(
            ERROR_MESSAGES['invalid_zone_path'].format(value=raw_zone_path),
            details={'input_argument': raw_zone_path}
        )
    segment = raw_zone_path.rsplit('/', 1)[-1]
    if len(segment) < MIN_ZONE_LENGTH:
        raise InvalidArgumentError(
            ERROR_MESSAGES['invalid_zone_path'].format(value=raw_zone_path),
            details={'input_argument': raw_zone_path}
        )
    return segment


def extract_zone(raw_zone_path: str) -> str:
    """Return the zone name, e.g. us-central1-a"""
    return _last_segment(raw_zone_path)


def extract_region(raw_zone_path: str) -> str:
    """Return the region name, e.g. us-central1"""
    return _last_segment(raw_zone_path)[:-2]
