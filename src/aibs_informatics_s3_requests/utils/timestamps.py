"""
aibs_informatics_s3_requests.utils.timestamps
Normalizes request timestamps and renders them in the formats S3 expects on the wire
"""
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional, Union

from botocore.utils import parse_to_aware_datetime

TimestampLike = Union[datetime, str, int, float]

ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
ISO8601_MICROS_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def normalize_timestamp(value: Optional[TimestampLike]) -> Optional[datetime]:
    """Converts a timestamp-like value into a timezone-aware UTC datetime

    Strings are parsed with botocore (ISO 8601, RFC 822 and epoch strings are all accepted).
    Naive datetimes are assumed to already be in UTC.

    Args:
        value (datetime | str | int | float | None): value to normalize

    Raises:
        ValueError: if a string cannot be parsed as a timestamp

    Returns:
        Optional[datetime]: UTC datetime, or None if value is None
    """
    if value is None:
        return None
    return parse_to_aware_datetime(value).astimezone(timezone.utc)


def format_http_date(value: datetime) -> str:
    """Renders an RFC 7231 HTTP-date, e.g. 'Wed, 21 Oct 2015 07:28:00 GMT'"""
    return format_datetime(value.astimezone(timezone.utc).replace(microsecond=0), usegmt=True)


def format_iso8601(value: datetime) -> str:
    value = value.astimezone(timezone.utc)
    if value.microsecond:
        return value.strftime(ISO8601_MICROS_FORMAT)
    return value.strftime(ISO8601_FORMAT)
