import re
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional
from urllib.parse import quote

URI_LABEL_PATTERN = re.compile(r"\{(?P<name>[^}+]+)(?P<greedy>\+?)\}")


class MemberLocation(str, Enum):
    HEADER = "header"
    HEADERS = "headers"
    URI = "uri"


class TimestampFormat(str, Enum):
    RFC822 = "rfc822"
    ISO8601 = "iso8601"


class RequestMember(NamedTuple):
    """Static description of a request member and where it goes on the wire

    Attributes:
        attr (str): attribute name on the request object
        name (str): member name as it appears in the API model (e.g. "CopySource")
        location (MemberLocation): part of the HTTP request the member is serialized into
        location_name (str): header name, header prefix or uri label
        timestamp_format (TimestampFormat | None): wire format, for timestamp members only
    """

    attr: str
    name: str
    location: MemberLocation
    location_name: str
    timestamp_format: Optional[TimestampFormat] = None

    @property
    def is_timestamp(self) -> bool:
        return self.timestamp_format is not None


def header(
    attr: str, name: str, header_name: str, timestamp_format: Optional[TimestampFormat] = None
) -> RequestMember:
    return RequestMember(attr, name, MemberLocation.HEADER, header_name, timestamp_format)


def uri(attr: str, name: str, label: str) -> RequestMember:
    return RequestMember(attr, name, MemberLocation.URI, label)


def header_map(attr: str, name: str, prefix: str) -> RequestMember:
    return RequestMember(attr, name, MemberLocation.HEADERS, prefix)


def serialize_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def render_uri_template(template: str, labels: Mapping[str, Any]) -> str:
    """Substitutes uri labels into a request uri template

    Labels are written as `{Name}` or, for greedy labels that may contain slashes, `{Name+}`.
    Missing or null labels render as an empty string.

    Examples:
        render_uri_template("/{Bucket}/{Key+}", {"Bucket": "b", "Key": "path/to k"})
            -> "/b/path/to%20k"
    """

    def _render(match: "re.Match[str]") -> str:
        value = labels.get(match.group("name"))
        if value is None:
            return ""
        safe = "/~" if match.group("greedy") else "~"
        return quote(serialize_scalar(value), safe=safe)

    return URI_LABEL_PATTERN.sub(_render, template)
