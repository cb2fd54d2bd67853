"""
aibs_informatics_s3_requests.s3.copy_object
Request parameters for the S3 CopyObject operation
"""
from __future__ import annotations

__all__ = [
    "COPY_OBJECT_MEMBERS",
    "CopyObjectRequest",
    "HttpRequestParts",
    "build_copy_source",
    "decode_copy_source",
]

import logging
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Dict,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)
from urllib.parse import quote, unquote

from aibs_informatics_core.models.aws.s3 import S3URI

from aibs_informatics_s3_requests.constants.s3 import (
    S3_CONTENT_TYPE_HEADER,
    S3_COPY_SOURCE_VERSION_ID_PARAM,
    S3_REST_XML_CONTENT_TYPE,
    S3_USER_METADATA_HEADER_PREFIX,
)
from aibs_informatics_s3_requests.exceptions import MissingRequiredField
from aibs_informatics_s3_requests.s3.members import (
    MemberLocation,
    RequestMember,
    TimestampFormat,
    header,
    header_map,
    render_uri_template,
    serialize_scalar,
    uri,
)
from aibs_informatics_s3_requests.utils.timestamps import (
    TimestampLike,
    format_http_date,
    format_iso8601,
    normalize_timestamp,
)

if TYPE_CHECKING:  # pragma: no cover
    from mypy_boto3_s3.type_defs import CopyObjectRequestRequestTypeDef
else:
    CopyObjectRequestRequestTypeDef = dict


logger = logging.getLogger(__name__)


RFC822 = TimestampFormat.RFC822
ISO8601 = TimestampFormat.ISO8601

COPY_OBJECT_URI_TEMPLATE = "/{Bucket}/{Key+}"

COPY_OBJECT_MEMBERS: Tuple[RequestMember, ...] = (
    header("acl", "ACL", "x-amz-acl"),
    uri("bucket", "Bucket", "Bucket"),
    header("cache_control", "CacheControl", "Cache-Control"),
    header("content_disposition", "ContentDisposition", "Content-Disposition"),
    header("content_encoding", "ContentEncoding", "Content-Encoding"),
    header("content_language", "ContentLanguage", "Content-Language"),
    header("content_type", "ContentType", "Content-Type"),
    header("copy_source", "CopySource", "x-amz-copy-source"),
    header("copy_source_if_match", "CopySourceIfMatch", "x-amz-copy-source-if-match"),
    header(
        "copy_source_if_modified_since",
        "CopySourceIfModifiedSince",
        "x-amz-copy-source-if-modified-since",
        RFC822,
    ),
    header(
        "copy_source_if_none_match", "CopySourceIfNoneMatch", "x-amz-copy-source-if-none-match"
    ),
    header(
        "copy_source_if_unmodified_since",
        "CopySourceIfUnmodifiedSince",
        "x-amz-copy-source-if-unmodified-since",
        RFC822,
    ),
    header("expires", "Expires", "Expires", RFC822),
    header("grant_full_control", "GrantFullControl", "x-amz-grant-full-control"),
    header("grant_read", "GrantRead", "x-amz-grant-read"),
    header("grant_read_acp", "GrantReadACP", "x-amz-grant-read-acp"),
    header("grant_write_acp", "GrantWriteACP", "x-amz-grant-write-acp"),
    uri("key", "Key", "Key"),
    header_map("metadata", "Metadata", S3_USER_METADATA_HEADER_PREFIX),
    header("metadata_directive", "MetadataDirective", "x-amz-metadata-directive"),
    header("tagging_directive", "TaggingDirective", "x-amz-tagging-directive"),
    header("server_side_encryption", "ServerSideEncryption", "x-amz-server-side-encryption"),
    header("storage_class", "StorageClass", "x-amz-storage-class"),
    header(
        "website_redirect_location",
        "WebsiteRedirectLocation",
        "x-amz-website-redirect-location",
    ),
    header(
        "sse_customer_algorithm",
        "SSECustomerAlgorithm",
        "x-amz-server-side-encryption-customer-algorithm",
    ),
    header("sse_customer_key", "SSECustomerKey", "x-amz-server-side-encryption-customer-key"),
    header(
        "sse_customer_key_md5",
        "SSECustomerKeyMD5",
        "x-amz-server-side-encryption-customer-key-MD5",
    ),
    header("sse_kms_key_id", "SSEKMSKeyId", "x-amz-server-side-encryption-aws-kms-key-id"),
    header(
        "sse_kms_encryption_context",
        "SSEKMSEncryptionContext",
        "x-amz-server-side-encryption-context",
    ),
    header(
        "copy_source_sse_customer_algorithm",
        "CopySourceSSECustomerAlgorithm",
        "x-amz-copy-source-server-side-encryption-customer-algorithm",
    ),
    header(
        "copy_source_sse_customer_key",
        "CopySourceSSECustomerKey",
        "x-amz-copy-source-server-side-encryption-customer-key",
    ),
    header(
        "copy_source_sse_customer_key_md5",
        "CopySourceSSECustomerKeyMD5",
        "x-amz-copy-source-server-side-encryption-customer-key-MD5",
    ),
    header("request_payer", "RequestPayer", "x-amz-request-payer"),
    header("tagging", "Tagging", "x-amz-tagging"),
    header("object_lock_mode", "ObjectLockMode", "x-amz-object-lock-mode"),
    header(
        "object_lock_retain_until_date",
        "ObjectLockRetainUntilDate",
        "x-amz-object-lock-retain-until-date",
        ISO8601,
    ),
    header(
        "object_lock_legal_hold_status",
        "ObjectLockLegalHoldStatus",
        "x-amz-object-lock-legal-hold",
    ),
)

COPY_OBJECT_REQUIRED_MEMBERS: Tuple[str, ...] = ("Bucket", "CopySource", "Key")

# Never written to logs
COPY_OBJECT_SENSITIVE_MEMBERS: Tuple[str, ...] = ("SSECustomerKey", "CopySourceSSECustomerKey")

REDACTED = "*** redacted ***"


class HttpRequestParts(NamedTuple):
    headers: Dict[str, str]
    path: str
    query: Dict[str, str]
    body: str


def build_copy_source(bucket: str, key: str, version_id: Optional[str] = None) -> str:
    """Builds the `CopySource` locator for a source object

    The bucket and key are joined by a slash and url-encoded (slashes are preserved).

    Examples:
        build_copy_source("bucket", "path/to/my file.txt")
            -> "bucket/path/to/my%20file.txt"
        build_copy_source("bucket", "key", version_id="abc")
            -> "bucket/key?versionId=abc"

    Args:
        bucket (str): source bucket name
        key (str): source object key
        version_id (Optional[str]): specific version of the source object. Defaults to None.

    Returns:
        str: copy source locator
    """
    copy_source = quote(f"{bucket}/{key}", safe="/~")
    if version_id:
        copy_source += f"?{S3_COPY_SOURCE_VERSION_ID_PARAM}={version_id}"
    return copy_source


def decode_copy_source(copy_source: str) -> str:
    """Decodes the bucket/key part of a `CopySource` locator, keeping any version suffix

    boto3 url-encodes string copy sources itself, so it must be given the decoded form.

    Examples:
        decode_copy_source("bucket/my%20file%3D1.txt?versionId=abc")
            -> "bucket/my file=1.txt?versionId=abc"
    """
    path, sep, version_id = copy_source.partition(f"?{S3_COPY_SOURCE_VERSION_ID_PARAM}=")
    return unquote(path) + sep + version_id


@dataclass
class CopyObjectRequest:
    """Parameters of a single S3 CopyObject call

    Attributes mirror the members of the CopyObject API input. Timestamp attributes accept
    datetimes, parseable strings or epoch seconds and are always stored as UTC datetimes.

    Use `set` to update members in place (returns the same request) or `with_changes` to get
    an updated copy. Call `validate` (or `to_http_request` / `to_boto3_kwargs`, which call it)
    before the request is handed off to be sent.
    """

    HTTP_METHOD: ClassVar[str] = "PUT"
    URI_TEMPLATE: ClassVar[str] = COPY_OBJECT_URI_TEMPLATE
    MEMBERS: ClassVar[Tuple[RequestMember, ...]] = COPY_OBJECT_MEMBERS
    REQUIRED_MEMBERS: ClassVar[Tuple[str, ...]] = COPY_OBJECT_REQUIRED_MEMBERS

    acl: Optional[str] = None
    bucket: Optional[str] = None
    cache_control: Optional[str] = None
    content_disposition: Optional[str] = None
    content_encoding: Optional[str] = None
    content_language: Optional[str] = None
    content_type: Optional[str] = None
    copy_source: Optional[str] = None
    copy_source_if_match: Optional[str] = None
    copy_source_if_modified_since: Optional[TimestampLike] = None
    copy_source_if_none_match: Optional[str] = None
    copy_source_if_unmodified_since: Optional[TimestampLike] = None
    expires: Optional[TimestampLike] = None
    grant_full_control: Optional[str] = None
    grant_read: Optional[str] = None
    grant_read_acp: Optional[str] = None
    grant_write_acp: Optional[str] = None
    key: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    metadata_directive: Optional[str] = None
    tagging_directive: Optional[str] = None
    server_side_encryption: Optional[str] = None
    storage_class: Optional[str] = None
    website_redirect_location: Optional[str] = None
    sse_customer_algorithm: Optional[str] = None
    sse_customer_key: Optional[str] = None
    sse_customer_key_md5: Optional[str] = None
    sse_kms_key_id: Optional[str] = None
    sse_kms_encryption_context: Optional[str] = None
    copy_source_sse_customer_algorithm: Optional[str] = None
    copy_source_sse_customer_key: Optional[str] = None
    copy_source_sse_customer_key_md5: Optional[str] = None
    request_payer: Optional[str] = None
    tagging: Optional[str] = None
    object_lock_mode: Optional[str] = None
    object_lock_retain_until_date: Optional[TimestampLike] = None
    object_lock_legal_hold_status: Optional[str] = None

    def __setattr__(self, attr: str, value: Any) -> None:
        super().__setattr__(attr, self._normalize_value(attr, value))

    @classmethod
    def _normalize_value(cls, attr: str, value: Any) -> Any:
        member = {member.attr: member for member in cls.MEMBERS}.get(attr)
        if member is None:
            return value
        if member.is_timestamp:
            return normalize_timestamp(value)
        if member.location == MemberLocation.HEADERS:
            return dict(value or {})
        return value

    # --------------------------------------------------------------------------
    # Construction
    # --------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, input: Mapping[str, Any]) -> CopyObjectRequest:
        """Creates a request from API member names (e.g. {"Bucket": ..., "CopySource": ...})

        Unknown member names are ignored.
        """
        attrs_by_name = {member.name: member.attr for member in cls.MEMBERS}
        kwargs: Dict[str, Any] = {}
        for name, value in input.items():
            if name not in attrs_by_name:
                logger.warning(f"Ignoring unknown {cls.__name__} member {name!r}")
                continue
            kwargs[attrs_by_name[name]] = value
        return cls(**kwargs)

    @classmethod
    def create(cls, input: Union[CopyObjectRequest, Mapping[str, Any]]) -> CopyObjectRequest:
        if isinstance(input, cls):
            return input
        return cls.from_dict(input)

    @classmethod
    def from_s3_paths(
        cls,
        source_path: S3URI,
        destination_path: S3URI,
        source_version_id: Optional[str] = None,
        **attrs: Any,
    ) -> CopyObjectRequest:
        return cls(
            bucket=destination_path.bucket_name,
            key=destination_path.key,
            copy_source=build_copy_source(
                source_path.bucket_name, source_path.key, version_id=source_version_id
            ),
            **attrs,
        )

    # --------------------------------------------------------------------------
    # Mutation
    # --------------------------------------------------------------------------

    def set(self, **changes: Any) -> CopyObjectRequest:
        """Updates attributes in place and returns this request

        Nothing is changed if any of the new values is rejected.
        """
        field_names = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - field_names)
        if unknown:
            raise TypeError(f"{type(self).__name__} has no attributes {unknown}")
        normalized = {attr: self._normalize_value(attr, value) for attr, value in changes.items()}
        for attr, value in normalized.items():
            setattr(self, attr, value)
        return self

    def with_changes(self, **changes: Any) -> CopyObjectRequest:
        """Returns a copy of this request with the given attributes replaced"""
        return replace(self, **changes)

    # --------------------------------------------------------------------------
    # Validation
    # --------------------------------------------------------------------------

    def validate(self) -> None:
        """Checks that all required members are set

        Raises:
            MissingRequiredField: for the first required member that is not set
        """
        for member in self._members(*self.REQUIRED_MEMBERS):
            value = getattr(self, member.attr)
            if value is None or value == "":
                raise MissingRequiredField(member.name, type(self).__name__)

    # --------------------------------------------------------------------------
    # Serialization
    # --------------------------------------------------------------------------

    def to_headers(self) -> Dict[str, str]:
        headers = {S3_CONTENT_TYPE_HEADER: S3_REST_XML_CONTENT_TYPE}
        for member in self.MEMBERS:
            value = getattr(self, member.attr)
            if member.location == MemberLocation.HEADER and value is not None:
                headers[member.location_name] = self._serialize_header(member, value)
            elif member.location == MemberLocation.HEADERS:
                for name, item in value.items():
                    headers[f"{member.location_name}{name}"] = serialize_scalar(item)
        return headers

    def to_path(self) -> str:
        labels = {
            member.location_name: getattr(self, member.attr)
            for member in self.MEMBERS
            if member.location == MemberLocation.URI
        }
        return render_uri_template(self.URI_TEMPLATE, labels)

    def to_query(self) -> Dict[str, str]:
        return {}

    def to_body(self) -> str:
        return ""

    def to_http_request(self) -> HttpRequestParts:
        self.validate()
        return HttpRequestParts(
            headers=self.to_headers(),
            path=self.to_path(),
            query=self.to_query(),
            body=self.to_body(),
        )

    def to_boto3_kwargs(self) -> CopyObjectRequestRequestTypeDef:
        """Converts request to keyword arguments for `S3.Client.copy_object`"""
        self.validate()
        kwargs = self.to_dict()
        kwargs["CopySource"] = decode_copy_source(kwargs["CopySource"])
        return kwargs

    def to_dict(self) -> Dict[str, Any]:
        """Returns set members keyed by API member name. Does not validate."""
        result: Dict[str, Any] = {}
        for member in self.MEMBERS:
            value = getattr(self, member.attr)
            if value is None or (member.location == MemberLocation.HEADERS and not value):
                continue
            if member.location == MemberLocation.HEADERS:
                value = {k: serialize_scalar(v) for k, v in value.items()}
            elif not member.is_timestamp:
                value = serialize_scalar(value)
            result[member.name] = value
        return result

    def to_log_dict(self) -> Dict[str, Any]:
        result = self.to_dict()
        for name in COPY_OBJECT_SENSITIVE_MEMBERS:
            if name in result:
                result[name] = REDACTED
        return result

    def _members(self, *names: str) -> Tuple[RequestMember, ...]:
        by_name = {member.name: member for member in self.MEMBERS}
        return tuple(by_name[name] for name in names)

    @staticmethod
    def _serialize_header(member: RequestMember, value: Any) -> str:
        if isinstance(value, datetime):
            if member.timestamp_format == TimestampFormat.ISO8601:
                return format_iso8601(value)
            return format_http_date(value)
        return serialize_scalar(value)
