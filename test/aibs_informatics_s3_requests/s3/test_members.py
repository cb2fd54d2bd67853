from pytest import mark, param

from aibs_informatics_s3_requests.constants.s3 import S3StorageClass
from aibs_informatics_s3_requests.s3.members import (
    MemberLocation,
    TimestampFormat,
    header,
    render_uri_template,
    serialize_scalar,
    uri,
)


@mark.parametrize(
    "template, labels, expected",
    [
        param("/{Bucket}/{Key+}", {"Bucket": "b", "Key": "k"}, "/b/k", id="simple"),
        param("/{Bucket}/{Key+}", {}, "//", id="missing labels are empty"),
        param("/{Bucket}/{Key+}", {"Bucket": None, "Key": None}, "//", id="null labels are empty"),
        param(
            "/{Bucket}/{Key+}",
            {"Bucket": "b", "Key": "path/to/my file~1.txt"},
            "/b/path/to/my%20file~1.txt",
            id="greedy label keeps slashes",
        ),
        param("/{Bucket}", {"Bucket": "a/b"}, "/a%2Fb", id="non-greedy label encodes slashes"),
    ],
)
def test__render_uri_template(template, labels, expected):
    assert render_uri_template(template, labels) == expected


def test__serialize_scalar__uses_enum_values():
    assert serialize_scalar(S3StorageClass.GLACIER) == "GLACIER"
    assert serialize_scalar("GLACIER") == "GLACIER"


def test__member_builders__set_locations():
    assert header("expires", "Expires", "Expires", TimestampFormat.RFC822).is_timestamp
    assert not header("acl", "ACL", "x-amz-acl").is_timestamp
    assert uri("key", "Key", "Key").location == MemberLocation.URI
