from enum import Enum


class S3CannedACL(str, Enum):
    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"
    AWS_EXEC_READ = "aws-exec-read"
    BUCKET_OWNER_READ = "bucket-owner-read"
    BUCKET_OWNER_FULL_CONTROL = "bucket-owner-full-control"


class S3MetadataDirective(str, Enum):
    COPY = "COPY"
    REPLACE = "REPLACE"


class S3TaggingDirective(str, Enum):
    COPY = "COPY"
    REPLACE = "REPLACE"


class S3ServerSideEncryption(str, Enum):
    AES256 = "AES256"
    AWS_KMS = "aws:kms"


class S3StorageClass(str, Enum):
    STANDARD = "STANDARD"
    REDUCED_REDUNDANCY = "REDUCED_REDUNDANCY"
    STANDARD_IA = "STANDARD_IA"
    ONEZONE_IA = "ONEZONE_IA"
    INTELLIGENT_TIERING = "INTELLIGENT_TIERING"
    GLACIER = "GLACIER"
    DEEP_ARCHIVE = "DEEP_ARCHIVE"


class S3RequestPayer(str, Enum):
    REQUESTER = "requester"


class S3ObjectLockMode(str, Enum):
    GOVERNANCE = "GOVERNANCE"
    COMPLIANCE = "COMPLIANCE"


class S3ObjectLockLegalHoldStatus(str, Enum):
    ON = "ON"
    OFF = "OFF"


# Fixed wire constants

S3_REST_XML_CONTENT_TYPE = "application/xml"
S3_CONTENT_TYPE_HEADER = "content-type"
S3_USER_METADATA_HEADER_PREFIX = "x-amz-meta-"

S3_COPY_SOURCE_VERSION_ID_PARAM = "versionId"
