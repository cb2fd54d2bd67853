from aibs_informatics_s3_requests.s3.copy_object import (
    COPY_OBJECT_MEMBERS,
    CopyObjectRequest,
    HttpRequestParts,
    build_copy_source,
    decode_copy_source,
)
from aibs_informatics_s3_requests.s3.core import copy_object, copy_s3_object, get_s3_client
