from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from aibs_informatics_core.models.aws.s3 import S3URI
from aibs_informatics_core.utils.logging import get_logger
from botocore.exceptions import ClientError

from aibs_informatics_s3_requests.core import (
    AWSService,
    get_client_error_code,
    get_client_error_message,
)
from aibs_informatics_s3_requests.exceptions import AWSError
from aibs_informatics_s3_requests.s3.copy_object import CopyObjectRequest

if TYPE_CHECKING:  # pragma: no cover
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import CopyObjectOutputTypeDef
else:
    S3Client = object
    CopyObjectOutputTypeDef = dict


logger = get_logger(__name__)


get_s3_client = AWSService.S3.get_client


def copy_object(
    request: Union[CopyObjectRequest, Mapping[str, Any]],
    region: Optional[str] = None,
    s3_client: Optional[S3Client] = None,
) -> CopyObjectOutputTypeDef:
    """Sends a CopyObject request

    The request is validated before anything is sent.

    Args:
        request (CopyObjectRequest | Mapping[str, Any]): request, or its API member names
        region (Optional[str]): region of client. Ignored if s3_client is provided.
        s3_client (Optional[S3Client]): client to send the request with.

    Raises:
        MissingRequiredField: if the request is missing Bucket, CopySource or Key
        AWSError: if S3 rejects the request

    Returns:
        CopyObjectOutputTypeDef: CopyObject response
    """
    copy_request = CopyObjectRequest.create(request)
    kwargs = copy_request.to_boto3_kwargs()

    s3 = s3_client or get_s3_client(region=region)
    logger.info(f"CopyObjectRequest: {copy_request.to_log_dict()}")
    try:
        response = s3.copy_object(**kwargs)
    except ClientError as e:
        logger.exception(e)
        raise AWSError(
            f"Could not copy {copy_request.copy_source} -> "
            f"{copy_request.bucket}/{copy_request.key}: "
            f"[{get_client_error_code(e)}] {get_client_error_message(e)}"
        ) from e
    return response


def copy_s3_object(
    source_path: S3URI,
    destination_path: S3URI,
    source_version_id: Optional[str] = None,
    region: Optional[str] = None,
    **attrs: Any,
) -> CopyObjectOutputTypeDef:
    logger.info(f"Copying {source_path} -> {destination_path}")
    request = CopyObjectRequest.from_s3_paths(
        source_path, destination_path, source_version_id=source_version_id, **attrs
    )
    return copy_object(request, region=region)
