import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from aibs_informatics_core.utils.os_operations import get_env_var
from boto3.session import Session
from botocore.exceptions import ClientError

from aibs_informatics_s3_requests.exceptions import AWSError

if TYPE_CHECKING:  # pragma: no cover
    from botocore.client import BaseClient
else:
    BaseClient = object


logger = logging.getLogger(__name__)


AWS_REGION_VAR = "AWS_REGION"
AWS_DEFAULT_REGION_VAR = "AWS_DEFAULT_REGION"
REGION_VAR = "REGION"

REGION_PATTERN = re.compile(r"^[a-z]{2}(?:-gov|-iso[a-z]?)?-[a-z]+-\d+$")


def get_region(region: Optional[str] = None) -> str:
    """Resolves an AWS region

    Resolution order:
        1. `region` argument
        2. boto3 Session region
        3. env vars AWS_REGION, AWS_DEFAULT_REGION, REGION (in that order)

    Raises:
        AWSError: if the region cannot be resolved or is not a valid region name
    """
    if region is None:
        region = Session().region_name
    if region is None:
        for var in (AWS_REGION_VAR, AWS_DEFAULT_REGION_VAR, REGION_VAR):
            region = get_env_var(var)
            if region:
                break
    if not region:
        raise AWSError("Could not resolve region from session or environment")
    if not REGION_PATTERN.match(region):
        raise AWSError(f"{region} is not a valid AWS region")
    return region


def get_client(service: str, region: Optional[str] = None, **kwargs: Any) -> BaseClient:
    session = Session()
    return session.client(service, region_name=get_region(region), **kwargs)


def get_client_error_code(client_error: ClientError) -> str:
    return client_error.response.get("Error", {}).get("Code", "Unknown")


def get_client_error_message(client_error: ClientError) -> str:
    return client_error.response.get("Error", {}).get("Message", str(client_error))


class AWSService(str, Enum):
    S3 = "s3"

    def get_client(self, region: Optional[str] = None, **kwargs: Any) -> BaseClient:
        return get_client(self.value, region=region, **kwargs)
