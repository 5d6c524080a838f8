"""Paginated EC2 describe calls with botocore failures wrapped as UpstreamError."""

import logging
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from eni_lookup.errors import UpstreamError

logger = logging.getLogger(__name__)


def describe(ec2_client, operation: str, result_key: str, **params: Any) -> List[Dict[str, Any]]:
    """
    Run a describe_* operation through its paginator and collect every page.

    Args:
        ec2_client: boto3 EC2 client
        operation: Paginator name, e.g. 'describe_network_interfaces'
        result_key: Key holding the records in each page
        **params: Request parameters passed to paginate()

    Returns:
        Records from all pages, in upstream order

    Raises:
        UpstreamError: If any page request fails
    """
    logger.debug(f"{operation} {params or '(no filter)'}")
    records = []

    try:
        paginator = ec2_client.get_paginator(operation)
        for page in paginator.paginate(**params):
            records.extend(page.get(result_key, []))
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error calling {operation}: {e}")
        raise UpstreamError(operation, e) from e

    return records


def error_code(error: UpstreamError) -> Optional[str]:
    """Return the AWS error code behind an UpstreamError, if the cause carries one."""
    if isinstance(error.cause, ClientError):
        return error.cause.response.get('Error', {}).get('Code')
    return None
