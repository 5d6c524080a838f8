"""AWS Lambda entry point for interface and instance lookups."""

import json
import logging
from typing import Any, Dict, List, Optional

from eni_lookup.client import EniClient
from eni_lookup.errors import EniLookupError, http_status

logger = logging.getLogger(__name__)


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'body': json.dumps(body, default=str),
    }


def _id_list(event: Dict[str, Any], key: str) -> Optional[List[str]]:
    """Return event[key] as a list of identifiers (None stays None), rejecting anything else with ValueError."""
    ids = event[key]
    if ids is None:
        return None
    if not isinstance(ids, (list, tuple)) or not all(isinstance(i, str) and i for i in ids):
        raise ValueError(f"{key} must be a list of non-empty strings")
    return list(ids)


def lambda_handler(event: Dict[str, Any], context: Any, client: Optional[EniClient] = None) -> Dict[str, Any]:
    """
    AWS Lambda handler function.

    Handles three event shapes:
    1. {"instance_ids": [...]} - instance lookup
    2. {"eni_ids": [...]} - lookup of specific interfaces
    3. anything else - every interface in the region

    Args:
        event: Lambda event object
        context: Lambda context object
        client: EniClient to use (default: built from the environment)

    Returns:
        Response dictionary
    """
    try:
        client = client or EniClient.from_settings()

        if 'instance_ids' in event:
            instance_ids = _id_list(event, 'instance_ids') or []
            logger.info(f"Resolving {len(instance_ids)} instances")
            instances = client.describe_instances_by_ids(instance_ids)
            return _response(200, {
                'instances': [instance.to_dict() for instance in instances],
                'count': len(instances),
            })

        eni_ids = _id_list(event, 'eni_ids') if 'eni_ids' in event else None
        if eni_ids is None:
            logger.info("Resolving all network interfaces")
        else:
            logger.info(f"Resolving {len(eni_ids)} network interfaces")
        enis = client.describe_enis(eni_ids)
        return _response(200, {
            'network_interfaces': [eni.to_dict() for eni in enis],
            'count': len(enis),
        })

    except (EniLookupError, ValueError) as e:
        logger.error(f"Lookup failed: {e}")
        return _response(http_status(e), {'message': 'Lookup failed', 'error': str(e)})
