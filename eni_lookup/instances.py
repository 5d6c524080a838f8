"""
Instance lookups.

describe_instances groups its results into reservations, and a reservation
may come back with no instances in it. That grouping stops here: callers
only ever get a flat list of Instance values.
"""

import logging
from typing import Iterable, List

from eni_lookup.errors import AmbiguousResult, NotFound, UpstreamError
from eni_lookup.models import Instance
from eni_lookup.upstream import describe, error_code

logger = logging.getLogger(__name__)

INSTANCE_NOT_FOUND_CODES = {'InvalidInstanceID.NotFound', 'InvalidInstanceID.Malformed'}


class InstanceResolver:
    """Resolves instance identifiers into Instance snapshots."""

    def __init__(self, ec2_client):
        self.ec2_client = ec2_client

    def describe_by_ids(self, instance_ids: Iterable[str]) -> List[Instance]:
        """
        Look up a batch of instances with a single describe_instances call.

        Empty reservations contribute nothing, so the result can be shorter
        than the input. An empty input returns an empty list without calling AWS.
        An unknown id makes AWS reject the whole request
        (InvalidInstanceID.NotFound), which surfaces as UpstreamError.

        Args:
            instance_ids: Instance identifiers to resolve

        Returns:
            List of Instance values in upstream order

        Raises:
            UpstreamError: If describe_instances fails
        """
        instance_ids = list(instance_ids)
        if not instance_ids:
            return []

        reservations = describe(
            self.ec2_client,
            'describe_instances',
            'Reservations',
            InstanceIds=instance_ids,
        )

        instances = [
            Instance.from_record(record)
            for reservation in reservations
            for record in reservation.get('Instances') or []
        ]
        logger.info(f"Resolved {len(instances)} of {len(instance_ids)} requested instances")
        return instances

    def describe_by_id(self, instance_id: str) -> Instance:
        """
        Look up exactly one instance.

        Raises:
            ValueError: If instance_id is empty
            NotFound: If AWS knows no such instance
            AmbiguousResult: If more than one record comes back
            UpstreamError: If describe_instances fails for any other reason
        """
        if not instance_id:
            raise ValueError("instance_id must not be empty")

        try:
            instances = self.describe_by_ids([instance_id])
        except UpstreamError as e:
            if error_code(e) in INSTANCE_NOT_FOUND_CODES:
                raise NotFound('instance', instance_id) from e
            raise

        if not instances:
            raise NotFound('instance', instance_id)
        if len(instances) > 1:
            raise AmbiguousResult('instance', instance_id, len(instances))
        return instances[0]
