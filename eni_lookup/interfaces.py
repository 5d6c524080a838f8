"""
Network interface lookups.

Every lookup runs as two phases:

1. describe_network_interfaces with the requested filter (or none)
2. one describe_instances call for the distinct set of attached instance ids,
   merged back onto every interface that references them

Phase 2 is skipped entirely when no interface is attached to an instance.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from eni_lookup.errors import AmbiguousResult, NotFound, UnresolvedAttachment, UpstreamError
from eni_lookup.instances import InstanceResolver
from eni_lookup.models import Instance, NetworkInterface
from eni_lookup.upstream import describe, error_code

logger = logging.getLogger(__name__)

ENI_NOT_FOUND_CODES = {'InvalidNetworkInterfaceID.NotFound', 'InvalidNetworkInterfaceID.Malformed'}


class InterfaceResolver:
    """Resolves network interfaces and the instances they are attached to."""

    def __init__(self, ec2_client, instance_resolver: Optional[InstanceResolver] = None):
        """
        Args:
            ec2_client: boto3 EC2 client
            instance_resolver: Resolver used for the attachment phase. Defaults
                to one sharing ec2_client.
        """
        self.ec2_client = ec2_client
        self.instance_resolver = instance_resolver or InstanceResolver(ec2_client)

    def describe_all(self) -> List[NetworkInterface]:
        """Return every interface visible to the credentials, with instances attached."""
        logger.info("Fetching all network interfaces...")
        return self._resolve(None)

    def describe_by_ids(self, eni_ids: Iterable[str]) -> List[NetworkInterface]:
        """
        Return the given interfaces, with instances attached.

        An empty collection means "no interfaces" and returns an empty list
        without calling AWS. Use describe_all() for an unfiltered listing.

        AWS rejects the whole request when any id in it does not exist
        (InvalidNetworkInterfaceID.NotFound). That failure is raised as
        UpstreamError here, since an empty list would hide the ids that do
        exist. Only describe_by_id turns it into NotFound.

        Args:
            eni_ids: Interface identifiers to resolve

        Returns:
            List of NetworkInterface values in upstream order

        Raises:
            AmbiguousResult: If AWS returns the same interface id twice
            UnresolvedAttachment: If an attached instance cannot be resolved
            UpstreamError: If either describe call fails, including an unknown id
        """
        eni_ids = list(eni_ids)
        if not eni_ids:
            return []

        logger.info(f"Fetching {len(eni_ids)} network interfaces...")
        return self._resolve(eni_ids)

    def describe_by_id(self, eni_id: str) -> NetworkInterface:
        """
        Return exactly one interface, with its instance attached.

        Raises:
            ValueError: If eni_id is empty
            NotFound: If AWS knows no such interface
            AmbiguousResult: If more than one record comes back
            UpstreamError: If a describe call fails for any other reason
        """
        if not eni_id:
            raise ValueError("eni_id must not be empty")

        try:
            enis = self.describe_by_ids([eni_id])
        except UpstreamError as e:
            if e.operation == 'describe_network_interfaces' and error_code(e) in ENI_NOT_FOUND_CODES:
                raise NotFound('network interface', eni_id) from e
            raise

        if not enis:
            raise NotFound('network interface', eni_id)
        if len(enis) > 1:
            raise AmbiguousResult('network interface', eni_id, len(enis))
        return enis[0]

    def _resolve(self, eni_ids: Optional[List[str]]) -> List[NetworkInterface]:
        params = {} if eni_ids is None else {'NetworkInterfaceIds': eni_ids}
        records = describe(self.ec2_client, 'describe_network_interfaces', 'NetworkInterfaces', **params)
        logger.info(f"Found {len(records)} network interfaces")

        enis = [NetworkInterface.from_record(record) for record in records]
        counts = Counter(eni.id for eni in enis)
        for eni_id, count in counts.items():
            if count > 1:
                raise AmbiguousResult('network interface', eni_id, count)

        return self._attach_instances(enis)

    def _attach_instances(self, enis: List[NetworkInterface]) -> List[NetworkInterface]:
        # A set, not a list: one instance can host several interfaces
        instance_ids = {eni.attached_instance_id for eni in enis if eni.is_attached}
        if not instance_ids:
            logger.debug("No attached instances, skipping describe_instances")
            return enis

        instances = self._index_instances(self.instance_resolver.describe_by_ids(sorted(instance_ids)))

        merged = []
        for eni in enis:
            if not eni.is_attached:
                merged.append(eni)
                continue
            instance = instances.get(eni.attached_instance_id)
            if instance is None:
                raise UnresolvedAttachment(eni.id, eni.attached_instance_id)
            merged.append(eni.with_instance(instance))
        return merged

    @staticmethod
    def _index_instances(instances: List[Instance]) -> Dict[str, Instance]:
        counts = Counter(instance.id for instance in instances)
        for instance_id, count in counts.items():
            if count > 1:
                raise AmbiguousResult('instance', instance_id, count)
        return {instance.id: instance for instance in instances}
