"""Entry point bundling both resolvers over one EC2 client."""

import logging
from typing import Iterable, List, Optional

from eni_lookup.config import Settings, botocore_config, create_session, load_settings
from eni_lookup.instances import InstanceResolver
from eni_lookup.interfaces import InterfaceResolver
from eni_lookup.models import Instance, NetworkInterface

logger = logging.getLogger(__name__)


class EniClient:
    """Read-only lookups of network interfaces and instances."""

    def __init__(self, ec2_client):
        self.ec2_client = ec2_client
        self.instances = InstanceResolver(ec2_client)
        self.interfaces = InterfaceResolver(ec2_client, self.instances)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'EniClient':
        """Build a client from Settings (default: read from the environment)."""
        settings = settings or load_settings()
        session = create_session(settings)
        ec2_client = session.client('ec2', config=botocore_config(settings))
        logger.info(f"Initialized EC2 client in region {session.region_name}")
        return cls(ec2_client)

    def describe_eni_by_id(self, eni_id: str) -> NetworkInterface:
        return self.interfaces.describe_by_id(eni_id)

    def describe_enis(self, eni_ids: Optional[Iterable[str]] = None) -> List[NetworkInterface]:
        """
        Resolve interfaces.

        eni_ids=None lists every interface; an empty collection returns an
        empty list.
        """
        if eni_ids is None:
            return self.interfaces.describe_all()
        return self.interfaces.describe_by_ids(eni_ids)

    def describe_instance_by_id(self, instance_id: str) -> Instance:
        return self.instances.describe_by_id(instance_id)

    def describe_instances_by_ids(self, instance_ids: Iterable[str]) -> List[Instance]:
        return self.instances.describe_by_ids(instance_ids)
