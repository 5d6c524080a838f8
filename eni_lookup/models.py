"""
Read-only snapshots of EC2 network interfaces and instances.

Both types are built from the raw dictionaries boto3 returns and never
mutated afterwards. An interface keeps the attached instance id straight
from its attachment record; the full Instance is merged in by the
interface resolver once the batched instance lookup has run.
"""

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional


def convert_datetime_to_string(obj: Any) -> Any:
    """
    Recursively convert datetime objects to ISO format strings.

    Args:
        obj: Object to convert (can be dict, list, datetime, or primitive)

    Returns:
        Converted object with datetime values as strings
    """
    if isinstance(obj, datetime):
        return obj.isoformat()
    elif isinstance(obj, dict):
        return {k: convert_datetime_to_string(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [convert_datetime_to_string(item) for item in obj]
    else:
        return obj


def tags_to_dict(tags: Optional[List[Dict[str, str]]]) -> Dict[str, str]:
    return {tag['Key']: tag['Value'] for tag in tags or []}


@dataclass(frozen=True)
class Instance:
    """An EC2 instance. Everything beyond the id is informational."""

    id: str
    state: str = 'unknown'
    instance_type: str = ''
    private_ip: Optional[str] = None
    vpc_id: Optional[str] = None
    subnet_id: Optional[str] = None
    launch_time: Optional[datetime] = None
    tags: Dict[str, str] = field(default_factory=dict, hash=False)
    raw: Dict[str, Any] = field(default_factory=dict, hash=False, repr=False)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Instance':
        return cls(
            id=record['InstanceId'],
            state=record.get('State', {}).get('Name', 'unknown'),
            instance_type=record.get('InstanceType', ''),
            private_ip=record.get('PrivateIpAddress'),
            vpc_id=record.get('VpcId'),
            subnet_id=record.get('SubnetId'),
            launch_time=record.get('LaunchTime'),
            tags=tags_to_dict(record.get('Tags')),
            raw=record,
        )

    @property
    def name(self) -> str:
        return self.tags.get('Name', self.id)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop('raw')
        data['name'] = self.name
        return convert_datetime_to_string(data)


@dataclass(frozen=True)
class NetworkInterface:
    """
    An elastic network interface.

    attached_instance_id is known as soon as the raw record is parsed.
    attached_instance stays None until the resolver merges the instance in,
    and for interfaces that are not attached to an instance at all.
    """

    id: str
    attached_instance_id: Optional[str] = None
    attached_instance: Optional[Instance] = None
    attach_time: Optional[datetime] = None
    vpc_id: Optional[str] = None
    subnet_id: Optional[str] = None
    availability_zone: Optional[str] = None
    status: str = 'unknown'
    interface_type: str = 'interface'
    description: str = ''
    mac_address: Optional[str] = None
    private_ip_addresses: List[str] = field(default_factory=list, hash=False)
    public_ips: List[str] = field(default_factory=list, hash=False)
    security_group_ids: List[str] = field(default_factory=list, hash=False)
    tags: Dict[str, str] = field(default_factory=dict, hash=False)
    raw: Dict[str, Any] = field(default_factory=dict, hash=False, repr=False)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'NetworkInterface':
        # Managed-service ENIs (Lambda, ELB, ...) carry an attachment without an InstanceId
        attachment = record.get('Attachment') or {}
        return cls(
            id=record['NetworkInterfaceId'],
            attached_instance_id=attachment.get('InstanceId') or None,
            attach_time=attachment.get('AttachTime'),
            vpc_id=record.get('VpcId'),
            subnet_id=record.get('SubnetId'),
            availability_zone=record.get('AvailabilityZone'),
            status=record.get('Status', 'unknown'),
            interface_type=record.get('InterfaceType', 'interface'),
            description=record.get('Description', ''),
            mac_address=record.get('MacAddress'),
            private_ip_addresses=[
                addr['PrivateIpAddress']
                for addr in record.get('PrivateIpAddresses', [])
                if addr.get('PrivateIpAddress')
            ],
            public_ips=[
                addr.get('Association', {}).get('PublicIp')
                for addr in record.get('PrivateIpAddresses', [])
                if addr.get('Association', {}).get('PublicIp')
            ],
            security_group_ids=[sg['GroupId'] for sg in record.get('Groups', [])],
            tags=tags_to_dict(record.get('TagSet')),
            raw=record,
        )

    @property
    def is_attached(self) -> bool:
        return self.attached_instance_id is not None

    def with_instance(self, instance: Instance) -> 'NetworkInterface':
        """Return a copy with the resolved instance merged in."""
        if instance.id != self.attached_instance_id:
            raise ValueError(
                f"instance {instance.id} is not the one attached to {self.id} "
                f"({self.attached_instance_id})"
            )
        return replace(self, attached_instance=instance)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'attached_instance_id': self.attached_instance_id,
            'attach_time': self.attach_time,
            'attached_instance': self.attached_instance.to_dict() if self.attached_instance else None,
            'vpc_id': self.vpc_id,
            'subnet_id': self.subnet_id,
            'availability_zone': self.availability_zone,
            'status': self.status,
            'interface_type': self.interface_type,
            'description': self.description,
            'mac_address': self.mac_address,
            'private_ip_addresses': list(self.private_ip_addresses),
            'public_ips': list(self.public_ips),
            'security_group_ids': list(self.security_group_ids),
            'tags': dict(self.tags),
        }
        return convert_datetime_to_string(data)
