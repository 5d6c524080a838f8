"""Builders for canned EC2 responses."""

from unittest.mock import MagicMock

from botocore.exceptions import ClientError


class FakeEC2:
    """Wraps a MagicMock boto3 EC2 client with one paginator mock per operation."""

    def __init__(self):
        self.client = MagicMock()
        self.paginators = {
            'describe_network_interfaces': MagicMock(),
            'describe_instances': MagicMock(),
        }
        self.client.get_paginator.side_effect = self.paginators.__getitem__
        self.set_interfaces()
        self.set_reservations()

    @property
    def eni_paginate(self):
        return self.paginators['describe_network_interfaces'].paginate

    @property
    def instance_paginate(self):
        return self.paginators['describe_instances'].paginate

    def set_interfaces(self, *pages):
        self.eni_paginate.return_value = [{'NetworkInterfaces': list(page)} for page in pages]

    def set_reservations(self, *reservations):
        self.instance_paginate.return_value = [{'Reservations': list(reservations)}]


def eni(eni_id, instance_id=None, **extra):
    record = {'NetworkInterfaceId': eni_id}
    if instance_id:
        record['Attachment'] = {'InstanceId': instance_id, 'AttachmentId': f"attach-{eni_id}"}
    record.update(extra)
    return record


def reservation(*instance_ids):
    return {'Instances': [{'InstanceId': instance_id} for instance_id in instance_ids]}


def client_error(code, operation='DescribeNetworkInterfaces'):
    return ClientError({'Error': {'Code': code, 'Message': f"{code} raised"}}, operation)
