"""Read-only lookups of EC2 network interfaces and their attached instances."""

from eni_lookup.client import EniClient
from eni_lookup.errors import (
    AmbiguousResult,
    EniLookupError,
    NotFound,
    UnresolvedAttachment,
    UpstreamError,
)
from eni_lookup.instances import InstanceResolver
from eni_lookup.interfaces import InterfaceResolver
from eni_lookup.models import Instance, NetworkInterface

__all__ = [
    'AmbiguousResult',
    'EniClient',
    'EniLookupError',
    'Instance',
    'InstanceResolver',
    'InterfaceResolver',
    'NetworkInterface',
    'NotFound',
    'UnresolvedAttachment',
    'UpstreamError',
]
