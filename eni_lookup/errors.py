"""
Exceptions raised by the interface and instance lookups.

Callers can tell a missing record apart from a broken upstream call:
NotFound and AmbiguousResult describe the data, UpstreamError wraps the
boto3/botocore failure that stopped the lookup.
"""

from typing import Optional


class EniLookupError(Exception):
    """Base class for all lookup errors."""


class ConfigurationError(EniLookupError):
    """Raised when settings read from the environment are invalid."""


class NotFound(EniLookupError):
    """Raised when a single-identifier lookup matches nothing."""

    def __init__(self, resource: str, identifier: str, message: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} {identifier} not found")


class UnresolvedAttachment(NotFound):
    """Raised when an interface points at an instance the batched lookup did not return."""

    def __init__(self, eni_id: str, instance_id: str):
        self.eni_id = eni_id
        super().__init__(
            'instance',
            instance_id,
            f"instance {instance_id} attached to {eni_id} was not returned by describe_instances",
        )


class AmbiguousResult(EniLookupError):
    """Raised when an identifier matches more than one record."""

    def __init__(self, resource: str, identifier: str, count: int):
        self.resource = resource
        self.identifier = identifier
        self.count = count
        super().__init__(f"{resource} {identifier} matched {count} records")


class UpstreamError(EniLookupError):
    """Raised when the AWS call itself failed. The original exception is kept on .cause."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


def http_status(error: Exception) -> int:
    """HTTP status code used by the API and Lambda handler for a lookup failure."""
    if isinstance(error, ConfigurationError):
        return 500
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, AmbiguousResult):
        return 409
    if isinstance(error, UpstreamError):
        return 502
    if isinstance(error, ValueError):
        return 400
    return 500
