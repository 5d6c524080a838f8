"""
Environment-driven settings and boto3 session construction.

When both an account and a cross-account role name are configured, the
session runs on credentials obtained from sts.assume_role.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from eni_lookup.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_READ_TIMEOUT = 30
ROLE_SESSION_NAME = 'eni-lookup'


@dataclass(frozen=True)
class Settings:
    region: Optional[str] = None
    account: Optional[str] = None
    role_name: Optional[str] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    read_timeout: int = DEFAULT_READ_TIMEOUT
    log_level: str = 'INFO'

    @property
    def role_arn(self) -> Optional[str]:
        if self.account and self.role_name:
            return f"arn:aws:iam::{self.account}:role/{self.role_name}"
        return None


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(name)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If a numeric setting is not an integer
    """
    if environ is None:
        environ = os.environ

    return Settings(
        region=environ.get('AWS_REGION') or environ.get('AWS_DEFAULT_REGION'),
        account=environ.get('ENI_LOOKUP_ACCOUNT') or None,
        role_name=environ.get('IAM_CROSS_ACCOUNT_ROLE') or None,
        max_attempts=_int_setting(environ, 'ENI_LOOKUP_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS),
        read_timeout=_int_setting(environ, 'ENI_LOOKUP_READ_TIMEOUT', DEFAULT_READ_TIMEOUT),
        log_level=environ.get('LOG_LEVEL', 'INFO').upper(),
    )


def botocore_config(settings: Settings) -> Config:
    return Config(
        retries={'max_attempts': settings.max_attempts, 'mode': 'standard'},
        read_timeout=settings.read_timeout,
    )


def create_session(settings: Settings) -> boto3.Session:
    """
    Create a boto3 session, assuming the cross-account role when configured.

    Raises:
        UpstreamError: If sts.assume_role fails
    """
    role_arn = settings.role_arn
    if not role_arn:
        return boto3.Session(region_name=settings.region)

    logger.info(f"Assuming role {settings.role_name} in account {settings.account}")
    sts_client = boto3.client('sts', region_name=settings.region)
    try:
        assumed_role = sts_client.assume_role(
            RoleArn=role_arn,
            RoleSessionName=ROLE_SESSION_NAME,
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error assuming role {role_arn}: {e}")
        raise UpstreamError('assume_role', e) from e

    credentials = assumed_role['Credentials']
    return boto3.Session(
        aws_access_key_id=credentials['AccessKeyId'],
        aws_secret_access_key=credentials['SecretAccessKey'],
        aws_session_token=credentials['SessionToken'],
        region_name=settings.region,
    )
