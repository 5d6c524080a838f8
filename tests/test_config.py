from unittest.mock import MagicMock, patch

import pytest

from eni_lookup.config import Settings, botocore_config, create_session, load_settings
from eni_lookup.errors import ConfigurationError, UpstreamError
from helpers import client_error


def test_load_settings_defaults():
    settings = load_settings({})

    assert settings == Settings()
    assert settings.role_arn is None


def test_load_settings_from_environment():
    settings = load_settings({
        'AWS_DEFAULT_REGION': 'eu-central-1',
        'ENI_LOOKUP_ACCOUNT': '123456789012',
        'IAM_CROSS_ACCOUNT_ROLE': 'eagle-eye-read',
        'ENI_LOOKUP_MAX_ATTEMPTS': '5',
        'LOG_LEVEL': 'debug',
    })

    assert settings.region == 'eu-central-1'
    assert settings.max_attempts == 5
    assert settings.log_level == 'DEBUG'
    assert settings.role_arn == 'arn:aws:iam::123456789012:role/eagle-eye-read'


def test_aws_region_takes_precedence():
    assert load_settings({'AWS_REGION': 'us-east-1', 'AWS_DEFAULT_REGION': 'eu-west-1'}).region == 'us-east-1'


def test_load_settings_rejects_bad_integer():
    with pytest.raises(ConfigurationError):
        load_settings({'ENI_LOOKUP_READ_TIMEOUT': 'soon'})


def test_botocore_config():
    config = botocore_config(Settings(max_attempts=7, read_timeout=12))

    assert config.retries == {'max_attempts': 7, 'mode': 'standard'}
    assert config.read_timeout == 12


def test_create_session_without_role():
    with patch('eni_lookup.config.boto3') as boto3:
        create_session(Settings(region='eu-central-1'))

    boto3.Session.assert_called_once_with(region_name='eu-central-1')
    boto3.client.assert_not_called()


def test_create_session_assumes_role():
    sts = MagicMock()
    sts.assume_role.return_value = {
        'Credentials': {'AccessKeyId': 'AKIA', 'SecretAccessKey': 'secret', 'SessionToken': 'token'}
    }
    with patch('eni_lookup.config.boto3') as boto3:
        boto3.client.return_value = sts
        create_session(Settings(region='eu-central-1', account='123456789012', role_name='reader'))

    sts.assume_role.assert_called_once_with(
        RoleArn='arn:aws:iam::123456789012:role/reader',
        RoleSessionName='eni-lookup',
    )
    boto3.Session.assert_called_once_with(
        aws_access_key_id='AKIA',
        aws_secret_access_key='secret',
        aws_session_token='token',
        region_name='eu-central-1',
    )


def test_create_session_role_failure():
    sts = MagicMock()
    sts.assume_role.side_effect = client_error('AccessDenied', 'AssumeRole')
    with patch('eni_lookup.config.boto3') as boto3:
        boto3.client.return_value = sts
        with pytest.raises(UpstreamError) as exc_info:
            create_session(Settings(account='123456789012', role_name='reader'))

    assert exc_info.value.operation == 'assume_role'
