from unittest.mock import patch

import pytest

from eni_lookup.api import app
from eni_lookup.client import EniClient
from eni_lookup.errors import ConfigurationError
from helpers import client_error, eni, reservation


@pytest.fixture
def api(ec2):
    app.config['TESTING'] = True
    app.config['ENI_CLIENT'] = EniClient(ec2.client)
    yield app.test_client()
    app.config.pop('ENI_CLIENT', None)


def test_list_all_enis(api, ec2):
    ec2.set_interfaces([eni('eni-1', 'i-1'), eni('eni-2')])
    ec2.set_reservations(reservation('i-1'))

    response = api.get('/api/eni')

    assert response.status_code == 200
    body = response.get_json()
    assert body['metadata']['count'] == 2
    assert body['network_interfaces'][0]['attached_instance']['id'] == 'i-1'
    assert body['network_interfaces'][1]['attached_instance'] is None
    ec2.eni_paginate.assert_called_once_with()


def test_list_enis_by_id(api, ec2):
    ec2.set_interfaces([eni('eni-1'), eni('eni-2')])

    response = api.get('/api/eni?id=eni-1&id=eni-2')

    assert response.status_code == 200
    ec2.eni_paginate.assert_called_once_with(NetworkInterfaceIds=['eni-1', 'eni-2'])


def test_empty_id_filter_returns_nothing(api, ec2):
    response = api.get('/api/eni?id=')

    assert response.status_code == 200
    assert response.get_json()['network_interfaces'] == []
    ec2.client.get_paginator.assert_not_called()


def test_get_eni_not_found(api, ec2):
    response = api.get('/api/eni/eni-missing')

    assert response.status_code == 404
    assert 'eni-missing' in response.get_json()['error']


def test_get_eni_ambiguous(api, ec2):
    ec2.set_interfaces([eni('eni-1'), eni('eni-1')])

    assert api.get('/api/eni/eni-1').status_code == 409


def test_upstream_failure_is_bad_gateway(api, ec2):
    ec2.eni_paginate.side_effect = client_error('RequestLimitExceeded')

    response = api.get('/api/eni')

    assert response.status_code == 502


def test_get_instance(api, ec2):
    ec2.set_reservations(reservation('i-1'))

    response = api.get('/api/instance/i-1')

    assert response.status_code == 200
    assert response.get_json()['id'] == 'i-1'


def test_list_instances(api, ec2):
    ec2.set_reservations(reservation('i-1'), {'Instances': []})

    response = api.get('/api/instance?id=i-1&id=i-2')

    body = response.get_json()
    assert body['metadata'] == {'count': 1, 'requested': 2}


def test_list_instances_requires_ids(api):
    assert api.get('/api/instance').status_code == 400


def test_bad_configuration_is_server_error():
    app.config['TESTING'] = True
    app.config.pop('ENI_CLIENT', None)
    error = ConfigurationError("ENI_LOOKUP_READ_TIMEOUT must be an integer, got 'soon'")
    with patch('eni_lookup.api.EniClient.from_settings', side_effect=error):
        response = app.test_client().get('/api/eni')

    assert response.status_code == 500
    assert 'ENI_LOOKUP_READ_TIMEOUT' in response.get_json()['error']
