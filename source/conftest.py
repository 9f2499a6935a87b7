###############################################################################
#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.    #
#                                                                             #
#  Licensed under the Apache License, Version 2.0 (the "License").            #
#  You may not use this file except in compliance with the License.
#  A copy of the License is located at                                        #
#                                                                             #
#      http://www.apache.org/licenses/LICENSE-2.0                             #
#                                                                             #
#  or in the "license" file accompanying this file. This file is distributed  #
#  on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, express #
#  or implied. See the License for the specific language governing permissions#
#  and limitations under the License.                                         #
###############################################################################

import json
import uuid
import boto3
import pytest
import requests
from os import environ
from botocore.exceptions import ClientError
from moto import mock_aws

REGION = 'us-east-1'
IP_SET_NAME = 'test-cloudfront-ip-set'
IP_SET_ID = 'a1b2c3d4-5678-90ab-cdef-EXAMPLE11111'


class FakeWAFv2Client(object):
    """
    In-memory IPSet store that checks lock tokens the way the WAFv2 service does
    """

    def __init__(self, addresses=None, ip_set_id=IP_SET_ID, name=IP_SET_NAME, description='CloudFront ranges'):
        self.ip_set_id = ip_set_id
        self.name = name
        self.description = description
        self.addresses = list(addresses or [])
        self.lock_token = str(uuid.uuid4())
        self.get_calls = []
        self.update_calls = []
        self.before_update = None

    def rotate(self, addresses):
        # a concurrent writer that wins the race
        self.addresses = list(addresses)
        self.lock_token = str(uuid.uuid4())

    def get_ip_set(self, Name, Scope, Id):
        self.get_calls.append({'Name': Name, 'Scope': Scope, 'Id': Id})
        if Id != self.ip_set_id or Name != self.name:
            raise ClientError(
                {'Error': {'Code': 'WAFNonexistentItemException',
                           'Message': "AWS WAF couldn't perform the operation because your resource doesn't exist."}},
                'GetIPSet')
        return {
            'IPSet': {
                'Name': self.name,
                'Id': self.ip_set_id,
                'ARN': 'arn:aws:wafv2:us-east-1:111111111111:regional/ipset/{}/{}'.format(self.name, self.ip_set_id),
                'Description': self.description,
                'IPAddressVersion': 'IPV4',
                'Addresses': list(self.addresses)
            },
            'LockToken': self.lock_token
        }

    def update_ip_set(self, Name, Scope, Id, Addresses, LockToken, Description=None):
        self.update_calls.append({'Name': Name, 'Scope': Scope, 'Id': Id, 'Addresses': list(Addresses),
                                  'LockToken': LockToken, 'Description': Description})
        if self.before_update is not None:
            hook, self.before_update = self.before_update, None
            hook(self)
        if LockToken != self.lock_token:
            raise ClientError(
                {'Error': {'Code': 'WAFOptimisticLockException',
                           'Message': "AWS WAF couldn't save your changes because someone changed the resource after you started to edit it."}},
                'UpdateIPSet')
        self.rotate(Addresses)
        return {'NextLockToken': self.lock_token}


@pytest.fixture(scope='module', autouse=True)
def aws_credentials():
    """Mocked AWS Credentials for moto"""
    environ['AWS_ACCESS_KEY_ID'] = 'testing'
    environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
    environ['AWS_SECURITY_TOKEN'] = 'testing'
    environ['AWS_SESSION_TOKEN'] = 'testing'
    environ['AWS_DEFAULT_REGION'] = REGION
    environ['AWS_REGION'] = REGION


@pytest.fixture(scope='function')
def ip_set_env_var_setup(monkeypatch):
    monkeypatch.setenv('WAF_IP_SET_ID', IP_SET_ID)
    monkeypatch.setenv('WAF_IP_SET_NAME', IP_SET_NAME)
    monkeypatch.setenv('SCOPE', 'REGIONAL')
    monkeypatch.setenv('LOG_LEVEL', 'INFO')
    monkeypatch.delenv('SERVICE', raising=False)


@pytest.fixture(scope='function')
def fake_wafv2_client():
    return FakeWAFv2Client(addresses=['198.51.100.0/24'])


@pytest.fixture(scope='function')
def wafv2_client():
    with mock_aws():
        yield boto3.client('wafv2', region_name=REGION)


@pytest.fixture(scope='function')
def moto_ip_set(wafv2_client, monkeypatch):
    response = wafv2_client.create_ip_set(
        Name=IP_SET_NAME,
        Scope='REGIONAL',
        Description='CloudFront ranges',
        IPAddressVersion='IPV4',
        Addresses=['198.51.100.0/24']
    )
    summary = response['Summary']
    monkeypatch.setenv('WAF_IP_SET_ID', summary['Id'])
    monkeypatch.setenv('WAF_IP_SET_NAME', IP_SET_NAME)
    monkeypatch.setenv('SCOPE', 'REGIONAL')
    monkeypatch.setenv('LOG_LEVEL', 'INFO')
    monkeypatch.delenv('SERVICE', raising=False)
    return summary


@pytest.fixture(scope='session')
def ip_ranges_document():
    return {
        'syncToken': '1700000000',
        'createDate': '2023-11-14-22-13-20',
        'prefixes': [
            {'ip_prefix': '13.32.0.0/15', 'region': 'GLOBAL', 'service': 'AMAZON', 'network_border_group': 'GLOBAL'},
            {'ip_prefix': '13.32.0.0/15', 'region': 'GLOBAL', 'service': 'CLOUDFRONT', 'network_border_group': 'GLOBAL'},
            {'ip_prefix': '3.0.0.0/8', 'region': 'us-east-1', 'service': 'EC2', 'network_border_group': 'us-east-1'},
            {'ip_prefix': '52.46.0.0/18', 'region': 'GLOBAL', 'service': 'CLOUDFRONT', 'network_border_group': 'GLOBAL'},
            {'ip_prefix': '3.172.0.0/18', 'region': 'GLOBAL', 'service': 'CLOUDFRONT', 'network_border_group': 'GLOBAL'},
            {'ip_prefix': '52.46.0.0/18', 'region': 'GLOBAL', 'service': 'CLOUDFRONT', 'network_border_group': 'GLOBAL'},
            {'ip_prefix': '15.177.0.0/18', 'region': 'us-east-1', 'service': 'ROUTE53_HEALTHCHECKS', 'network_border_group': 'us-east-1'}
        ],
        'ipv6_prefixes': [
            {'ipv6_prefix': '2600:9000::/28', 'region': 'GLOBAL', 'service': 'CLOUDFRONT', 'network_border_group': 'GLOBAL'}
        ]
    }


@pytest.fixture(scope='session')
def expected_cloudfront_ranges():
    return ['13.32.0.0/15', '52.46.0.0/18', '3.172.0.0/18', '52.46.0.0/18']


@pytest.fixture(scope='function')
def mock_ip_ranges_response(mocker):
    """
    Patch requests.get so it serves the given document (dict, str or bytes) in small chunks
    """
    def _mock(document, chunk_size=7):
        if isinstance(document, (dict, list)):
            document = json.dumps(document)
        if isinstance(document, str):
            document = document.encode('utf-8')
        response = mocker.MagicMock()
        response.status_code = 200
        response.__enter__.return_value = response
        response.iter_content.return_value = [document[i:i + chunk_size]
                                              for i in range(0, len(document), chunk_size)]
        return mocker.patch.object(requests, 'get', return_value=response)
    return _mock


@pytest.fixture(scope='function')
def lose_lock_token_race(mocker):
    """
    Make a moto wafv2 client let a concurrent writer update the IPSet right after each get_ip_set,
    so the lock token handed back to the caller is already stale. Returns the unpatched get_ip_set.
    """
    def _patch(client, winner_addresses):
        real_get_ip_set = client.get_ip_set

        def get_ip_set_then_lose_race(**kwargs):
            response = real_get_ip_set(**kwargs)
            client.update_ip_set(
                Name=kwargs['Name'],
                Scope=kwargs['Scope'],
                Id=kwargs['Id'],
                Addresses=winner_addresses,
                LockToken=response['LockToken']
            )
            return response

        mocker.patch.object(client, 'get_ip_set', side_effect=get_ip_set_then_lose_race)
        return real_get_ip_set
    return _patch
