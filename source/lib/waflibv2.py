######################################################################################################################
#  Copyright 2020 Amazon.com, Inc. or its affiliates. All Rights Reserved.                                           #
#                                                                                                                    #
#  Licensed under the Apache License, Version 2.0 (the "License"). You may not use this file except in compliance    #
#  with the License. A copy of the License is located at                                                             #
#                                                                                                                    #
#      http://www.apache.org/licenses/LICENSE-2.0                                                                    #
#                                                                                                                    #
#  or in the "license" file accompanying this file. This file is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES #
#  OR CONDITIONS OF ANY KIND, express or implied. See the License for the specific language governing permissions    #
#  and limitations under the License.                                                                                #
######################################################################################################################
from botocore.exceptions import BotoCoreError, ClientError
from lib.boto3_util import create_client
from lib.exceptions import IPSetLookupError, IPSetUpdateError

OPTIMISTIC_LOCK_ERROR_CODES = ['WAFOptimisticLockException', 'OptimisticLockException']


class WAFLIBv2(object):

    def __init__(self, client=None):
        self._client = client

    # The wafv2 client is created on first use and reused by warm invocations
    @property
    def client(self):
        if self._client is None:
            self._client = create_client('wafv2')
        return self._client

    # Parse arn into ip_set_id
    def arn_to_id(self, arn):
        if arn is None:
            return None
        tmp = arn.split('/')
        return tmp.pop()

    # Retrieve IPSet and its lock token
    def get_ip_set(self, log, scope, name, ip_set_id):
        ip_set_id = self.arn_to_id(ip_set_id)
        log.info("[waflib:get_ip_set] Start")
        try:
            response = self.client.get_ip_set(
                Name=name,
                Scope=scope,
                Id=ip_set_id
            )
        except (ClientError, BotoCoreError) as e:
            log.error("[waflib:get_ip_set] Failed to get IPSet %s", str(ip_set_id))
            raise IPSetLookupError("Failed to get IPSet {} ({}): {}".format(name, ip_set_id, e)) from e

        if not response.get('LockToken'):
            raise IPSetLookupError("IPSet {} ({}) returned no lock token".format(name, ip_set_id))

        log.debug("[waflib:get_ip_set] got ip set: \n{}.".format(response))
        log.info("[waflib:get_ip_set] End")
        return response

    # Replace all addresses in an IPSet. A stale lock token is not retried.
    def update_ip_set(self, log, scope, name, ip_set_id, addresses):
        log.info("[waflib:update_ip_set] Start")
        ip_set_id = self.arn_to_id(ip_set_id)

        # retrieve the ipset to get a locktoken
        ip_set = self.get_ip_set(log, scope, name, ip_set_id)
        lock_token = ip_set['LockToken']
        description = ip_set.get('IPSet', {}).get('Description')
        log.info("Updating IPSet %s with %d addresses, lock token: %s", name, len(addresses), str(lock_token))

        kwargs = {
            'Name': name,
            'Scope': scope,
            'Id': ip_set_id,
            'Addresses': list(addresses),
            'LockToken': lock_token
        }
        if description:
            kwargs['Description'] = description

        try:
            response = self.client.update_ip_set(**kwargs)
        except ClientError as ex:
            exception_type = ex.response.get('Error', {}).get('Code')
            if exception_type in OPTIMISTIC_LOCK_ERROR_CODES:
                log.error("[waflib:update_ip_set] IPSet %s was modified since lock token %s was read", name, lock_token)
                raise IPSetUpdateError(
                    "IPSet {} was modified concurrently (stale lock token): {}".format(name, ex)) from ex
            log.error("[waflib:update_ip_set] Failed to update IPSet: %s", str(ip_set_id))
            raise IPSetUpdateError("Failed to update IPSet {} ({}): {}".format(name, ip_set_id, ex)) from ex
        except BotoCoreError as ex:
            log.error("[waflib:update_ip_set] Failed to update IPSet: %s", str(ip_set_id))
            raise IPSetUpdateError("Failed to update IPSet {} ({}): {}".format(name, ip_set_id, ex)) from ex

        log.debug("[waflib:update_ip_set] update ip set response:\n{}".format(response))
        log.info("[waflib:update_ip_set] End")
        return response
