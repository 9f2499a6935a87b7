######################################################################################################################
#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.                                                #
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
#!/bin/python

import json
from os import environ
from lib.exceptions import ConfigurationError
from lib.ip_ranges import get_ip_ranges, DEFAULT_SERVICE

DEFAULT_SCOPE = 'REGIONAL'
SUCCESS_MESSAGE = 'WAF IP set updated successfully'
ERROR_MESSAGE_PREFIX = 'Error updating WAF IP set'


def get_ip_set_config(log):
    """
    Read the target IPSet settings from the environment.

    Returns: dict with ip_set_id, ip_set_name, scope and service
    """
    config = {
        'ip_set_id': environ.get('WAF_IP_SET_ID'),
        'ip_set_name': environ.get('WAF_IP_SET_NAME'),
        'scope': environ.get('SCOPE') or DEFAULT_SCOPE,
        'service': environ.get('SERVICE') or DEFAULT_SERVICE
    }

    missing = [var for var, key in [('WAF_IP_SET_ID', 'ip_set_id'), ('WAF_IP_SET_NAME', 'ip_set_name')]
               if not config[key]]
    if missing:
        raise ConfigurationError("Missing required environment variable(s): {}".format(', '.join(missing)))

    log.info("[ip_set_sync:get_ip_set_config] %s", config)
    return config


def sync_ip_set(log, waflib, url, config, expected_md5=None):
    """
    Fetch the ranges for the configured service from url and overwrite the IPSet with them
    """
    service_ranges = get_ip_ranges(log, url, config['service'], expected_md5=expected_md5)
    log.info("Fetched %s IP ranges: %s", config['service'], service_ranges)

    if not service_ranges:
        log.warning("No %s ranges found in %s, the IPSet %s will be cleared",
                    config['service'], url, config['ip_set_name'])

    waflib.update_ip_set(log, config['scope'], config['ip_set_name'], config['ip_set_id'], service_ranges)
    log.info(SUCCESS_MESSAGE)
    return service_ranges


def make_response(status_code, message):
    return {
        'statusCode': status_code,
        'body': json.dumps(message)
    }
