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

from lib.exceptions import IPRangeUpdaterError
from lib.ip_set_sync import (
    get_ip_set_config,
    sync_ip_set,
    make_response,
    SUCCESS_MESSAGE,
    ERROR_MESSAGE_PREFIX
)
from lib.logging_util import set_log_level
from lib.waflibv2 import WAFLIBv2

IP_RANGES_URL = 'https://ip-ranges.amazonaws.com/ip-ranges.json'

waflib = WAFLIBv2()


# ======================================================================================================================
# Lambda Entry Point
# ======================================================================================================================
def lambda_handler(event, context):
    """
    Replace the configured WAF IPSet addresses with the CloudFront ranges published at IP_RANGES_URL.
    The event content is only logged.
    """
    log = set_log_level()
    log.info('[lambda_handler] Start')
    log.info("Lambda Handler Event: \n{}".format(event))

    try:
        config = get_ip_set_config(log)
        sync_ip_set(log, waflib, IP_RANGES_URL, config)
        result = make_response(200, SUCCESS_MESSAGE)
    except IPRangeUpdaterError as error:
        log.error("%s: %s", ERROR_MESSAGE_PREFIX, str(error))
        result = make_response(500, "{}: {}".format(ERROR_MESSAGE_PREFIX, error))
    except Exception as error:
        log.exception("%s: %s", ERROR_MESSAGE_PREFIX, str(error))
        result = make_response(500, "{}: {}".format(ERROR_MESSAGE_PREFIX, error))

    log.info('[lambda_handler] End %s', result)
    return result
