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

from lib.exceptions import IPRangeUpdaterError, InputError
from lib.ip_set_sync import (
    get_ip_set_config,
    sync_ip_set,
    make_response,
    SUCCESS_MESSAGE,
    ERROR_MESSAGE_PREFIX
)
from lib.logging_util import set_log_level
from lib.sns_util import SNSMessage
from lib.waflibv2 import WAFLIBv2

waflib = WAFLIBv2()


# ======================================================================================================================
# Lambda Entry Point
# ======================================================================================================================
def lambda_handler(event, context):
    """
    Replace the configured WAF IPSet addresses with the ranges found at the url carried by an SNS
    notification, e.g. the AmazonIpSpaceChanged topic. When the message also has an md5, the
    downloaded document must match it.
    """
    log = set_log_level()
    log.info('[lambda_handler] Start')
    log.info("Lambda Handler Event: \n{}".format(event))

    try:
        message = SNSMessage(log, event)
        ip_ranges_url = message.require('url')
    except InputError as error:
        log.error(str(error))
        result = make_response(400, 'Invalid event: URL not provided')
        log.info('[lambda_handler] End %s', result)
        return result

    try:
        config = get_ip_set_config(log)
        sync_ip_set(log, waflib, ip_ranges_url, config, expected_md5=message.get('md5'))
        result = make_response(200, SUCCESS_MESSAGE)
    except IPRangeUpdaterError as error:
        log.error("%s: %s", ERROR_MESSAGE_PREFIX, str(error))
        result = make_response(500, "{}: {}".format(ERROR_MESSAGE_PREFIX, error))
    except Exception as error:
        log.exception("%s: %s", ERROR_MESSAGE_PREFIX, str(error))
        result = make_response(500, "{}: {}".format(ERROR_MESSAGE_PREFIX, error))

    log.info('[lambda_handler] End %s', result)
    return result
