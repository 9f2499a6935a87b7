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

import logging
from os import environ

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def set_log_level(default_log_level='ERROR'):
    """
    Set the root logger level from the LOG_LEVEL environment variable and return the root logger.
    Unknown levels fall back to ERROR.
    """
    log_level = str(environ.get('LOG_LEVEL', default_log_level)).upper()

    log = logging.getLogger()

    if log_level not in VALID_LOG_LEVELS:
        log_level = 'ERROR'
    log.setLevel(log_level)

    return log
