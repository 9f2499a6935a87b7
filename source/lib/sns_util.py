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
from lib.exceptions import InputError


class SNSMessage(object):
    """
    Reads the JSON message body out of the first record of an SNS notification event
    """

    def __init__(self, log, event):
        self.log = log
        self.body = self.parse(event)

    def parse(self, event):
        try:
            message = event['Records'][0]['Sns']['Message']
        except (KeyError, IndexError, TypeError) as e:
            self.log.error("[sns_util: parse] event is not an SNS notification")
            raise InputError("Invalid event: SNS message not found") from e

        try:
            body = json.loads(message)
        except (TypeError, ValueError) as e:
            self.log.error("[sns_util: parse] SNS message is not JSON: %s", message)
            raise InputError("Invalid event: SNS message is not JSON") from e

        if not isinstance(body, dict):
            raise InputError("Invalid event: SNS message is not a JSON object")
        return body

    def get(self, field, default=None):
        return self.body.get(field, default)

    def require(self, field):
        """
        Return a non-empty string field of the message body or raise InputError
        """
        value = self.body.get(field)
        if not value or not isinstance(value, str):
            self.log.error("[sns_util: require] No %s found in the SNS event message", field)
            raise InputError("Invalid event: {} not provided".format(field.upper()))
        return value
