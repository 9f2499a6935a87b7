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


class IPRangeUpdaterError(Exception):
    """
    Base class for every failure raised while syncing an IP set with published ip ranges
    """


class FetchError(IPRangeUpdaterError):
    """
    The ip ranges document could not be downloaded
    """


class ParseError(IPRangeUpdaterError):
    """
    The ip ranges document was downloaded but is not the expected JSON document
    """


class IPSetLookupError(IPRangeUpdaterError, LookupError):
    """
    The WAF IPSet could not be read or did not return a lock token
    """


class IPSetUpdateError(IPRangeUpdaterError):
    """
    The WAF IPSet update was rejected, including a stale lock token
    """


class InputError(IPRangeUpdaterError):
    """
    The invocation event does not carry the expected fields
    """


class ConfigurationError(IPRangeUpdaterError):
    """
    A required environment variable is missing
    """
