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

import hashlib
import json
import requests
from lib.exceptions import FetchError, ParseError

DEFAULT_SERVICE = 'CLOUDFRONT'
REQUEST_TIMEOUT_SECONDS = 30
CHUNK_SIZE = 8192


def fetch_ip_ranges_document(log, url, timeout=REQUEST_TIMEOUT_SECONDS, expected_md5=None):
    """
    Download the ip ranges document from url and decode it as JSON.
        Parameters:
            log: logger
            url: string. HTTPS location of the ip ranges document.
            timeout: integer. Connect and read timeout in seconds. Optional.
            expected_md5: string. Hex digest the raw body must match. Optional.

        Returns: the decoded document
    """
    if not isinstance(url, str) or not url.lower().startswith('https://'):
        raise FetchError("Error fetching IP ranges JSON from {}: only https urls are supported".format(url))

    log.info("[ip_ranges:fetch_ip_ranges_document] Reading url %s", url)
    try:
        with requests.get(url, timeout=timeout, stream=True) as response:
            response.raise_for_status()

            body = b''
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    body += chunk
    except requests.exceptions.RequestException as e:
        log.error("[ip_ranges:fetch_ip_ranges_document] Failed to fetch %s", url)
        raise FetchError("Error fetching IP ranges JSON from {}: {}".format(url, e)) from e

    log.debug("[ip_ranges:fetch_ip_ranges_document] Read %d bytes from %s", len(body), url)

    if expected_md5 is not None:
        digest = hashlib.md5(body).hexdigest()
        if digest != expected_md5:
            raise ParseError("MD5 Mismatch: got {} expected {}".format(digest, expected_md5))

    try:
        return json.loads(body)
    except ValueError as e:
        raise ParseError("Error parsing IP ranges JSON: {}".format(e)) from e


def filter_service_prefixes(document, service=DEFAULT_SERVICE):
    """
    Return the ip_prefix of every entry tagged with service, in document order
    """
    if not isinstance(document, dict) or not isinstance(document.get('prefixes'), list):
        raise ParseError("Error parsing IP ranges JSON: 'prefixes' list not found")

    service_ranges = []
    for prefix in document['prefixes']:
        if not isinstance(prefix, dict) or prefix.get('service') != service:
            continue
        ip_prefix = prefix.get('ip_prefix')
        if not ip_prefix or not isinstance(ip_prefix, str):
            raise ParseError("Error parsing IP ranges JSON: {} entry without a valid 'ip_prefix': {}".format(service, prefix))
        service_ranges.append(ip_prefix)

    return service_ranges


def get_ip_ranges(log, url, service=DEFAULT_SERVICE, expected_md5=None):
    document = fetch_ip_ranges_document(log, url, expected_md5=expected_md5)
    service_ranges = filter_service_prefixes(document, service)
    log.info("[ip_ranges:get_ip_ranges] Found %d %s ranges in %s", len(service_ranges), service, url)
    return service_ranges
