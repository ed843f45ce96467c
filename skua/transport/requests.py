"""
skua.transport.requests
~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import

import requests

from skua.conf import defaults
from skua.transport.base import Transport, TransportResponse


class RequestsHTTPTransport(Transport):
    """
    Sends events through a ``requests.Session``, so connections are pooled
    until :meth:`close` is called.
    """

    def __init__(self, timeout=defaults.TIMEOUT, verify_ssl=True,
                 ca_certs=defaults.CA_BUNDLE, proxy=None):
        self.timeout, self.verify_ssl = self.coerce_options(timeout, verify_ssl)
        self.ca_certs = ca_certs
        self.session = requests.Session()
        if proxy:
            self.session.proxies.update({'http': proxy, 'https': proxy})
        if self.verify_ssl and self.ca_certs:
            # If SSL verification is enabled use the provided CA bundle to
            # perform the verification.
            self.session.verify = self.ca_certs
        else:
            self.session.verify = self.verify_ssl

    def send(self, method, url, headers, body):
        response = self.session.request(
            method, url, data=body, headers=headers, timeout=self.timeout)
        return TransportResponse(
            response.status_code, response.headers, response.content)

    def close(self):
        self.session.close()
