"""
skua.transport.http
~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import

import ssl
import urllib.request
from urllib.error import HTTPError

from skua.conf import defaults
from skua.transport.base import Transport, TransportResponse


class HTTPTransport(Transport):
    """
    Sends events with ``urllib`` from the standard library. A new
    connection is opened for every request.
    """

    def __init__(self, timeout=defaults.TIMEOUT, verify_ssl=True,
                 ca_certs=defaults.CA_BUNDLE):
        self.timeout, self.verify_ssl = self.coerce_options(timeout, verify_ssl)
        self.ca_certs = ca_certs
        self._opener = urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=self._get_ssl_context()))

    def _get_ssl_context(self):
        if not self.verify_ssl:
            return ssl._create_unverified_context()
        return ssl.create_default_context(cafile=self.ca_certs)

    def send(self, method, url, headers, body):
        """
        Sends a request to a remote webserver and returns its response,
        including error statuses.
        """
        req = urllib.request.Request(url, data=body, headers=headers,
                                     method=method)
        try:
            response = self._opener.open(req, timeout=self.timeout)
        except HTTPError as e:
            try:
                return TransportResponse(e.code, dict(e.headers or {}), e.read())
            finally:
                e.close()

        with response:
            return TransportResponse(
                response.status, dict(response.headers), response.read())
