"""
skua.transport.base
~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import

from collections import namedtuple

from requests.structures import CaseInsensitiveDict

__all__ = ('Transport', 'TransportResponse')


class TransportResponse(namedtuple('TransportResponse', 'status headers body')):
    """
    What came back from the server: the HTTP status code, the response
    headers (looked up case-insensitively) and the raw body.
    """

    def __new__(cls, status, headers=None, body=b''):
        return super(TransportResponse, cls).__new__(
            cls, int(status), CaseInsensitiveDict(headers or {}), body)


class Transport(object):
    """
    All transport implementations need to subclass this class

    You must implement a send method, which performs a single request and
    returns a ``TransportResponse`` whatever its status. Errors that keep
    a response from arriving at all (DNS, refused connections, timeouts)
    are raised.
    """

    def send(self, method, url, headers, body):
        """
        You need to override this to do something with the actual
        data. Usually - this is sending to a server
        """
        raise NotImplementedError

    def close(self):
        """
        Releases whatever connections the transport holds.
        """

    @staticmethod
    def coerce_options(timeout, verify_ssl):
        # options may come straight from the DSN query string
        if isinstance(timeout, str):
            timeout = int(timeout)
        if isinstance(verify_ssl, str):
            verify_ssl = bool(int(verify_ssl))
        return timeout, verify_ssl
