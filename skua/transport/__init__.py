"""
skua.transport
~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import

from skua.transport.base import Transport, TransportResponse  # NOQA
from skua.transport.http import HTTPTransport  # NOQA
from skua.transport.requests import RequestsHTTPTransport  # NOQA

DEFAULT_TRANSPORT = RequestsHTTPTransport
