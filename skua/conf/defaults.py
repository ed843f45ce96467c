"""
skua.conf.defaults
~~~~~~~~~~~~~~~~~~

Represents the default values for all client settings.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import


TIMEOUT = 5

# Path to a CA bundle used to verify the server certificate. None defers
# to the certificate store of the transport in use.
CA_BUNDLE = None

# Version of the store protocol spoken by the client
PROTOCOL_VERSION = '6'

PLATFORM_NAME = 'python'

SDK_NAME = 'skua'

# Logger name reported when neither the environment attributes nor the
# event name one
LOGGER_NAME = 'SentryClient'

# Payloads are gzipped unless the client is told otherwise
COMPRESS_PAYLOAD = True

COMPRESS_LEVEL = 9

# Number of source lines gathered around each stack frame
CONTEXT_LINES = 5
