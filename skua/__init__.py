"""
skua
~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""

__all__ = ('VERSION', 'Client', 'CaptureResult', 'Event', 'User',
           'Breadcrumb', 'SeverityLevel', 'load')

VERSION = '1.0.0'

from skua.base import *  # NOQA
from skua.conf import *  # NOQA
from skua.events import *  # NOQA
