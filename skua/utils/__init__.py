"""
skua.utils
~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import


def merge_dicts(*dicts):
    """
    Folds ``dicts`` left to right into a new dict. Keys of a later dict
    replace the keys of an earlier one wholesale, nested values are never
    merged.

    >>> merge_dicts({'user': {'id': '1'}}, None, {'user': {'id': '2'}})
    {'user': {'id': '2'}}
    """
    out = {}
    for d in dicts:
        if not d:
            continue

        for k, v in d.items():
            out[k] = v
    return out


def get_auth_header(protocol, timestamp, client, api_key, api_secret=None):
    header = [
        ('sentry_version', protocol),
        ('sentry_client', client),
        ('sentry_timestamp', timestamp),
        ('sentry_key', api_key),
    ]
    if api_secret:
        header.append(('sentry_secret', api_secret))

    return 'Sentry %s' % ', '.join('%s=%s' % (k, v) for k, v in header)


class Immutable(object):
    """
    Base for value objects whose attributes are fixed once ``__init__``
    has run. Subclasses assign through ``_set``.
    """
    __slots__ = ()

    def _set(self, **values):
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(
            '%s instances are immutable' % (type(self).__name__,))

    def __delattr__(self, name):
        raise AttributeError(
            '%s instances are immutable' % (type(self).__name__,))
