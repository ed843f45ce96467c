"""
skua.events
~~~~~~~~~~~

Value objects describing what gets reported: the event itself, its
severity, the user it happened to and the breadcrumbs leading up to it.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import

from enum import Enum

import skua
from skua.conf import defaults
from skua.utils import Immutable
from skua.utils.dates import format_iso8601
from skua.utils.stacks import get_stack_info

__all__ = ('SeverityLevel', 'User', 'Breadcrumb', 'Event',
           'describe_exception')


class SeverityLevel(Enum):
    """
    Severity of an :class:`Event` or :class:`Breadcrumb`. The value is the
    name used on the wire.
    """
    FATAL = 'fatal'
    ERROR = 'error'
    WARNING = 'warning'
    INFO = 'info'
    DEBUG = 'debug'


def describe_exception(exception):
    """
    Returns ``(type_name, display)`` for ``exception``.

    Objects that know how to describe themselves may expose ``type_name``
    and ``display`` attributes; anything else is described by its class
    name and ``str()``.
    """
    type_name = getattr(exception, 'type_name', None)
    display = getattr(exception, 'display', None)
    if type_name is not None and display is not None:
        return str(type_name), str(display)
    return type(exception).__name__, str(exception)


class User(Immutable):
    """
    Describes the current user associated with the application, such as
    the currently signed in user.

    The user can be set for every event on ``Client.user_context``, or per
    event with ``Event(user_context=...)``. The per event user replaces
    the client one entirely.

    At a minimum an ``id`` or an ``ip_address`` must be given.

    >>> User(id='unique_id', email='foo@example.com', extras={'plan': 'basic'})
    """

    def __init__(self, id=None, username=None, email=None, ip_address=None,
                 extras=None):
        if id is None and ip_address is None:
            raise ValueError('User requires at least an id or an ip_address')
        self._set(
            id=id,
            username=username,
            email=email,
            ip_address=ip_address,
            extras=dict(extras) if extras else None,
        )

    def __repr__(self):
        return '<User: %s>' % (self.id or self.ip_address,)

    def to_json(self):
        data = {}
        for key, value in (('id', self.id),
                           ('username', self.username),
                           ('email', self.email),
                           ('ip_address', self.ip_address),
                           ('extras', self.extras)):
            if value is not None:
                data[key] = value
        return data


class Breadcrumb(Immutable):
    """
    An action that happened before the event was captured.

    ``timestamp`` is required and is sent with second precision.

    >>> Breadcrumb('clicked', datetime.utcnow(), category='ui.click')
    """

    def __init__(self, message, timestamp, category=None, data=None,
                 level=SeverityLevel.INFO, type=None):
        if timestamp is None:
            raise ValueError('Breadcrumb requires a timestamp')
        self._set(
            message=message,
            timestamp=timestamp,
            category=category,
            data=dict(data) if data else None,
            level=SeverityLevel(level) if level is not None else None,
            type=type,
        )

    def to_json(self):
        data = {
            'timestamp': format_iso8601(self.timestamp),
        }
        if self.message is not None:
            data['message'] = self.message
        if self.category is not None:
            data['category'] = self.category
        if self.data:
            data['data'] = dict(self.data)
        if self.level is not None:
            data['level'] = self.level.value
        if self.type is not None:
            data['type'] = self.type
        return data


class Event(Immutable):
    """
    An event to be reported. Every attribute is optional, though an event
    generally carries either a ``message`` or an ``exception``.

    ``stack_trace`` may be anything understood by
    :func:`skua.utils.stacks.get_stack_info`.

    ``fingerprint`` groups events together on the server. To supplement
    the default grouping rather than replace it, include
    ``Event.DEFAULT_FINGERPRINT``:

    >>> Event(message='boom', fingerprint=[Event.DEFAULT_FINGERPRINT, 'foo'])
    """
    DEFAULT_FINGERPRINT = '{{ default }}'

    _fields = (
        'logger_name', 'server_name', 'release', 'environment', 'message',
        'transaction', 'exception', 'stack_trace', 'level', 'culprit',
        'tags', 'extra', 'fingerprint', 'user_context', 'breadcrumbs',
    )

    def __init__(self, logger_name=None, server_name=None, release=None,
                 environment=None, message=None, transaction=None,
                 exception=None, stack_trace=None, level=None, culprit=None,
                 tags=None, extra=None, fingerprint=None, user_context=None,
                 breadcrumbs=None):
        self._set(
            logger_name=logger_name,
            server_name=server_name,
            release=release,
            environment=environment,
            message=message,
            transaction=transaction,
            exception=exception,
            stack_trace=stack_trace,
            level=SeverityLevel(level) if level is not None else None,
            culprit=culprit,
            tags=dict(tags) if tags is not None else None,
            extra=dict(extra) if extra is not None else None,
            fingerprint=tuple(fingerprint) if fingerprint is not None else None,
            user_context=user_context,
            breadcrumbs=tuple(breadcrumbs) if breadcrumbs is not None else None,
        )

    def __repr__(self):
        values = ', '.join(
            '%s=%r' % (name, getattr(self, name)) for name in self._fields
            if getattr(self, name) is not None)
        return 'Event(%s)' % (values,)

    def to_json(self, stack_frame_filter=None):
        data = {
            'platform': defaults.PLATFORM_NAME,
            'sdk': {
                'name': defaults.SDK_NAME,
                'version': skua.VERSION,
            },
        }

        for key, value in (('logger', self.logger_name),
                           ('server_name', self.server_name),
                           ('release', self.release),
                           ('environment', self.environment),
                           ('message', self.message),
                           ('transaction', self.transaction)):
            if value is not None:
                data[key] = value

        if self.exception is not None:
            exc_type, exc_value = describe_exception(self.exception)
            data['exception'] = [{
                'type': exc_type,
                'value': exc_value,
            }]

        if self.stack_trace is not None:
            data['stacktrace'] = {
                'frames': get_stack_info(
                    self.stack_trace, stack_frame_filter=stack_frame_filter),
            }

        if self.level is not None:
            data['level'] = self.level.value

        if self.culprit is not None:
            data['culprit'] = self.culprit

        if self.tags:
            data['tags'] = dict(self.tags)

        if self.extra:
            data['extra'] = dict(self.extra)

        if self.user_context is not None:
            user = self.user_context.to_json()
            if user:
                data['user'] = user

        if self.fingerprint:
            data['fingerprint'] = list(self.fingerprint)

        if self.breadcrumbs:
            data['breadcrumbs'] = {
                'values': [b.to_json() for b in self.breadcrumbs],
            }

        return data
