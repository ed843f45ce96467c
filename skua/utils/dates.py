from __future__ import absolute_import

from datetime import datetime, timedelta, timezone


epoch = datetime(1970, 1, 1)


def utcnow():
    """
    The store API does not take a timezone and expects every date-time in
    UTC, so naive UTC datetimes are used throughout.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value):
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_milliseconds(value):
    return (to_naive_utc(value) - epoch) // timedelta(milliseconds=1)


def format_iso8601(value):
    """
    Formats ``value`` as ISO-8601 with second precision, dropping any
    fractional part.

    >>> format_iso8601(datetime(2017, 1, 2, 3, 4, 5, 678))
    '2017-01-02T03:04:05'
    """
    return to_naive_utc(value).strftime('%Y-%m-%dT%H:%M:%S')
