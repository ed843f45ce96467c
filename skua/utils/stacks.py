"""
skua.utils.stacks
~~~~~~~~~~~~~~~~~

Turns the various shapes a stack trace takes in Python into the list of
frame dictionaries expected by the ``stacktrace`` interface.

Frames are always ordered the way Sentry expects them: outermost caller
first, the frame that raised last. Traceback objects are walked in that
order already. A bare frame object is walked up through ``f_back`` and
reversed, and so is a list of ``inspect.FrameInfo`` as returned by
``inspect.stack()``, which is innermost first. Any other iterable of
frames is taken in the order given.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from __future__ import absolute_import

import inspect
import logging
import re
import sys
import traceback
from types import FrameType, TracebackType

from skua.conf import defaults

__all__ = ('get_stack_info', 'iter_stack_frames', 'iter_traceback_frames')

logger = logging.getLogger('skua.errors')

_coding_re = re.compile(r'coding[:=]\s*([-\w.]+)')

_file_line_re = re.compile(
    r'^\s*File "(?P<abs_path>[^"]+)", line (?P<lineno>\d+)'
    r'(?:, in (?P<function>.+?))?\s*$')

_traceback_header = 'Traceback (most recent call last):'


def get_lines_from_file(filename, lineno, context_lines, loader=None, module_name=None):
    """
    Returns context_lines before and after lineno from file.
    Returns (pre_context, context_line, post_context).
    """
    source = None
    if loader is not None and hasattr(loader, "get_source"):
        try:
            source = loader.get_source(module_name)
        except (ImportError, IOError):
            # Loaders may refuse modules they did not load themselves,
            # e.g. "Loader for module cProfile cannot handle module __main__"
            source = None
        if source is not None:
            source = source.splitlines()
    if source is None:
        try:
            with open(filename, 'rb') as f:
                source = f.read().splitlines()
        except (OSError, IOError):
            pass
    if source is None:
        return [], None, []

    encoding = 'utf-8'
    for line in source[:2]:
        if isinstance(line, bytes):
            line = line.decode('ascii', 'replace')
        # File coding may be specified. Match pattern from PEP-263
        # (http://www.python.org/dev/peps/pep-0263/)
        match = _coding_re.search(line)
        if match:
            encoding = match.group(1)
            break
    source = [_decode_line(sline, encoding) for sline in source]

    lower_bound = max(0, lineno - context_lines)
    upper_bound = min(lineno + 1 + context_lines, len(source))

    try:
        pre_context = [line.strip('\r\n') for line in source[lower_bound:lineno]]
        context_line = source[lineno].strip('\r\n')
        post_context = [line.strip('\r\n') for line in source[(lineno + 1):upper_bound]]
    except IndexError:
        # the file may have changed since it was loaded into memory
        return [], None, []

    return pre_context, context_line, post_context


def _decode_line(line, encoding):
    if not isinstance(line, bytes):
        return line
    try:
        return line.decode(encoding, 'replace')
    except LookupError:
        return line.decode('utf-8', 'replace')


def _getitem_from_frame(f_locals, key, default=None):
    """
    f_locals is not guaranteed to have .get(), but it will always
    support __getitem__. Even if it doesnt, we return ``default``.
    """
    try:
        return f_locals[key]
    except Exception:
        return default


def _is_hidden(frame):
    # support for __traceback_hide__ which is used by a few libraries
    # to hide internal frames.
    f_locals = getattr(frame, 'f_locals', {})
    return bool(_getitem_from_frame(f_locals, '__traceback_hide__'))


def iter_traceback_frames(tb):
    """
    Given a traceback object, it will iterate over all
    frames that do not contain the ``__traceback_hide__``
    local variable, outermost first.
    """
    while tb:
        if not _is_hidden(tb.tb_frame):
            yield tb.tb_frame, getattr(tb, 'tb_lineno', None), getattr(tb, 'tb_lasti', -1)
        tb = tb.tb_next


def iter_stack_frames(frames=None):
    """
    Given an optional list of frames as returned by ``inspect.stack()``
    (defaults to the caller's stack), returns ``(frame, lineno)`` for all
    frames that do not contain the ``__traceback_hide__`` local variable,
    outermost first.
    """
    if not frames:
        frames = inspect.stack(0)[1:]

    return [(f[0], f[2]) for f in reversed(frames) if not _is_hidden(f[0])]


def _walk_frame(frame):
    stack = []
    while frame is not None:
        stack.append((frame, frame.f_lineno, frame.f_lasti))
        frame = frame.f_back
    stack.reverse()
    return stack


def _get_colno(code, lasti):
    co_positions = getattr(code, 'co_positions', None)
    if co_positions is None or lasti is None or lasti < 0:
        return None
    try:
        positions = list(co_positions())[lasti // 2]
    except IndexError:
        return None
    col = positions[2]
    if col is None:
        return None
    return col + 1


def _relative_filename(abs_path, module_name):
    # Try to pull a relative file path
    # This changes /foo/site-packages/baz/bar.py into baz/bar.py
    try:
        base_filename = sys.modules[module_name.split('.', 1)[0]].__file__
        filename = abs_path.split(base_filename.rsplit('/', 2)[0], 1)[-1][1:]
    except (KeyError, AttributeError, IndexError, TypeError):
        filename = abs_path
    return filename or abs_path


def get_frame_info(frame_info, context_lines=defaults.CONTEXT_LINES):
    """
    Builds the frame dictionary for a frame object, a ``(frame, lineno)``
    or ``(frame, lineno, lasti)`` tuple, or an ``inspect.FrameInfo``.
    """
    lasti = None
    if isinstance(frame_info, inspect.FrameInfo):
        frame, lineno = frame_info.frame, frame_info.lineno
    elif isinstance(frame_info, (list, tuple)):
        frame, lineno = frame_info[0], frame_info[1]
        if len(frame_info) > 2:
            lasti = frame_info[2]
    else:
        frame = frame_info
        lineno = frame_info.f_lineno
        lasti = getattr(frame_info, 'f_lasti', None)

    f_globals = getattr(frame, 'f_globals', {})
    f_code = getattr(frame, 'f_code', None)
    if f_code:
        abs_path = f_code.co_filename
        function = f_code.co_name
    else:
        abs_path = None
        function = None

    loader = _getitem_from_frame(f_globals, '__loader__')
    module_name = _getitem_from_frame(f_globals, '__name__')

    result = {
        'abs_path': abs_path,
        'filename': _relative_filename(abs_path, module_name),
        'function': function or '<unknown>',
    }
    if module_name:
        result['module'] = module_name
    if lineno:
        result['lineno'] = lineno
    colno = _get_colno(f_code, lasti) if f_code else None
    if colno:
        result['colno'] = colno

    if lineno and abs_path and context_lines:
        pre_context, context_line, post_context = get_lines_from_file(
            abs_path, lineno - 1, context_lines, loader, module_name)
        if context_line is not None:
            result.update({
                'pre_context': pre_context,
                'context_line': context_line,
                'post_context': post_context,
            })
    return result


def get_summary_info(summary):
    """
    Builds the frame dictionary for a ``traceback.FrameSummary``.
    """
    result = {
        'abs_path': summary.filename,
        'filename': summary.filename,
        'function': summary.name or '<unknown>',
    }
    if summary.lineno:
        result['lineno'] = summary.lineno
    colno = getattr(summary, 'colno', None)
    if colno is not None:
        result['colno'] = colno + 1
    if summary.line:
        result['context_line'] = summary.line
    return result


def parse_traceback_string(value):
    """
    Parses the text printed by ``traceback.format_exc()``. Only the frames
    of the last ``Traceback`` block are kept, which belong to the
    exception that was finally raised.
    """
    lines = value.splitlines()
    for idx in range(len(lines) - 1, -1, -1):
        if lines[idx].strip() == _traceback_header:
            lines = lines[idx + 1:]
            break

    results = []
    for line in lines:
        match = _file_line_re.match(line)
        if match:
            frame = {
                'abs_path': match.group('abs_path'),
                'filename': match.group('abs_path'),
                'function': match.group('function') or '<unknown>',
                'lineno': int(match.group('lineno')),
            }
            results.append(frame)
        elif results and line.startswith('    ') and 'context_line' not in results[-1]:
            # Source line printed under a frame; caret markers are not source
            stripped = line.strip()
            if stripped and set(stripped) - set('^~ '):
                results[-1]['context_line'] = stripped
    return results


def _get_frames(stack_trace, context_lines):
    if isinstance(stack_trace, str):
        return parse_traceback_string(stack_trace)

    if isinstance(stack_trace, TracebackType):
        frames = iter_traceback_frames(stack_trace)
    elif isinstance(stack_trace, FrameType):
        frames = _walk_frame(stack_trace)
    else:
        frames = list(stack_trace)
        if frames and all(isinstance(f, inspect.FrameInfo) for f in frames):
            frames = iter_stack_frames(frames)

    results = []
    for frame_info in frames:
        if isinstance(frame_info, traceback.FrameSummary):
            results.append(get_summary_info(frame_info))
            continue

        frame = frame_info[0] if isinstance(frame_info, (list, tuple)) else frame_info
        if _is_hidden(frame):
            continue
        results.append(get_frame_info(frame_info, context_lines=context_lines))
    return results


def get_stack_info(stack_trace, stack_frame_filter=None,
                   context_lines=defaults.CONTEXT_LINES):
    """
    Given a stack trace, returns a list of stack information
    dictionary objects that are JSON-ready.

    ``stack_trace`` may be a traceback, a frame, an iterable of frames,
    ``(frame, lineno)`` pairs or ``traceback.FrameSummary`` objects, or the
    text of a formatted Python traceback. Anything that cannot be read
    produces an empty list rather than an error.

    ``stack_frame_filter`` receives the complete list and whatever it
    returns is used in its place.

    >>> try:
    >>>     1 / 0
    >>> except ZeroDivisionError as exc:
    >>>     frames = get_stack_info(exc.__traceback__)
    """
    __traceback_hide__ = True  # NOQA

    try:
        frames = _get_frames(stack_trace, context_lines)
    except Exception:
        logger.warning(
            'Unable to parse stack trace of type %s, sending no frames',
            type(stack_trace).__name__, exc_info=True)
        frames = []

    if stack_frame_filter is not None:
        frames = list(stack_frame_filter(frames))
    return frames
