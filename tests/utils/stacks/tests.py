# -*- coding: utf-8 -*-
from __future__ import unicode_literals

import inspect
import os.path
import sys
import traceback

from mock import Mock

from skua.utils.stacks import (
    get_lines_from_file, get_stack_info, iter_stack_frames,
    parse_traceback_string)
from skua.utils.testutils import TestCase


def outer():
    return inner()


def inner():
    raise ValueError('boom')


def hidden():
    __traceback_hide__ = True  # NOQA
    return inner()


def capture_traceback(func):
    try:
        func()
    except ValueError:
        return sys.exc_info()[2]


FORMATTED = '''\
Traceback (most recent call last):
  File "/srv/app/handler.py", line 10, in handle
    raise KeyError('a')
KeyError: 'a'

During handling of the above exception, another exception occurred:

Traceback (most recent call last):
  File "/srv/app/main.py", line 3, in <module>
    main()
  File "/srv/app/main.py", line 22, in main
    handle(request)
  File "/srv/app/handler.py", line 12, in handle
    value = 1 / 0
            ~~^~~
ZeroDivisionError: division by zero
'''


class GetStackInfoTest(TestCase):
    def test_traceback_is_outermost_first(self):
        tb = capture_traceback(outer)
        frames = get_stack_info(tb)
        assert [f['function'] for f in frames] == [
            'capture_traceback', 'outer', 'inner']
        last = frames[-1]
        assert last['abs_path'] == __file__
        assert last['module'] == __name__
        assert last['context_line'].strip() == "raise ValueError('boom')"
        assert last['lineno'] == inspect.getsourcelines(inner)[1] + 1

    def test_hidden_frames_are_skipped(self):
        tb = capture_traceback(hidden)
        frames = get_stack_info(tb)
        assert [f['function'] for f in frames] == ['capture_traceback', 'inner']

    def test_frame_walks_to_outermost(self):
        frame = sys._getframe()
        frames = get_stack_info(frame, context_lines=0)
        assert frames[-1]['function'] == 'test_frame_walks_to_outermost'
        assert 'context_line' not in frames[-1]

    def test_stack_summary(self):
        summary = traceback.extract_tb(capture_traceback(outer))
        frames = get_stack_info(summary)
        assert [f['function'] for f in frames] == [
            'capture_traceback', 'outer', 'inner']
        assert frames[-1]['context_line'] == "raise ValueError('boom')"

    def test_current_stack(self):
        frames = get_stack_info(iter_stack_frames(), context_lines=0)
        assert frames[-1]['function'] == 'test_current_stack'

    def test_inspect_stack_is_outermost_first(self):
        stack = inspect.stack(0)
        frames = get_stack_info(stack, context_lines=0)
        assert frames[-1]['function'] == 'test_inspect_stack_is_outermost_first'
        assert frames[-1]['lineno'] == stack[0].lineno

    def test_frame_pairs_from_mocks(self):
        frames = []
        for x in range(3):
            frame = Mock()
            frame.f_locals = {'k': 'v'}
            frame.f_globals = {}
            frame.f_code.co_filename = str(x)
            frame.f_code.co_name = 'func%d' % x
            del frame.f_code.co_positions
            frames.append((frame, 1))

        results = get_stack_info(frames)
        assert [f['filename'] for f in results] == ['0', '1', '2']
        assert [f['function'] for f in results] == ['func0', 'func1', 'func2']
        assert all(f['lineno'] == 1 for f in results)

    def test_string(self):
        frames = get_stack_info(FORMATTED)
        assert frames == [
            {
                'abs_path': '/srv/app/main.py',
                'filename': '/srv/app/main.py',
                'function': '<module>',
                'lineno': 3,
                'context_line': 'main()',
            },
            {
                'abs_path': '/srv/app/main.py',
                'filename': '/srv/app/main.py',
                'function': 'main',
                'lineno': 22,
                'context_line': 'handle(request)',
            },
            {
                'abs_path': '/srv/app/handler.py',
                'filename': '/srv/app/handler.py',
                'function': 'handle',
                'lineno': 12,
                'context_line': 'value = 1 / 0',
            },
        ]

    def test_string_without_frames(self):
        assert get_stack_info('not a traceback at all') == []

    def test_unparsable_value(self):
        assert get_stack_info(42) == []

    def test_filter_receives_all_frames(self):
        seen = []

        def stack_frame_filter(frames):
            seen.append(list(frames))
            return list(reversed(frames))

        frames = get_stack_info(FORMATTED, stack_frame_filter=stack_frame_filter)
        assert len(seen[0]) == 3
        assert [f['function'] for f in frames] == ['handle', 'main', '<module>']

    def test_filter_may_transform_frames(self):
        def stack_frame_filter(frames):
            return [dict(f, in_app=f['abs_path'].startswith('/srv/app/main'))
                    for f in frames]

        frames = get_stack_info(FORMATTED, stack_frame_filter=stack_frame_filter)
        assert [f['in_app'] for f in frames] == [True, True, False]

    def test_is_idempotent(self):
        tb = capture_traceback(outer)
        stack_frame_filter = lambda frames: frames[1:]  # NOQA
        assert get_stack_info(tb, stack_frame_filter) == \
            get_stack_info(tb, stack_frame_filter)
        assert get_stack_info(FORMATTED) == get_stack_info(FORMATTED)


class ParseTracebackStringTest(TestCase):
    def test_real_traceback(self):
        try:
            outer()
        except ValueError:
            text = traceback.format_exc()
        frames = parse_traceback_string(text)
        assert [f['function'] for f in frames] == [
            'test_real_traceback', 'outer', 'inner']
        assert frames[-1]['context_line'] == "raise ValueError('boom')"


class FailLoader(object):
    '''
    Recreating the built-in loaders from a fake stack trace was brittle.
    This method ensures its testing the path where the loader is defined
    but fails with known exceptions.
    '''
    def get_source(self, module_name):
        if '.py' in module_name:
            raise ImportError('Cannot load .py files')
        elif '.zip' in module_name:
            raise IOError('Cannot load .zip files')
        else:
            raise ValueError('Invalid file extension')


class GetLineFromFileTest(TestCase):
    def setUp(self):
        self.loader = FailLoader()

    def test_non_ascii_file(self):
        filename = os.path.join(os.path.dirname(__file__), 'utf8_file.txt')
        self.assertEqual(
            get_lines_from_file(filename, 3, 1),
            (['Some code here'], '', ['lorem ipsum']))

    def test_missing_file(self):
        assert get_lines_from_file('/does/not/exist.py', 3, 1) == ([], None, [])

    def test_loader_failure_falls_back_to_file(self):
        filename = os.path.join(os.path.dirname(__file__), 'utf8_file.txt')
        result = get_lines_from_file(filename, 0, 1, self.loader, 'test.py')
        assert result[1] == 'Ensure that this file is read as utf-8 – ‘’“”'

    def test_line_out_of_range(self):
        filename = os.path.join(os.path.dirname(__file__), 'utf8_file.txt')
        assert get_lines_from_file(filename, 100, 1) == ([], None, [])
