import io
import re

import pytest

import logger


def lines(stream: io.StringIO) -> list:
    return stream.getvalue().splitlines()


def test_prefix_is_fixed_width(log, stream):
    log.inf('hello')

    assert lines(stream) == ['[TEST    ] hello']


def test_timestamp_without_prefix():
    stream = io.StringIO()
    logger.Log(stream=stream).inf('hello')

    assert re.match(r'^\[\d\d:\d\d:\d\d\] hello$', stream.getvalue())


def test_call_prefix_overrides():
    stream = io.StringIO()
    logger.Log(prefix='sass', stream=stream).inf('x').log('y', prefix='imagemin-x')

    assert lines(stream) == ['[SASS    ] x', '[IMAGEMIN] y']


def test_severity_tags_and_indent(log, stream):
    log.wrn('careful').err('broken', indent=2).dbg('details')

    assert lines(stream) == [
        '[TEST    ] WRN careful',
        '[TEST    ] ERR   broken',
        '[TEST    ] DBG details',
    ]


def test_debug_needs_verbose():
    stream = io.StringIO()
    logger.Log(prefix='x', stream=stream).dbg('hidden').inf('shown')

    assert lines(stream) == ['[X       ] shown']


def test_list_is_logged_line_by_line(log, stream):
    log.inf(['a', 'b'], indent=1)

    assert lines(stream) == ['[TEST    ]  a', '[TEST    ]  b']


def test_bell_only_when_enabled():
    quiet = io.StringIO()
    logger.Log(prefix='x', stream=quiet).don('sass')
    assert quiet.getvalue() == '[X       ] SASS Done\n'

    loud = io.StringIO()
    logger.Log(prefix='x', beep=True, stream=loud).don('sass')
    assert loud.getvalue() == '[X       ] SASS Done\a\n'


def test_separator(log, stream):
    log.sep(' usage > ')

    line = lines(stream)[0]
    assert line.startswith('[TEST    ] == USAGE > ===')
    assert len(line) == len('[TEST    ] ') + logger.SEPARATOR_WIDTH


def test_fatal_exits(log, stream):
    with pytest.raises(SystemExit) as e:
        log.fatal('cannot continue')

    assert e.value.code == 1
    assert lines(stream) == [
        '[TEST    ] ERR cannot continue',
        '[TEST    ] ERR ' + logger.ADVISORY,
    ]
