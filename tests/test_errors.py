import errno

import pytest

from yamlette.core.errors import (
    ScanError, ErrorKind, Category, GenericContext, BadChar, ExpectedChar, make_context,
)
from yamlette.core.models import Mark


@pytest.mark.parametrize("kind, category", [
    (ErrorKind.IO, Category.IO),
    (ErrorKind.INVALID_CHAR, Category.DATA),
    (ErrorKind.SCALAR_INVALID, Category.DATA),
    (ErrorKind.INVALID_EOL, Category.DATA),
    (ErrorKind.INVALID_EOF, Category.DATA),
    (ErrorKind.SOLO_CARRIAGE_RETURN, Category.DATA),
    (ErrorKind.MESSAGE, Category.DATA),
    (ErrorKind.ILLEGAL_TRANSITION, Category.STATE),
    (ErrorKind.STATE_VIOLATION, Category.STATE),
    (ErrorKind.EOF_MAPPING, Category.STATE),
    (ErrorKind.REPEAT_FAILURE, Category.STATE),
])
def test_categories(kind, category):
    assert ScanError(kind).category is category


def test_context_shorthand():
    assert make_context("oops") == GenericContext("oops")
    assert make_context(0x31) == BadChar(0x31)
    assert make_context((b":", 0x41)) == ExpectedChar(b":", 0x41)
    assert make_context(None) is None
    with pytest.raises(TypeError):
        make_context(1.5)


def test_context_rendering():
    assert str(BadChar(ord("7"))) == "Bad char: '7'"
    assert str(ExpectedChar(b":", ord("x"))) == "Expected: ':' got: 'x'"
    assert str(ExpectedChar(b"ab", ord("x"))) == "Expected one of: ['a', 'b'] got: x"
    assert str(ExpectedChar(b"", ord("x"))) == "Bad char: 'x'"


def test_message_with_context_and_mark():
    err = ScanError(ErrorKind.INVALID_CHAR, ord("1"), mark=Mark(3, 1, 4))
    assert str(err) == "Parser encountered an invalid character Bad char: '1' at line 1, column 4"


def test_at_only_stamps_missing_marks():
    err = ScanError(ErrorKind.STATE_VIOLATION)
    err.at(Mark(1, 1, 2))
    err.at(Mark(9, 3, 1))
    assert err.mark == Mark(1, 1, 2)
    assert "line 1, column 2" in str(err)


def test_to_os_error_mapping():
    original = OSError(errno.EIO, "disk")
    io_err = ScanError.from_os_error(original)
    assert io_err.to_os_error() is original

    data_err = ScanError(ErrorKind.SCALAR_INVALID).to_os_error()
    assert data_err.errno == errno.EINVAL
    assert isinstance(data_err.__cause__, ScanError)


def test_repeat_detection():
    assert ScanError(ErrorKind.REPEAT_FAILURE).is_repeat()
    assert not ScanError(ErrorKind.INVALID_EOL).is_repeat()
