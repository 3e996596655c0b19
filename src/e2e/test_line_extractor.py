import pytest

from csvigo import build_line_index, LineIndexIntegrityError
from csvigo.extractor import extract_lines


def test_cr_consumes_following_byte():
    # the byte after CR is skipped whatever it is
    assert extract_lines(b"ab\rXcd\n", 2).to_list() == [(0, 2), (4, 2)]


def test_trailing_cr_skip_is_bounds_checked():
    table = extract_lines(b"ab\r", 2)
    assert table.to_list() == [(0, 2), (3, 0)]
    off, ln = table[-1]
    assert off + ln <= 3


def test_bare_cr_is_an_integrity_error():
    with pytest.raises(LineIndexIntegrityError) as ei:
        build_line_index(b"a\rb\n")
    assert ei.value.expected == 1
    assert ei.value.actual == 2


def test_lone_trailing_cr_is_an_integrity_error():
    with pytest.raises(LineIndexIntegrityError):
        build_line_index(b"a\r")


def test_too_small_count_never_overflows():
    with pytest.raises(LineIndexIntegrityError) as ei:
        extract_lines(b"a\nb\n", 1)
    assert ei.value.expected == 1


def test_too_large_count_is_not_truncated():
    with pytest.raises(LineIndexIntegrityError) as ei:
        extract_lines(b"a\nb\n", 3)
    assert (ei.value.expected, ei.value.actual) == (3, 2)


def test_empty_buffer():
    assert len(extract_lines(b"", 0)) == 0
    with pytest.raises(LineIndexIntegrityError):
        extract_lines(b"", 1)


def test_integrity_error_is_a_runtime_error():
    err = LineIndexIntegrityError(2, 3)
    assert isinstance(err, RuntimeError)
    assert "counted 2" in str(err)
