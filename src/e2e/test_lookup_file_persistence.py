from pathlib import Path

import pytest

from csvigo import build_line_index, LineTable, LookupFileError
from csvigo.DB import LookupFile, save_table, load_table


def test_save_and_reload_table(tmp_path: Path):
    buf = b"h1,h2\r\n1,2\r\n3,4"
    table = build_line_index(buf)
    p = tmp_path / "t.lix"
    save_table(table, str(p), len(buf))

    assert p.exists()
    assert not (tmp_path / "t.lix.tmp").exists()
    assert load_table(str(p)) == table
    assert load_table(str(p), expected_size=len(buf)) == table


def test_mapped_reader_random_access(tmp_path: Path):
    table = build_line_index(b"a,b\nc,d\n")
    p = tmp_path / "t.lix"
    save_table(table, str(p), 8)
    with LookupFile(str(p)) as lf:
        assert len(lf) == 2
        assert lf.source_size == 8
        assert lf[1] == (4, 3)
        assert lf[-2] == (0, 3)
        assert list(lf) == [(0, 3), (4, 3)]
        with pytest.raises(IndexError):
            lf[2]


def test_empty_table_round_trip(tmp_path: Path):
    p = tmp_path / "empty.lix"
    save_table(LineTable.allocate(0), str(p), 0)
    assert p.stat().st_size == 20
    assert len(load_table(str(p))) == 0


def test_stale_index_is_rejected(tmp_path: Path):
    p = tmp_path / "t.lix"
    save_table(build_line_index(b"a\nb\n"), str(p), 4)
    with pytest.raises(LookupFileError):
        load_table(str(p), expected_size=5)


def test_bad_magic(tmp_path: Path):
    p = tmp_path / "bad.lix"
    p.write_bytes(b"NOPE" + bytes(16))
    with pytest.raises(LookupFileError):
        LookupFile(str(p))


def test_truncated_body(tmp_path: Path):
    p = tmp_path / "t.lix"
    save_table(build_line_index(b"a\nb\n"), str(p), 4)
    p.write_bytes(p.read_bytes()[:-8])
    with pytest.raises(LookupFileError):
        load_table(str(p))


def test_empty_and_missing_files(tmp_path: Path):
    empty = tmp_path / "zero.lix"
    empty.write_bytes(b"")
    with pytest.raises(LookupFileError):
        LookupFile(str(empty))
    with pytest.raises(FileNotFoundError):
        LookupFile(str(tmp_path / "missing.lix"))


def test_lookup_file_error_is_value_error():
    assert issubclass(LookupFileError, ValueError)
