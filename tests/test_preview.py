from __future__ import annotations

from pathlib import Path

import pytest

from recentfiles.preview import BINARY_FILE, EMPTY_FILE, is_binary, main, render_preview


def test_empty_file(tmp_path: Path):
    f = tmp_path / "empty.txt"
    f.write_text("")
    assert render_preview(f) == EMPTY_FILE == "[empty file]"


def test_text_file_truncated_to_max_lines(tmp_path: Path):
    f = tmp_path / "long.txt"
    f.write_text("".join(f"line {i}\n" for i in range(150)))
    preview = render_preview(f)
    lines = preview.splitlines()
    assert len(lines) == 100
    assert lines[0] == "line 0"
    assert lines[-1] == "line 99"


def test_text_file_custom_max_lines(tmp_path: Path):
    f = tmp_path / "short.txt"
    f.write_text("a\nb\nc\n")
    assert render_preview(f, max_lines=2) == "a\nb\n"


def test_utf8_text_is_not_binary(tmp_path: Path):
    f = tmp_path / "unicode.md"
    f.write_text("héllo wörld ✓\n", encoding="utf-8")
    assert render_preview(f) == "héllo wörld ✓\n"


def test_binary_file(tmp_path: Path):
    f = tmp_path / "blob.bin"
    f.write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    assert render_preview(f) == BINARY_FILE == "[binary file]"


def test_is_binary():
    assert is_binary(b"abc\x00def")
    assert is_binary(b"\xff\xfe\xfd garbage in the middle" + b"x" * 20)
    assert not is_binary(b"plain text\n")


def test_unreadable_file(tmp_path: Path):
    assert render_preview(tmp_path / "missing.txt").startswith("[unreadable file:")


def test_main_resolves_relative_to_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "notes.txt").write_text("one\ntwo\nthree\n")
    assert main(["--root", str(tmp_path), "--lines", "2", "sub/notes.txt"]) == 0
    assert capsys.readouterr().out == "one\ntwo\n"


@pytest.mark.parametrize("data", [b"\xff\xfe", b"hello world\xff\xfe", b"ok\xc3"])
def test_short_file_with_invalid_utf8_is_binary(tmp_path: Path, data: bytes):
    f = tmp_path / "blob"
    f.write_bytes(data)
    assert render_preview(f) == BINARY_FILE


def test_character_cut_off_at_sniff_limit_is_text(tmp_path: Path):
    # 8191 ASCII bytes, then a 3-byte character straddling the 8192-byte sample.
    f = tmp_path / "long.txt"
    f.write_bytes(b"a" * 8191 + "✓".encode() + b"\n")
    assert render_preview(f, max_lines=1).startswith("aaaa")
