"""
tests/test_file.py
Unit tests for the raw File handle.
"""
import asyncio
import io
from pathlib import Path

import pytest

from dirkit.storage.codecs import CsvFile, JsonFile, NdjsonFile
from dirkit.storage.file import File


def test_metadata_is_derived_from_path(tmp_path: Path) -> None:
    file = File(tmp_path / "data" / "report.json")
    assert file.path.is_absolute()
    assert file.dir == tmp_path / "data"
    assert file.base == "report.json"
    assert file.stem == "report"
    assert file.ext == ".json"
    assert file.type == "application/json"


def test_relative_paths_are_made_absolute(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    file = File("notes.txt")
    assert file.path == Path.cwd() / "notes.txt"
    assert file.type == "text/plain"


def test_unknown_extension_has_no_type(tmp_path: Path) -> None:
    assert File(tmp_path / "Makefile").type is None


def test_read_missing_file_returns_none(tmp_path: Path) -> None:
    file = File(tmp_path / "missing.txt")
    assert file.read() is None
    assert file.stats is None
    assert not file.exists


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    file = File(tmp_path / "a" / "b" / "c.txt")
    file.write("hello")
    assert file.exists
    assert file.read() == "hello"
    assert file.stats.st_size == 5


def test_write_bytes_and_binary_streams(tmp_path: Path) -> None:
    file = File(tmp_path / "blob.bin")
    file.write(b"\x00\x01")
    assert file.path.read_bytes() == b"\x00\x01"

    file.write(io.BytesIO(b"streamed"))
    assert file.read() == "streamed"


def test_write_rejects_unsupported_content(tmp_path: Path) -> None:
    file = File(tmp_path / "bad.txt")
    with pytest.raises(TypeError):
        file.write(123)
    assert not file.exists


def test_write_rejects_text_stream_without_truncating(tmp_path: Path) -> None:
    file = File(tmp_path / "precious.txt")
    file.write("precious")
    with pytest.raises(TypeError):
        file.write(io.StringIO("text stream"))
    assert file.read() == "precious"


def test_append_creates_file_and_terminates_lines(tmp_path: Path) -> None:
    file = File(tmp_path / "log.txt")
    file.append("first")
    file.append(["second", "third"])
    assert file.read() == "first\nsecond\nthird\n"
    assert file.lines() == ["first", "second", "third"]


def test_append_empty_sequence_writes_nothing(tmp_path: Path) -> None:
    file = File(tmp_path / "log.txt")
    file.append([])
    assert not file.exists

    file.append("first")
    file.append([])
    assert file.read() == "first\n"


def test_lines_without_trailing_newline(tmp_path: Path) -> None:
    file = File(tmp_path / "plain.txt")
    file.write("a\nb")
    assert file.lines() == ["a", "b"]


def test_lines_of_missing_or_empty_file(tmp_path: Path) -> None:
    file = File(tmp_path / "empty.txt")
    assert file.lines() == []
    file.write("")
    assert file.lines() == []


def test_delete_is_idempotent(tmp_path: Path) -> None:
    file = File(tmp_path / "gone.txt")
    file.delete()
    file.write("x")
    file.delete()
    assert not file.exists
    file.delete()


def test_reader_and_writer(tmp_path: Path) -> None:
    file = File(tmp_path / "nested" / "stream.bin")
    with file.reader() as f:
        assert f.read() == b""

    with file.writer() as f:
        f.write(b"payload")
    with file.reader() as f:
        assert f.read() == b"payload"


@pytest.mark.asyncio
async def test_write_stream_accepts_async_iterables(tmp_path: Path) -> None:
    async def chunks():
        for part in (b"one ", b"two ", b"three"):
            await asyncio.sleep(0)
            yield part

    file = File(tmp_path / "deep" / "async.bin")
    written = await file.write_stream(chunks())
    assert written == len(b"one two three")
    assert file.read() == "one two three"


@pytest.mark.asyncio
async def test_write_stream_accepts_sync_iterables(tmp_path: Path) -> None:
    file = File(tmp_path / "sync.bin")
    await file.write_stream([b"a", b"b"])
    assert file.read() == "ab"


@pytest.mark.asyncio
async def test_iter_chunks(tmp_path: Path) -> None:
    file = File(tmp_path / "chunks.bin")
    assert [c async for c in file.iter_chunks()] == []

    file.write(b"abcdefg")
    chunks = [c async for c in file.iter_chunks(chunk_size=3)]
    assert chunks == [b"abc", b"def", b"g"]


def test_adaptor_factories_share_a_path(tmp_path: Path) -> None:
    base = tmp_path / "test2"
    eg1 = JsonFile(base)
    eg2 = File(base).json()
    assert eg1.path == eg2.path == tmp_path / "test2.json"
    assert isinstance(File(base).ndjson(), NdjsonFile)
    assert isinstance(File(base).csv(), CsvFile)


def test_json_factory_writes_initial_contents(tmp_path: Path) -> None:
    file = File(tmp_path / "seed").json({"key": "val"})
    assert file.read() == {"key": "val"}
