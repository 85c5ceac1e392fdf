# pylint: disable=wrong-import-position
# pylint: disable=protected-access

import datetime
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from resourcefs.locators import (  # noqa: E402
    BytesLocator,
    FSSpecLocator,
    _first_timestamp,
    _to_timestamp,
    as_locator,
)


class TestFSSpecLocator:
    @staticmethod
    def test_local_file(tmp_path):
        filePath = tmp_path / "folder" / "resource.txt"
        filePath.parent.mkdir()
        filePath.write_bytes(b"test\n")

        locator = FSSpecLocator(filePath.as_uri())
        assert locator.path() == str(filePath)

        metadata = locator.metadata()
        assert metadata.size == 5
        assert metadata.mtime == pytest.approx(os.stat(filePath).st_mtime)

        with locator.open_stream() as file:
            assert file.read() == b"test\n"

    @staticmethod
    def test_path_override(tmp_path):
        filePath = tmp_path / "resource.txt"
        filePath.write_bytes(b"test\n")
        assert FSSpecLocator(filePath.as_uri(), path="/resource.txt").path() == "/resource.txt"

    @staticmethod
    def test_memory_file(memory_fs):
        memory_fs.pipe_file("/a/b/x.jar", b"jar contents")
        locator = FSSpecLocator("memory:///a/b/x.jar")
        assert locator.path() == "/a/b/x.jar"
        assert locator.metadata().size == len(b"jar contents")
        with locator.open_stream() as file:
            assert file.read() == b"jar contents"

    @staticmethod
    def test_path_from_http_url():
        # Constructing the locator does not send any request.
        pytest.importorskip("aiohttp")
        locator = FSSpecLocator("https://repo.example.org/maven2/org/x%20y.jar")
        assert locator.path() == "/maven2/org/x y.jar"

    @staticmethod
    def test_missing_file(memory_fs):
        locator = FSSpecLocator("memory:///does/not/exist")
        with pytest.raises(FileNotFoundError):
            locator.metadata()

    @staticmethod
    def test_directory(memory_fs):
        memory_fs.pipe_file("/folder/file", b"")
        with pytest.raises(IsADirectoryError):
            FSSpecLocator("memory:///folder").metadata()

    @staticmethod
    def test_unknown_size_is_counted(memory_fs, monkeypatch):
        memory_fs.pipe_file("/data", b"0123456789")
        locator = FSSpecLocator("memory:///data")
        info = locator.fileSystem.info(locator.fsPath)
        info['size'] = None
        # The file system instance is cached by fsspec. Therefore, only patch it temporarily.
        monkeypatch.setattr(locator.fileSystem, "info", lambda path, **kwargs: info)
        assert locator.metadata().size == 10

    @staticmethod
    def test_invalid_url():
        with pytest.raises(ValueError):
            FSSpecLocator(b"memory:///a")  # type: ignore


class TestBytesLocator:
    @staticmethod
    def test_bytes_locator():
        locator = BytesLocator("/a/b", b"abc", mtime=5.0)
        assert locator.path() == "/a/b"
        assert locator.metadata().size == 3
        assert locator.metadata().mtime == 5.0
        assert locator.metadata().ctime is None
        with locator.open_stream() as file:
            assert file.read() == b"abc"
        # Each stream is independent.
        with locator.open_stream() as file1, locator.open_stream() as file2:
            assert file1.read(1) == b"a"
            assert file2.read() == b"abc"


def test_as_locator(memory_fs):
    locator = BytesLocator("/a", b"")
    assert as_locator(locator) is locator
    assert isinstance(as_locator("memory:///a"), FSSpecLocator)
    with pytest.raises(ValueError):
        as_locator(3)  # type: ignore


def test_to_timestamp():
    moment = datetime.datetime(2020, 3, 23, 20, 15, 34, tzinfo=datetime.timezone.utc)
    assert _to_timestamp(None) is None
    assert _to_timestamp(5) == 5.0
    assert _to_timestamp(moment) == moment.timestamp()
    assert _to_timestamp("2020-03-23T20:15:34+00:00") == moment.timestamp()
    assert _to_timestamp("Mon, 23 Mar 2020 20:15:34 GMT") == moment.timestamp()
    assert _to_timestamp("20200323201534") is not None
    assert _to_timestamp("not a time") is None


def test_first_timestamp():
    assert _first_timestamp({'modify': 3, 'mtime': None}, ('mtime', 'modify')) == 3.0
    assert _first_timestamp({}, ('mtime',)) is None
