# pylint: disable=wrong-import-position
# pylint: disable=protected-access

import io
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from resourcefs.attributes import create_directory_attributes, create_file_attributes  # noqa: E402
from resourcefs.locators import BytesLocator  # noqa: E402
from resourcefs.ReadChannel import ReadChannel  # noqa: E402
from resourcefs.ResourcePath import ResourcePath  # noqa: E402
from resourcefs.utils import ClosedResourceError, NotAFileError, UnsupportedOperationError  # noqa: E402


class CountingLocator(BytesLocator):
    def __init__(self, path: str, data: bytes):
        super().__init__(path, data)
        self.openCount = 0
        self.streams: list = []

    def open_stream(self):
        self.openCount += 1
        stream = super().open_stream()
        self.streams.append(stream)
        return stream


def _open_channel(data: bytes = b"0123456789", locator=None) -> ReadChannel:
    if locator is None:
        locator = BytesLocator("/file", data)
    return ReadChannel(create_file_attributes(ResourcePath("m", locator.path()), locator))


class TestReadChannel:
    @staticmethod
    def test_read():
        with _open_channel() as channel:
            assert channel.readable()
            assert not channel.writable()
            assert channel.seekable()
            assert channel.size == 10
            assert channel.read(3) == b"012"
            assert channel.tell() == 3
            assert channel.read(0) == b""
            assert channel.read() == b"3456789"
            assert channel.position == 10
            assert channel.read(5) == b""

    @staticmethod
    def test_readall():
        with _open_channel() as channel:
            assert channel.readall() == b"0123456789"

    @staticmethod
    def test_readinto():
        buffer = bytearray(4)
        with _open_channel() as channel:
            assert channel.readinto(buffer) == 4
            assert buffer == b"0123"
            channel.seek(8)
            assert channel.readinto(buffer) == 2
            assert buffer[:2] == b"89"

    @staticmethod
    def test_buffered_reader():
        with io.BufferedReader(_open_channel(b"line 1\nline 2\n")) as file:
            assert file.readline() == b"line 1\n"
            assert file.read() == b"line 2\n"

    @staticmethod
    def test_seek_reopens_and_skips():
        locator = CountingLocator("/file", b"0123456789")
        with _open_channel(locator=locator) as channel:
            assert locator.openCount == 1
            assert channel.seek(5) == 5
            assert locator.openCount == 2
            assert locator.streams[0].closed
            assert channel.read(2) == b"56"

            # Seeking to the current position is a no-op.
            assert channel.seek(0, io.SEEK_CUR) == 7
            assert locator.openCount == 2

            assert channel.seek(-3, io.SEEK_CUR) == 4
            assert channel.read(1) == b"4"
            assert channel.seek(-2, io.SEEK_END) == 8
            assert channel.read() == b"89"
            assert channel.seek(0) == 0
            assert channel.read() == b"0123456789"

    @staticmethod
    def test_seek_past_end():
        with _open_channel() as channel:
            assert channel.seek(100) == 10
            assert channel.read() == b""

    @staticmethod
    def test_seek_invalid():
        with _open_channel() as channel:
            with pytest.raises(ValueError):
                channel.seek(-1)
            with pytest.raises(ValueError):
                channel.seek(0, 5)

    @staticmethod
    def test_channels_are_independent():
        locator = BytesLocator("/file", b"abcdef")
        with _open_channel(locator=locator) as channel1, _open_channel(locator=locator) as channel2:
            assert channel1.read(2) == b"ab"
            assert channel2.read(3) == b"abc"
            assert channel1.read(1) == b"c"

    @staticmethod
    def test_close_is_idempotent():
        locator = CountingLocator("/file", b"data")
        channel = _open_channel(locator=locator)
        assert channel.is_open()
        channel.close()
        channel.close()
        assert not channel.is_open()
        assert channel.closed
        assert locator.streams[0].closed

    @staticmethod
    def test_closed_channel():
        channel = _open_channel()
        channel.close()
        with pytest.raises(ClosedResourceError):
            channel.read(1)
        with pytest.raises(ClosedResourceError):
            channel.readinto(bytearray(1))
        with pytest.raises(ClosedResourceError):
            channel.seek(1)
        with pytest.raises(ClosedResourceError):
            channel.tell()
        # Also compatible with the exception raised by io for closed files.
        with pytest.raises(ValueError):
            channel.read()

    @staticmethod
    def test_write_unsupported():
        with _open_channel() as channel:
            with pytest.raises(UnsupportedOperationError):
                channel.write(b"x")
            with pytest.raises(UnsupportedOperationError):
                channel.truncate(0)
            with pytest.raises(io.UnsupportedOperation):
                channel.fileno()
            assert channel.read() == b"0123456789"

    @staticmethod
    def test_directory_cannot_be_opened():
        with pytest.raises(NotAFileError):
            ReadChannel(create_directory_attributes(ResourcePath("m", "/folder")))
