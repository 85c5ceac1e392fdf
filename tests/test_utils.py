# pylint: disable=wrong-import-position

import io
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from resourcefs.utils import (  # noqa: E402
    ClosedResourceError,
    FixedRawIOBase,
    IndexingError,
    MountConflictError,
    NotADirectoryResourceError,
    NotAFileError,
    ResourceFSError,
    ResourceNotFoundError,
    UnsupportedOperationError,
    overrides,
)


class Base:
    def method(self, value: int) -> int:
        return value


def test_overrides():
    class Derived(Base):
        @overrides(Base)
        def method(self, value: int) -> int:
            return value + 1

    assert Derived().method(1) == 2

    with pytest.raises(AssertionError):

        class Misspelled(Base):  # pylint: disable=unused-variable
            @overrides(Base)
            def methd(self, value: int) -> int:
                return value


def test_overrides_checks_types(monkeypatch):
    monkeypatch.setenv('RESOURCEFS_CHECK_OVERRIDES', '1')

    with pytest.raises(AssertionError):

        class WrongType(Base):  # pylint: disable=unused-variable
            @overrides(Base)
            def method(self, value: str) -> int:
                return 0


def test_exception_hierarchy():
    assert issubclass(MountConflictError, FileExistsError)
    assert issubclass(ResourceNotFoundError, FileNotFoundError)
    assert issubclass(NotAFileError, IsADirectoryError)
    assert issubclass(NotADirectoryResourceError, NotADirectoryError)
    assert issubclass(UnsupportedOperationError, io.UnsupportedOperation)
    assert issubclass(ClosedResourceError, ValueError)
    for exception in [
        MountConflictError,
        ResourceNotFoundError,
        NotAFileError,
        NotADirectoryResourceError,
        UnsupportedOperationError,
        IndexingError,
        ClosedResourceError,
    ]:
        assert issubclass(exception, ResourceFSError)


def test_fixed_raw_io_base_readall():
    class ChunkedReader(FixedRawIOBase):
        def __init__(self, chunks):
            super().__init__()
            self.chunks = list(chunks)

        def readable(self):
            return True

        def read(self, size=-1):
            return self.chunks.pop(0) if self.chunks else b""

    assert ChunkedReader([b"ab", b"cd", b"e"]).readall() == b"abcde"
