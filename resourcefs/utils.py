import io
import os
import platform
from typing import get_type_hints


class ResourceFSError(Exception):
    """Base exception for resourcefs module."""


class MountConflictError(ResourceFSError, FileExistsError):
    """Exception for mounting a name which is already registered."""


class ResourceNotFoundError(ResourceFSError, FileNotFoundError):
    """Exception for paths without a node and for unknown mount names."""


class NotAFileError(ResourceFSError, IsADirectoryError):
    """Exception for file operations, e.g., open, applied to a directory."""


class NotADirectoryResourceError(ResourceFSError, NotADirectoryError):
    """Exception for directory operations, e.g., listing, applied to a file."""


class UnsupportedOperationError(ResourceFSError, io.UnsupportedOperation):
    """Exception for any mutating operation on the read-only hierarchy."""


class IndexingError(ResourceFSError):
    """Exception for failures while building the index of a mount, e.g., failed metadata requests."""


class ClosedResourceError(ResourceFSError, ValueError):
    """Exception for operations executed on an unmounted mount or a closed channel."""


def overrides(parentClass):
    """Simple decorator that checks that a method with the same name exists in the parent class"""

    def overrider(method):
        if platform.python_implementation() == 'PyPy':
            return method

        assert method.__name__ in dir(parentClass)
        parentMethod = getattr(parentClass, method.__name__)
        assert callable(parentMethod)

        if os.getenv('RESOURCEFS_CHECK_OVERRIDES', '').lower() not in ('1', 'yes', 'on', 'enable', 'enabled'):
            return method

        parentTypes = get_type_hints(parentMethod)
        # If the parent is not typed, e.g., io.RawIOBase, then do not show errors for the typed derived class.
        for argument, argumentType in get_type_hints(method).items():
            if argument in parentTypes:
                parentType = parentTypes[argument]
                assert argumentType == parentType, f"{method.__name__}: {argument}: {argumentType} != {parentType}"

        return method

    return overrider


class FixedRawIOBase(io.RawIOBase):
    @overrides(io.RawIOBase)
    def readall(self) -> bytes:
        # It is necessary to implement this, or else the io.RawIOBase.readall implementation would use
        # io.DEFAULT_BUFFER_SIZE (8 KiB) reads even when a larger read would be possible in one go.
        # https://github.com/python/cpython/issues/85624
        chunks = []
        while result := self.read():
            chunks.append(result)
        return b"".join(chunks)
