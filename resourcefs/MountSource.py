import os
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from .attributes import ResourceAttributes
from .ReadChannel import ReadChannel
from .ResourcePath import ResourcePath
from .utils import ResourceNotFoundError, UnsupportedOperationError

PathLike = Union[ResourcePath, str]


class MountSource(ABC):
    """
    Generic class representing a read-only, path-addressable hierarchy. It is the only interface an adapter
    to a concrete virtual filesystem API, e.g., FUSE, needs to bind to.

    All paths are absolute. Strings without a leading '/' behave as if there was one.

    All mutating operations are implemented here and raise UnsupportedOperationError regardless of
    whether the path exists. Derived classes must not override them.
    """

    @abstractmethod
    def get_path(self, first: str, *more: str) -> ResourcePath:
        pass

    @abstractmethod
    def lookup(self, path: PathLike) -> Optional[ResourceAttributes]:
        pass

    @abstractmethod
    def list_children(self, path: PathLike) -> list[ResourcePath]:
        pass

    @abstractmethod
    def open(self, path: PathLike) -> ReadChannel:
        pass

    @abstractmethod
    def is_immutable(self) -> bool:
        """
        Should return True if the mount source is known to not change over time in order to allow for optimizations.
        Meaning, all interface methods should return the same results given the same arguments at any time.
        """

    def statfs(self) -> dict[str, Any]:
        """
        Returns a dictionary with keys named like the POSIX statvfs struct.
        https://pubs.opengroup.org/onlinepubs/009695399/basedefs/sys/statvfs.h.html
        """
        return {}

    def _to_path(self, path: PathLike) -> ResourcePath:
        return path if isinstance(path, ResourcePath) else self.get_path(path)

    def attributes_of(self, path: PathLike) -> ResourceAttributes:
        attributes = self.lookup(path)
        if attributes is None:
            raise ResourceNotFoundError(f"No such file or directory: {self._to_path(path)}")
        return attributes

    def list(self, path: PathLike) -> dict[str, ResourceAttributes]:
        """Returns the attributes of all direct children of the directory keyed by their names."""
        return {child.name: self.attributes_of(child) for child in self.list_children(path)}

    def read(self, path: PathLike, size: int, offset: int) -> bytes:
        with self.open(path) as channel:
            channel.seek(offset)
            return channel.read(size)

    def exists(self, path: PathLike) -> bool:
        return self.lookup(path) is not None

    def is_dir(self, path: PathLike) -> bool:
        attributes = self.lookup(path)
        return attributes is not None and attributes.is_directory

    def is_file(self, path: PathLike) -> bool:
        attributes = self.lookup(path)
        return attributes is not None and attributes.is_regular_file

    def check_access(self, path: PathLike, mode: int = os.F_OK) -> None:
        """
        Works like os.access but raises instead of returning a boolean. Reading is always permitted.
        Write and execute access are never permitted, even for non-existing paths.
        """
        if mode & os.X_OK:
            raise UnsupportedOperationError(f"Execute access is not supported for: {path}")
        if mode & os.W_OK:
            raise UnsupportedOperationError(f"Write access is not supported for: {path}")
        self.attributes_of(path)

    # pylint: disable=unused-argument

    def create_directory(self, path: PathLike) -> None:
        raise UnsupportedOperationError(f"Cannot create directory {path} on a read-only mount!")

    def delete(self, path: PathLike) -> None:
        raise UnsupportedOperationError(f"Cannot delete {path} on a read-only mount!")

    def delete_if_exists(self, path: PathLike) -> bool:
        raise UnsupportedOperationError(f"Cannot delete {path} on a read-only mount!")

    def move(self, source: PathLike, target: PathLike) -> None:
        raise UnsupportedOperationError(f"Cannot move {source} to {target} on a read-only mount!")

    def copy(self, source: PathLike, target: PathLike) -> None:
        raise UnsupportedOperationError(f"Cannot copy {source} to {target} on a read-only mount!")

    def set_attribute(self, path: PathLike, attribute: str, value: Any) -> None:
        raise UnsupportedOperationError(f"Cannot set attribute {attribute} of {path} on a read-only mount!")

    def set_times(
        self,
        path: PathLike,
        lastModifiedTime: Optional[float] = None,
        lastAccessTime: Optional[float] = None,
        creationTime: Optional[float] = None,
    ) -> None:
        raise UnsupportedOperationError(f"Cannot change times of {path} on a read-only mount!")

    def open_for_writing(self, path: PathLike) -> None:
        raise UnsupportedOperationError(f"Cannot open {path} for writing on a read-only mount!")

    def __enter__(self):
        return self

    @abstractmethod
    def __exit__(self, exception_type, exception_value, exception_traceback):
        pass
