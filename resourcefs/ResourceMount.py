import builtins
import dataclasses
import functools
import logging
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional, Union

from .attributes import BASIC_ATTRIBUTE_NAMES, ResourceAttributes
from .index import ResourceIndex
from .locators import Locator, as_locator
from .MountSource import MountSource, PathLike
from .ReadChannel import ReadChannel
from .ResourcePath import SEPARATOR, ResourcePath
from .utils import ClosedResourceError, NotADirectoryResourceError, NotAFileError, overrides

if TYPE_CHECKING:
    from .registry import MountRegistry

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class FileStoreInfo:
    # fmt: off
    name              : str
    type              : str
    read_only         : bool
    total_space       : int
    usable_space      : int
    unallocated_space : int
    # fmt: on


class ResourceMount(MountSource):
    """
    One named, read-only hierarchy built from a list of locators.

    The index is built synchronously in the constructor. Failures to query metadata of any locator abort
    the construction with an IndexingError. After construction, the mount never changes.

    A mount created by a MountRegistry stays open as long as it is registered under its name. A mount
    created standalone stays open until it is closed. Reading from a closed mount raises ClosedResourceError,
    channels opened before stay usable.

    Example:

        with ResourceMount("libs", ["https://repo.example.org/a/b/x.jar"]) as mount:
            mount.list_children("/a")      # [ResourcePath('libs', '/a/b')]
            with mount.open("/a/b/x.jar") as file:
                print(file.read())
    """

    FILE_STORE_NAME = "default"
    SUPPORTED_FILE_ATTRIBUTE_VIEWS = frozenset({"basic"})

    def __init__(
        self,
        name: str,
        locators: Iterable[Union[Locator, str]],
        registry: Optional['MountRegistry'] = None,
        **options,
    ) -> None:
        """
        locators : Locator objects or URL strings, which will be opened with fsspec.
        options  : collisionPolicy : One of 'ignore', 'warn', 'raise'. See ResourceIndex.
        """
        if not name:
            raise ValueError("Mount name must not be empty!")
        self.name = name
        self.locators: tuple[Locator, ...] = tuple(as_locator(locator) for locator in locators)
        self.index = ResourceIndex(name, self.locators, collisionPolicy=options.get('collisionPolicy', 'warn'))
        self.root = self.index.root
        self._registry = registry
        self._closed = False

    @property
    def is_open(self) -> bool:
        if self._closed:
            return False
        return self._registry is None or self._registry.get(self.name) is self

    @property
    def is_read_only(self) -> bool:
        return True

    def _check_open(self) -> None:
        if not self.is_open:
            raise ClosedResourceError(f"Mount '{self.name}' is not mounted anymore!")

    @overrides(MountSource)
    def get_path(self, first: str, *more: str) -> ResourcePath:
        if first is None:
            raise TypeError("Path must not be None!")
        return ResourcePath(self.name, SEPARATOR.join([first, *more]))

    def _resolve(self, path: PathLike) -> ResourcePath:
        if isinstance(path, ResourcePath):
            if path.mountName != self.name:
                raise ValueError(f"Path {path} does not belong to mount '{self.name}'!")
            return path
        return self.get_path(path)

    @overrides(MountSource)
    def is_immutable(self) -> bool:
        return True

    def root_paths(self) -> builtins.list[ResourcePath]:
        self._check_open()
        return [self.root]

    @overrides(MountSource)
    def lookup(self, path: PathLike) -> Optional[ResourceAttributes]:
        self._check_open()
        return self.index.get(self._resolve(path))

    @overrides(MountSource)
    def attributes_of(self, path: PathLike) -> ResourceAttributes:
        self._check_open()
        return self.index[self._resolve(path)]

    @overrides(MountSource)
    def list_children(self, path: PathLike) -> builtins.list[ResourcePath]:
        directory = self.attributes_of(path)
        if not directory.is_directory:
            raise NotADirectoryResourceError(f"Not a directory: {directory.path}")
        return sorted(self.index.children(directory.path), key=functools.cmp_to_key(ResourcePath.compare))

    @overrides(MountSource)
    def open(self, path: PathLike) -> ReadChannel:
        attributes = self.attributes_of(path)
        if not attributes.is_regular_file:
            raise NotAFileError(f"Path is not a file: {attributes.path}")
        logger.debug("Open %s", attributes.path)
        return ReadChannel(attributes)

    def is_same_file(self, pathA: PathLike, pathB: PathLike) -> bool:
        """Two paths denote the same file if they belong to the same mount and have identical segments."""
        self._check_open()
        pathA = pathA if isinstance(pathA, ResourcePath) else self.get_path(pathA)
        pathB = pathB if isinstance(pathB, ResourcePath) else self.get_path(pathB)
        return pathA == pathB

    @overrides(MountSource)
    def check_access(self, path: PathLike, mode: int = os.F_OK) -> None:
        self._check_open()
        super().check_access(path, mode)

    @property
    def total_size(self) -> int:
        self._check_open()
        return self.index.total_size

    def file_store(self) -> FileStoreInfo:
        self._check_open()
        # fmt: off
        return FileStoreInfo(
            name              = ResourceMount.FILE_STORE_NAME,
            type              = ResourceMount.FILE_STORE_NAME,
            read_only         = True,
            total_space       = self.index.total_size,
            usable_space      = 0,
            unallocated_space = 0,
        )
        # fmt: on

    @overrides(MountSource)
    def statfs(self) -> dict[str, Any]:
        self._check_open()
        blockSize = 512
        return {
            'f_bsize': blockSize,
            'f_frsize': blockSize,
            'f_blocks': -(self.index.total_size // -blockSize),
            'f_bfree': 0,
            'f_bavail': 0,
            'f_files': len(self.index),
            'f_ffree': 0,
            'f_favail': 0,
            'f_namemax': 255,
        }

    def supported_file_attribute_views(self) -> frozenset:
        self._check_open()
        return ResourceMount.SUPPORTED_FILE_ATTRIBUTE_VIEWS

    def read_attributes(self, path: PathLike, attributes: str = "*") -> dict[str, Any]:
        """
        Returns the requested attributes as a dictionary. 'attributes' is of the form [view:]names, where
        names is '*' or a comma-separated list of attribute names, e.g., 'basic:size,lastModifiedTime'.
        Views other than 'basic' are not supported and yield an empty dictionary.
        """
        values = self.attributes_of(path).as_dict()

        view, separator, names = attributes.partition(':')
        if not separator:
            view, names = 'basic', view
        if view not in ResourceMount.SUPPORTED_FILE_ATTRIBUTE_VIEWS:
            return {}

        requested = [name.strip() for name in names.split(',') if name.strip()]
        if '*' in requested:
            return values
        for name in requested:
            if name not in BASIC_ATTRIBUTE_NAMES:
                raise ValueError(f"Unknown attribute '{name}' for view '{view}'!")
        return {name: values[name] for name in requested}

    def close(self) -> None:
        """Unregisters the mount from its registry. Calling it more than once has no effect."""
        if self._closed:
            return
        self._closed = True
        if self._registry is not None:
            self._registry.unmount(self.name, self)

    @overrides(MountSource)
    def __exit__(self, exception_type, exception_value, exception_traceback):
        self.close()

    def __repr__(self) -> str:
        return f"ResourceMount({self.name!r}, {len(self.locators)} locators, open={self.is_open})"
